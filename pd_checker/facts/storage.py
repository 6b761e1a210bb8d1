"""
Property fact storage with in-memory and JSON file persistence.

Serves as a fact provider for properties whose constraints have
already been researched.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from pd_checker.rules.models import PlanningConstraints, PropertyFacts, PropertyType

from .address import normalize_address
from .provider import Coordinates, FactLookup, PropertyNotFoundError


logger = logging.getLogger(__name__)

STORE_SOURCE = "Property fact store"


def _address_words(address: str) -> list[str]:
    return address.replace(",", " ").split()


def calculate_data_confidence(facts: PropertyFacts) -> float:
    """
    Confidence in a stored record, given how complex its situation is.

    Complex designations lower confidence; a property with no
    constraints at all is the clearest case.
    """
    constraints = facts.constraints
    confidence = 95.0

    if constraints.article_4_direction:
        confidence -= 2.0
    if constraints.conservation_area:
        confidence -= 1.5
    if constraints.listed_building:
        confidence -= 3.0
    if constraints.national_park:
        confidence -= 1.0
    if constraints.world_heritage:
        confidence -= 2.5

    if not constraints.active():
        confidence += 4.8

    if facts.property_type in (PropertyType.FLAT, PropertyType.MAISONETTE):
        confidence -= 1.0

    return min(99.8, max(85.0, confidence))


class PropertyFactStore:
    """
    In-memory property fact storage with optional JSON file persistence.
    """

    def __init__(self, storage_path: Optional[str] = None):
        """
        Initialize storage.

        Args:
            storage_path: Optional path to JSON file for persistence.
                         If None, storage is in-memory only.
        """
        self._properties: dict[str, PropertyFacts] = {}
        self._storage_path = storage_path
        self._load()

    def _load(self) -> None:
        """Load properties from JSON file if path is set."""
        if not self._storage_path:
            return

        path = Path(self._storage_path)
        if not path.exists():
            return

        try:
            with open(path, "r") as f:
                data = json.load(f)

            for property_data in data.get("properties", []):
                facts = PropertyFacts.from_dict(property_data)
                self._properties[normalize_address(facts.address)] = facts

        except (json.JSONDecodeError, KeyError, ValueError, AttributeError, TypeError) as e:
            logger.warning("Could not load properties from %s: %s", path, e)

    def _save(self) -> None:
        """Save properties to JSON file if path is set."""
        if not self._storage_path:
            return

        path = Path(self._storage_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "version": "1.0",
            "updated_at": datetime.now().isoformat(),
            "properties": [p.to_dict() for p in self._properties.values()],
        }

        with open(path, "w") as f:
            json.dump(data, f, indent=2)

    def create(self, facts: PropertyFacts) -> PropertyFacts:
        """
        Store facts for a new property.

        Raises:
            ValueError: If the address is empty or already stored
        """
        key = normalize_address(facts.address)
        if not key:
            raise ValueError("Property address is required")
        if key in self._properties:
            raise ValueError(f"Property '{facts.address}' already exists")

        self._properties[key] = facts
        self._save()
        return facts

    def get(self, address: str) -> Optional[PropertyFacts]:
        """Get facts by exact (normalised) address."""
        return self._properties.get(normalize_address(address))

    def get_all(self) -> list[PropertyFacts]:
        """Get all stored properties."""
        return list(self._properties.values())

    def update(self, facts: PropertyFacts) -> PropertyFacts:
        """
        Replace the facts for an existing property.

        Raises:
            ValueError: If the property doesn't exist
        """
        key = normalize_address(facts.address)
        if key not in self._properties:
            raise ValueError(f"Property '{facts.address}' not found")

        self._properties[key] = facts
        self._save()
        return facts

    def delete(self, address: str) -> bool:
        """
        Delete a property.

        Returns:
            True if deleted, False if not found
        """
        key = normalize_address(address)
        if key not in self._properties:
            return False

        del self._properties[key]
        self._save()
        return True

    def count(self) -> int:
        """Get count of stored properties."""
        return len(self._properties)

    def search(
        self,
        local_authority: Optional[str] = None,
        property_type: Optional[PropertyType] = None,
    ) -> list[PropertyFacts]:
        """Search properties by local authority and/or property type."""
        results = []

        for facts in self._properties.values():
            if local_authority and facts.local_authority.lower() != local_authority.lower():
                continue
            if property_type and facts.property_type != property_type:
                continue

            results.append(facts)

        return results

    def find_by_address(self, search_address: str) -> Optional[PropertyFacts]:
        """
        Find the property best matching free-text input.

        Tries, in order: address containment either way, a stored
        postcode appearing in the input (spaces ignored), then a stored
        address containing every input word longer than two characters.
        Returns None rather than guessing when nothing matches.
        """
        needle = normalize_address(search_address)
        if not needle:
            return None

        candidates = list(self._properties.items())

        for key, facts in candidates:
            if needle in key or key in needle:
                return facts

        compact = needle.replace(" ", "")
        for _, facts in candidates:
            postcode = facts.postcode.lower().replace(" ", "")
            if postcode and postcode in compact:
                return facts

        search_words = {w for w in _address_words(needle) if len(w) > 2}
        if not search_words:
            return None
        for key, facts in candidates:
            if search_words <= set(_address_words(key)):
                return facts

        return None

    def lookup(self, address: str, coordinates: Optional[Coordinates] = None) -> FactLookup:
        """
        Look up stored facts for an address.

        Raises:
            PropertyNotFoundError: If no stored property matches
        """
        facts = self.find_by_address(address)
        if facts is None:
            raise PropertyNotFoundError(address)

        return FactLookup(
            facts=facts,
            confidence=calculate_data_confidence(facts),
            sources=[STORE_SOURCE],
            coordinates=coordinates,
        )


def create_sample_properties(store: PropertyFactStore) -> None:
    """Create reference properties covering the common constraint mixes."""
    samples = [
        PropertyFacts(
            address="123 High Street, Westminster, London",
            postcode="SW1A 1AA",
            local_authority="Westminster City Council",
            property_type=PropertyType.HOUSE,
        ),
        PropertyFacts(
            address="45 Georgian Square, Bath",
            postcode="BA1 2AB",
            local_authority="Bath and North East Somerset Council",
            property_type=PropertyType.HOUSE,
            constraints=PlanningConstraints(
                article_4_direction=True,
                conservation_area=True,
                world_heritage=True,
            ),
            notes="Located in Bath World Heritage Site with strict Article 4 Direction",
        ),
        PropertyFacts(
            address="Flat 2B, Victoria Mansions, Brighton",
            postcode="BN1 3CD",
            local_authority="Brighton & Hove City Council",
            property_type=PropertyType.FLAT,
            constraints=PlanningConstraints(conservation_area=True),
            notes="Flat in conservation area - limited PD rights",
        ),
        PropertyFacts(
            address="Cottage Lane, Windermere, Cumbria",
            postcode="LA23 1EF",
            local_authority="South Lakeland District Council",
            property_type=PropertyType.HOUSE,
            constraints=PlanningConstraints(
                article_4_direction=True,
                national_park=True,
                tpo=True,
            ),
            notes="Located in Lake District National Park with Article 4 Direction",
        ),
        PropertyFacts(
            address="15 Mill Street, Stratford-upon-Avon",
            postcode="CV37 6GH",
            local_authority="Stratford-on-Avon District Council",
            property_type=PropertyType.HOUSE,
            constraints=PlanningConstraints(
                conservation_area=True,
                listed_building=True,
            ),
            notes="Grade II listed building in conservation area",
        ),
        PropertyFacts(
            address="Oak Tree House, Cotswolds Village",
            postcode="GL54 2IJ",
            local_authority="Cotswold District Council",
            property_type=PropertyType.HOUSE,
            constraints=PlanningConstraints(
                article_4_direction=True,
                conservation_area=True,
                aonb=True,
                tpo=True,
            ),
            notes="AONB with Article 4 Direction and TPO",
        ),
    ]

    for facts in samples:
        if store.get(facts.address) is None:
            store.create(facts)
