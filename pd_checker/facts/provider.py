"""
Fact provider contract.

A fact provider turns a free-text address into a PropertyFacts record.
Providers own all network I/O, timeouts and retries; the rules engine
only ever sees the normalised record they return.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Optional, Protocol

from pd_checker.rules.models import PlanningConstraints, PropertyFacts, PropertyType

from .address import determine_property_type, extract_postcode


logger = logging.getLogger(__name__)

# Base confidence for facts assembled from live adapters
ADAPTER_BASE_CONFIDENCE = 85.0
MAX_PROVIDER_CONFIDENCE = 99.8

Coordinates = tuple[float, float]


class FactProviderError(Exception):
    """Raised when a provider cannot produce facts for an address."""


class PropertyNotFoundError(FactProviderError):
    """Raised when an address cannot be matched to a known property."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"No property found for address '{address}'")


@dataclass
class FactLookup:
    """
    Facts for one property plus the provider's own view of their quality.

    `confidence` is blended with the engine's confidence by the caller
    (the lower of the two wins).
    """

    facts: PropertyFacts
    confidence: float = MAX_PROVIDER_CONFIDENCE
    sources: list[str] = field(default_factory=list)
    coordinates: Optional[Coordinates] = None


class FactProvider(Protocol):
    """Anything that can look up facts for an address."""

    def lookup(self, address: str, coordinates: Optional[Coordinates] = None) -> FactLookup:
        ...


@dataclass
class AddressMatch:
    """A geocoded address."""

    address: str
    postcode: str
    local_authority: str
    coordinates: Optional[Coordinates] = None
    property_type: Optional[PropertyType] = None


class DesignationSource(Protocol):
    """
    One upstream designation lookup (council portal, open data, etc).

    `fetch` returns constraint flags keyed by PlanningConstraints field
    name; flags it cannot determine may be omitted or None.
    """

    name: str
    confidence_bonus: float

    def fetch(self, match: AddressMatch) -> dict[str, Optional[bool]]:
        ...


class AdapterFactProvider:
    """
    Assembles facts from a geocoder and a list of designation sources.

    A source that fails is logged and skipped, leaving its flags False.
    A source that answers adds its confidence bonus to the base.
    """

    def __init__(
        self,
        geocoder: Callable[[str], Optional[AddressMatch]],
        sources: Optional[list[DesignationSource]] = None,
    ):
        self._geocoder = geocoder
        self._sources = list(sources or [])

    def lookup(self, address: str, coordinates: Optional[Coordinates] = None) -> FactLookup:
        """
        Look up facts for an address.

        Raises:
            PropertyNotFoundError: If the geocoder cannot match the address
        """
        match = self._geocoder(address)
        if match is None:
            raise PropertyNotFoundError(address)

        if coordinates is not None:
            match = replace(match, coordinates=coordinates)

        flags = PlanningConstraints().to_dict()
        confidence = ADAPTER_BASE_CONFIDENCE
        sources: list[str] = []

        for source in self._sources:
            try:
                found = source.fetch(match)
            except Exception:
                logger.warning("Designation source %s failed for %s", source.name, address, exc_info=True)
                continue

            for name, value in found.items():
                if name not in flags:
                    logger.debug("Ignoring unknown constraint %r from %s", name, source.name)
                    continue
                flags[name] = flags[name] or bool(value)

            sources.append(source.name)
            confidence += source.confidence_bonus

        facts = PropertyFacts(
            address=match.address,
            postcode=match.postcode or extract_postcode(address) or "",
            local_authority=match.local_authority,
            property_type=match.property_type or determine_property_type(match.address),
            constraints=PlanningConstraints(**flags),
        )

        return FactLookup(
            facts=facts,
            confidence=min(MAX_PROVIDER_CONFIDENCE, confidence),
            sources=sources,
            coordinates=match.coordinates,
        )
