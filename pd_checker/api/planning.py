"""
Planning rights facade.

Orchestrates fact lookup, rules evaluation and summary generation into
the single result returned to HTTP and CLI callers.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from pd_checker.facts.provider import Coordinates, FactProvider, FactProviderError
from pd_checker.rules import (
    CheckStatus,
    PlanningCheck,
    PlanningRulesEngine,
)


logger = logging.getLogger(__name__)

# Confidence reported when no facts could be obtained
FALLBACK_CONFIDENCE = 75.0
FALLBACK_LOCAL_AUTHORITY = "Unknown Council"
FALLBACK_SUMMARY = (
    "Unable to access all planning data sources. This result has lower "
    "confidence. We recommend checking with your local planning authority "
    "for definitive guidance."
)


@dataclass
class PlanningResult:
    """
    Final answer for one address.

    `is_fallback` marks results built without any property facts.
    """

    address: str
    has_permitted_development_rights: bool
    confidence: float
    local_authority: str
    summary: str
    checks: list[PlanningCheck] = field(default_factory=list)
    coordinates: Optional[Coordinates] = None
    sources: list[str] = field(default_factory=list)
    is_fallback: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "address": self.address,
            "coordinates": (
                {"latitude": self.coordinates[0], "longitude": self.coordinates[1]}
                if self.coordinates else None
            ),
            "has_permitted_development_rights": self.has_permitted_development_rights,
            "confidence": self.confidence,
            "local_authority": self.local_authority,
            "checks": [c.to_dict() for c in self.checks],
            "summary": self.summary,
            "sources": self.sources,
            "is_fallback": self.is_fallback,
        }


def build_fallback_result(
    address: str,
    engine: Optional[PlanningRulesEngine] = None,
    coordinates: Optional[Coordinates] = None,
) -> PlanningResult:
    """
    Conservative result for an address with no obtainable facts.

    PD rights are assumed, confidence is capped, and every registered
    rule is reported as unverified.
    """
    engine = engine or PlanningRulesEngine()

    checks = [
        PlanningCheck(
            type="Data Availability",
            status=CheckStatus.WARNING,
            description=(
                "Limited planning data available for this address. "
                "Some restrictions may not be detected."
            ),
            low_confidence=True,
        )
    ]
    for rule in engine.rules:
        checks.append(PlanningCheck(
            type=rule.name,
            status=CheckStatus.WARNING,
            description=(
                f"Unable to verify {rule.name} status - check with local planning authority."
            ),
            low_confidence=True,
        ))

    return PlanningResult(
        address=address,
        has_permitted_development_rights=True,
        confidence=FALLBACK_CONFIDENCE,
        local_authority=FALLBACK_LOCAL_AUTHORITY,
        summary=FALLBACK_SUMMARY,
        checks=checks,
        coordinates=coordinates,
        is_fallback=True,
    )


def check_planning_rights(
    provider: FactProvider,
    address: str,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    engine: Optional[PlanningRulesEngine] = None,
) -> PlanningResult:
    """
    Check whether a property retains Permitted Development rights.

    This is the main entry point for callers.

    Args:
        provider: Source of property facts
        address: Free-text address to check
        latitude: Optional latitude, used only together with longitude
        longitude: Optional longitude, used only together with latitude
        engine: Rules engine to use. Defaults to the built-in rule set.

    Returns:
        PlanningResult, a fallback result if no facts could be obtained

    Raises:
        ValueError: If the address is empty
    """
    if not address or not address.strip():
        raise ValueError("Address is required")

    address = address.strip()
    engine = engine or PlanningRulesEngine()

    coordinates = None
    if latitude is not None and longitude is not None:
        coordinates = (latitude, longitude)

    logger.info("Checking planning rights for: %s", address)

    try:
        lookup = provider.lookup(address, coordinates)
    except FactProviderError as e:
        logger.warning("Falling back for %s: %s", address, e)
        return build_fallback_result(address, engine, coordinates)

    facts = lookup.facts
    evaluation = engine.evaluate(facts)

    return PlanningResult(
        address=facts.address,
        has_permitted_development_rights=evaluation.has_permitted_development_rights,
        confidence=min(lookup.confidence, evaluation.confidence),
        local_authority=facts.local_authority,
        summary=engine.generate_summary(facts, evaluation),
        checks=evaluation.checks,
        coordinates=lookup.coordinates or coordinates,
        sources=lookup.sources,
    )
