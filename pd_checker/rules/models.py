"""
Planning Rules Engine - Data Models.

Defines the property facts consumed by the engine, the rule contract,
and the structured results the engine produces.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional


class PropertyType(Enum):
    """Property types recognised by the planning rules."""

    HOUSE = "house"
    FLAT = "flat"
    MAISONETTE = "maisonette"
    COMMERCIAL = "commercial"


class RuleSeverity(Enum):
    """Escalation tier of a planning rule."""

    BLOCKING = "blocking"  # Firing removes PD rights
    RESTRICTIVE = "restrictive"  # Caveat, PD rights retained
    ADVISORY = "advisory"  # Affects specific development types only
    INFORMATIONAL = "informational"


# Appended to primary reasons when only restrictive rules apply
RESTRICTIONS_NOTE = "Some restrictions may apply"


class CheckStatus(Enum):
    """Outcome of a single planning check."""

    PASS = "pass"
    FAIL = "fail"
    WARNING = "warning"


def status_for(severity: RuleSeverity, applies: bool) -> CheckStatus:
    """
    Status a rule must report for the given severity.

    Blocking rules that apply fail, restrictive and advisory rules that
    apply warn, and anything that does not apply passes.
    """
    if not applies:
        return CheckStatus.PASS
    if severity == RuleSeverity.BLOCKING:
        return CheckStatus.FAIL
    if severity in (RuleSeverity.RESTRICTIVE, RuleSeverity.ADVISORY):
        return CheckStatus.WARNING
    return CheckStatus.PASS


@dataclass(frozen=True)
class PlanningConstraints:
    """
    Designated planning constraints affecting a property.

    Every flag defaults to False: a constraint that could not be
    determined upstream is reported as absent.
    """

    article_4_direction: bool = False
    conservation_area: bool = False
    listed_building: bool = False
    national_park: bool = False
    aonb: bool = False  # Area of Outstanding Natural Beauty
    world_heritage: bool = False
    tpo: bool = False  # Tree Preservation Order
    flood_zone: bool = False

    def active(self) -> list[str]:
        """Names of the constraints that are set."""
        return [name for name, value in self.to_dict().items() if value]

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "article_4_direction": self.article_4_direction,
            "conservation_area": self.conservation_area,
            "listed_building": self.listed_building,
            "national_park": self.national_park,
            "aonb": self.aonb,
            "world_heritage": self.world_heritage,
            "tpo": self.tpo,
            "flood_zone": self.flood_zone,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "PlanningConstraints":
        """
        Create from dictionary representation, treating missing flags as False.

        Raises:
            ValueError: If data is neither None nor a mapping
        """
        if data is None:
            data = {}
        elif not isinstance(data, dict):
            raise ValueError(f"Constraints must be an object, got {type(data).__name__}")
        return cls(
            article_4_direction=bool(data.get("article_4_direction")),
            conservation_area=bool(data.get("conservation_area")),
            listed_building=bool(data.get("listed_building")),
            national_park=bool(data.get("national_park")),
            aonb=bool(data.get("aonb")),
            world_heritage=bool(data.get("world_heritage")),
            tpo=bool(data.get("tpo")),
            flood_zone=bool(data.get("flood_zone")),
        )


@dataclass(frozen=True)
class PropertyFacts:
    """
    Normalised facts about a single property.

    Built once per check by a fact provider and consumed by the rules
    engine. Providers with a different upstream schema must map into
    this record at their boundary.
    """

    address: str
    postcode: str = ""
    local_authority: str = ""
    property_type: PropertyType = PropertyType.HOUSE
    constraints: PlanningConstraints = field(default_factory=PlanningConstraints)
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "address": self.address,
            "postcode": self.postcode,
            "local_authority": self.local_authority,
            "property_type": self.property_type.value,
            "constraints": self.constraints.to_dict(),
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PropertyFacts":
        """Create from dictionary representation."""
        return cls(
            address=data.get("address", ""),
            postcode=data.get("postcode", ""),
            local_authority=data.get("local_authority", ""),
            property_type=PropertyType(data.get("property_type") or "house"),
            constraints=PlanningConstraints.from_dict(data.get("constraints")),
            notes=data.get("notes") or None,
        )


@dataclass(frozen=True)
class RuleResult:
    """Outcome of evaluating one rule against one property."""

    applies: bool
    status: CheckStatus
    message: str
    confidence_impact: float
    details: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "applies": self.applies,
            "status": self.status.value,
            "message": self.message,
            "confidence_impact": self.confidence_impact,
            "details": self.details,
        }


@dataclass(frozen=True)
class PlanningRule:
    """
    A named, prioritised planning policy.

    `evaluate` must be a pure function of the facts. Higher priority
    rules are evaluated and listed first.
    """

    id: str
    name: str
    description: str
    severity: RuleSeverity
    priority: int
    evaluate: Callable[[PropertyFacts], RuleResult] = field(compare=False, repr=False)

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "severity": self.severity.value,
            "priority": self.priority,
        }


@dataclass(frozen=True)
class RuleEvaluation:
    """A rule paired with the result it produced."""

    rule: PlanningRule
    result: RuleResult


@dataclass(frozen=True)
class PlanningCheck:
    """A single check as shown to the user."""

    type: str
    status: CheckStatus
    description: str
    low_confidence: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "type": self.type,
            "status": self.status.value,
            "description": self.description,
            "low_confidence": self.low_confidence,
        }


@dataclass
class RulesEngineResult:
    """
    Aggregate verdict for one property.

    This is the main output of the rules engine.
    """

    has_permitted_development_rights: bool
    confidence: float  # Clamped to [75.0, 99.8]
    primary_reasons: list[str] = field(default_factory=list)
    checks: list[PlanningCheck] = field(default_factory=list)
    evaluations: list[RuleEvaluation] = field(default_factory=list)

    # Running total before clamping
    raw_confidence: float = 0.0

    @property
    def rule_results(self) -> list[RuleResult]:
        """Rule results in evaluation order."""
        return [evaluation.result for evaluation in self.evaluations]

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "has_permitted_development_rights": self.has_permitted_development_rights,
            "confidence": self.confidence,
            "primary_reasons": self.primary_reasons,
            "checks": [c.to_dict() for c in self.checks],
            "rule_results": [
                {"rule_id": e.rule.id, **e.result.to_dict()}
                for e in self.evaluations
            ],
        }
