"""
Planning Rules Engine - Default Rule Set.

Built-in rules covering the designations that remove or restrict
householder Permitted Development rights in England.
"""

from .models import (
    PlanningRule,
    PropertyFacts,
    PropertyType,
    RuleResult,
    RuleSeverity,
    status_for,
)


def _flag_rule(
    rule_id: str,
    name: str,
    description: str,
    severity: RuleSeverity,
    priority: int,
    flag: str,
    applies_message: str,
    clear_message: str,
    impact_applies: float,
    impact_clear: float,
    details: str,
) -> PlanningRule:
    """Build a rule that fires on a single constraint flag."""

    def evaluate(facts: PropertyFacts) -> RuleResult:
        applies = bool(getattr(facts.constraints, flag, False))
        return RuleResult(
            applies=applies,
            status=status_for(severity, applies),
            message=applies_message if applies else clear_message,
            confidence_impact=impact_applies if applies else impact_clear,
            details=details if applies else None,
        )

    return PlanningRule(
        id=rule_id,
        name=name,
        description=description,
        severity=severity,
        priority=priority,
        evaluate=evaluate,
    )


def _evaluate_property_type(facts: PropertyFacts) -> RuleResult:
    """Flats and maisonettes lose most householder PD rights."""
    is_flat = facts.property_type in (PropertyType.FLAT, PropertyType.MAISONETTE)

    if not is_flat:
        return RuleResult(
            applies=False,
            status=status_for(RuleSeverity.BLOCKING, False),
            message="Standard residential dwelling - full Permitted Development rights typically apply",
            confidence_impact=+2.0,
        )

    return RuleResult(
        applies=True,
        status=status_for(RuleSeverity.BLOCKING, True),
        message=(
            f"Property is a {facts.property_type.value} - Permitted Development rights "
            f"are severely limited for flats and maisonettes; planning permission required"
        ),
        confidence_impact=-1.0,
        details=(
            "Flats and maisonettes have very limited permitted development rights. "
            "Most alterations and extensions require planning permission."
        ),
    )


# --- Blocking rules (remove PD rights) ---

ARTICLE_4_DIRECTION = _flag_rule(
    rule_id="article4-direction",
    name="Article 4 Direction",
    description="Article 4 Directions remove specific Permitted Development rights",
    severity=RuleSeverity.BLOCKING,
    priority=100,
    flag="article_4_direction",
    applies_message=(
        "Article 4 Direction in place - removes some or all Permitted Development "
        "rights; planning permission required"
    ),
    clear_message=(
        "No Article 4 Directions found that would remove Permitted Development "
        "rights for this property"
    ),
    impact_applies=-2.0,
    impact_clear=+1.0,
    details=(
        "Article 4 Directions are made by local planning authorities to remove "
        "permitted development rights in specific areas where normal planning "
        "controls are needed to protect local amenity or the well-being of the area."
    ),
)

LISTED_BUILDING = _flag_rule(
    rule_id="listed-building",
    name="Listed Building",
    description="Listed buildings require Listed Building Consent for alterations",
    severity=RuleSeverity.BLOCKING,
    priority=95,
    flag="listed_building",
    applies_message=(
        "Property is listed or within the curtilage of a listed building - "
        "Listed Building Consent required"
    ),
    clear_message="Property is not listed and not within the curtilage of a listed building",
    impact_applies=-3.0,
    impact_clear=+1.5,
    details=(
        "Listed buildings are protected by law and any alterations, extensions or "
        "demolitions require Listed Building Consent in addition to planning permission."
    ),
)

PROPERTY_TYPE_FLAT = PlanningRule(
    id="property-type-flat",
    name="Property Type - Flat/Maisonette",
    description="Flats and maisonettes have severely limited Permitted Development rights",
    severity=RuleSeverity.BLOCKING,
    priority=90,
    evaluate=_evaluate_property_type,
)

# --- Restrictive rules (limit but don't remove PD rights) ---

WORLD_HERITAGE_SITE = _flag_rule(
    rule_id="world-heritage-site",
    name="World Heritage Site",
    description="World Heritage Sites have the highest level of protection",
    severity=RuleSeverity.RESTRICTIVE,
    priority=85,
    flag="world_heritage",
    applies_message="Property is within a World Heritage Site - exceptional planning controls apply",
    clear_message="Property is not within a World Heritage Site",
    impact_applies=-2.5,
    impact_clear=+0.5,
    details=(
        "World Heritage Sites have exceptional planning controls to preserve their "
        "outstanding universal value. Most development requires planning permission."
    ),
)

CONSERVATION_AREA = _flag_rule(
    rule_id="conservation-area",
    name="Conservation Area",
    description="Conservation areas have additional planning controls",
    severity=RuleSeverity.RESTRICTIVE,
    priority=80,
    flag="conservation_area",
    applies_message=(
        "Property is located within a designated Conservation Area - additional "
        "planning restrictions apply"
    ),
    clear_message="Property is not located within a designated Conservation Area",
    impact_applies=-1.5,
    impact_clear=+0.5,
    details=(
        "Conservation areas have additional planning controls. Some permitted "
        "development rights are removed, particularly for roof extensions, "
        "cladding, and demolition."
    ),
)

NATIONAL_PARK = _flag_rule(
    rule_id="national-park",
    name="National Park",
    description="National Parks have enhanced planning controls",
    severity=RuleSeverity.RESTRICTIVE,
    priority=75,
    flag="national_park",
    applies_message="Property is within a National Park - enhanced planning controls apply",
    clear_message="Property is not within a National Park",
    impact_applies=-1.0,
    impact_clear=+0.5,
    details=(
        "National Parks have enhanced planning controls to protect landscape "
        "character. Some permitted development rights are restricted."
    ),
)

AONB = _flag_rule(
    rule_id="aonb",
    name="Area of Outstanding Natural Beauty",
    description="AONBs have landscape protection measures",
    severity=RuleSeverity.RESTRICTIVE,
    priority=70,
    flag="aonb",
    applies_message=(
        "Property is within an Area of Outstanding Natural Beauty - landscape "
        "protection measures apply"
    ),
    clear_message="Property is not within an Area of Outstanding Natural Beauty",
    impact_applies=-1.0,
    impact_clear=+0.5,
    details=(
        "Areas of Outstanding Natural Beauty have planning policies to conserve and "
        "enhance landscape character. Some permitted development may be restricted."
    ),
)

# --- Advisory rules (may affect specific types of development) ---

TREE_PRESERVATION_ORDER = _flag_rule(
    rule_id="tree-preservation-order",
    name="Tree Preservation Order",
    description="TPOs protect important trees and may affect development",
    severity=RuleSeverity.ADVISORY,
    priority=60,
    flag="tpo",
    applies_message="Tree Preservation Order may affect development near protected trees",
    clear_message="No Tree Preservation Orders identified",
    impact_applies=-0.5,
    impact_clear=+0.2,
    details=(
        "Tree Preservation Orders protect important trees. Development affecting "
        "protected trees requires consent from the local planning authority."
    ),
)

FLOOD_RISK_ZONE = _flag_rule(
    rule_id="flood-zone",
    name="Flood Risk Zone",
    description="Flood zones may have development restrictions",
    severity=RuleSeverity.ADVISORY,
    priority=50,
    flag="flood_zone",
    applies_message="Property may be in a flood risk area - additional considerations may apply",
    clear_message="No significant flood risk identified",
    impact_applies=-0.5,
    impact_clear=+0.2,
    details=(
        "Properties in flood risk areas may have restrictions on certain types of "
        "development, particularly extensions and outbuildings."
    ),
)


# Registration order; the engine sorts by priority
DEFAULT_RULES: tuple[PlanningRule, ...] = (
    ARTICLE_4_DIRECTION,
    LISTED_BUILDING,
    PROPERTY_TYPE_FLAT,
    CONSERVATION_AREA,
    WORLD_HERITAGE_SITE,
    NATIONAL_PARK,
    AONB,
    TREE_PRESERVATION_ORDER,
    FLOOD_RISK_ZONE,
)


def get_default_rules() -> list[PlanningRule]:
    """Return a fresh list of the built-in rules."""
    return list(DEFAULT_RULES)
