"""
Planning Constraint Rules Engine.

Deterministic evaluation of a property's planning constraints into a
Permitted Development rights verdict.

DISCLAIMER: Verdicts are indicative and only as good as the facts
supplied. They do NOT replace a Lawful Development Certificate or
advice from the local planning authority.
"""

from .models import (
    CheckStatus,
    PlanningCheck,
    PlanningConstraints,
    PlanningRule,
    PropertyFacts,
    PropertyType,
    RESTRICTIONS_NOTE,
    RuleEvaluation,
    RuleResult,
    RuleSeverity,
    RulesEngineResult,
    status_for,
)
from .registry import (
    DEFAULT_RULES,
    get_default_rules,
)
from .engine import (
    BASE_CONFIDENCE,
    MAX_CONFIDENCE,
    MIN_CONFIDENCE,
    PlanningRulesEngine,
)
from .summary import (
    CONSULT_AUTHORITY_SENTENCE,
    FULL_RIGHTS_SUMMARY,
    generate_summary,
)

__all__ = [
    # Models
    "CheckStatus",
    "PlanningCheck",
    "PlanningConstraints",
    "PlanningRule",
    "PropertyFacts",
    "PropertyType",
    "RESTRICTIONS_NOTE",
    "RuleEvaluation",
    "RuleResult",
    "RuleSeverity",
    "RulesEngineResult",
    "status_for",
    # Registry
    "DEFAULT_RULES",
    "get_default_rules",
    # Engine
    "BASE_CONFIDENCE",
    "MAX_CONFIDENCE",
    "MIN_CONFIDENCE",
    "PlanningRulesEngine",
    # Summary
    "CONSULT_AUTHORITY_SENTENCE",
    "FULL_RIGHTS_SUMMARY",
    "generate_summary",
]
