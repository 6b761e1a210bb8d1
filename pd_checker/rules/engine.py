"""
Planning Rules Engine - Evaluation.

Runs every registered rule against a property's facts and aggregates
the outcomes into a PD-rights verdict, a bounded confidence score and
an ordered list of checks.
"""

import logging
from typing import Iterable, Optional

from .models import (
    CheckStatus,
    PlanningCheck,
    PlanningRule,
    PropertyFacts,
    RuleEvaluation,
    RESTRICTIONS_NOTE,
    RuleSeverity,
    RulesEngineResult,
)
from .registry import DEFAULT_RULES
from .summary import generate_summary


logger = logging.getLogger(__name__)

# Confidence policy
BASE_CONFIDENCE = 95.0
MIN_CONFIDENCE = 75.0
MAX_CONFIDENCE = 99.8


def _sort_rules(rules: Iterable[PlanningRule]) -> list[PlanningRule]:
    # sorted() is stable, so equal priorities keep registration order
    return sorted(rules, key=lambda rule: -rule.priority)


class PlanningRulesEngine:
    """
    Evaluates planning rules in descending priority order.

    The rule list is sorted once at construction. `add_rule` may only be
    called before the engine is shared; `evaluate` never mutates state.
    """

    def __init__(self, rules: Optional[Iterable[PlanningRule]] = None):
        """
        Initialize the engine.

        Args:
            rules: Rules to evaluate. Defaults to the built-in rule set.
        """
        if rules is None:
            rules = DEFAULT_RULES
        self._rules = _sort_rules(rules)

    @property
    def rules(self) -> tuple[PlanningRule, ...]:
        """Registered rules in evaluation order."""
        return tuple(self._rules)

    def add_rule(self, rule: PlanningRule) -> None:
        """Register an additional rule."""
        self._rules = _sort_rules([*self._rules, rule])

    def get_rules_by_severity(self, severity: RuleSeverity) -> list[PlanningRule]:
        """Get registered rules of one severity, in evaluation order."""
        return [rule for rule in self._rules if rule.severity == severity]

    def evaluate(self, facts: PropertyFacts) -> RulesEngineResult:
        """
        Evaluate every rule against a property.

        Args:
            facts: Normalised facts for the property

        Returns:
            RulesEngineResult with verdict, confidence and checks
        """
        evaluations: list[RuleEvaluation] = []
        primary_reasons: list[str] = []
        running_confidence = BASE_CONFIDENCE
        has_pd_rights = True

        for rule in self._rules:
            result = rule.evaluate(facts)
            evaluations.append(RuleEvaluation(rule=rule, result=result))
            running_confidence += result.confidence_impact

            logger.debug(
                "Rule %s: applies=%s status=%s impact=%+.1f",
                rule.id, result.applies, result.status.value, result.confidence_impact,
            )

            if (
                rule.severity == RuleSeverity.BLOCKING
                and result.applies
                and result.status == CheckStatus.FAIL
            ):
                has_pd_rights = False
                primary_reasons.append(rule.name)

        checks = [
            PlanningCheck(
                type=e.rule.name,
                status=e.result.status,
                description=e.result.message,
            )
            for e in evaluations
            if e.result.applies or e.result.status == CheckStatus.PASS
        ]

        confidence = max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, running_confidence))

        if has_pd_rights and any(
            e.result.applies and e.rule.severity == RuleSeverity.RESTRICTIVE
            for e in evaluations
        ):
            primary_reasons.append(RESTRICTIONS_NOTE)

        return RulesEngineResult(
            has_permitted_development_rights=has_pd_rights,
            confidence=confidence,
            primary_reasons=primary_reasons,
            checks=checks,
            evaluations=evaluations,
            raw_confidence=running_confidence,
        )

    def generate_summary(self, facts: PropertyFacts, result: RulesEngineResult) -> str:
        """Generate a one-paragraph explanation of an evaluation."""
        return generate_summary(facts, result)
