"""
Planning Rules Engine - Summary Generation.

Turns an engine result into the paragraph shown alongside the checks.
"""

from .models import RESTRICTIONS_NOTE, PropertyFacts, RuleSeverity, RulesEngineResult


FULL_RIGHTS_SUMMARY = (
    "This property retains full Permitted Development rights. No significant "
    "restrictions found that would prevent standard residential development "
    "under PD rights."
)

CONSULT_AUTHORITY_SENTENCE = (
    "Consult your local planning authority before proceeding with any development."
)


def generate_summary(facts: PropertyFacts, result: RulesEngineResult) -> str:
    """
    Summarise a rules engine result in a single paragraph.

    Args:
        facts: The facts the result was computed from
        result: Output of PlanningRulesEngine.evaluate

    Returns:
        Human-readable summary sentence(s)
    """
    if result.has_permitted_development_rights:
        restrictions = [
            e.rule.name.lower()
            for e in result.evaluations
            if e.result.applies and e.rule.severity == RuleSeverity.RESTRICTIVE
        ]

        if not restrictions:
            return FULL_RIGHTS_SUMMARY

        return (
            f"This property retains Permitted Development rights, though "
            f"{' and '.join(restrictions)} may apply additional considerations to "
            f"certain types of development. Standard residential PD rights are "
            f"generally available."
        )

    blocking_reasons = ", ".join(
        reason for reason in result.primary_reasons if reason != RESTRICTIONS_NOTE
    )
    additional_context = facts.notes if facts.notes else CONSULT_AUTHORITY_SENTENCE

    return (
        f"Planning permission will likely be required due to {blocking_reasons}. "
        f"{additional_context}"
    )
