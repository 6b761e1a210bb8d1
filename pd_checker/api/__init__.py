"""
API module for PD Checker.

Facade that answers "does this address retain PD rights?".
"""

from .planning import (
    FALLBACK_CONFIDENCE,
    PlanningResult,
    build_fallback_result,
    check_planning_rights,
)

__all__ = [
    "FALLBACK_CONFIDENCE",
    "PlanningResult",
    "build_fallback_result",
    "check_planning_rights",
]
