"""
PD Checker

Core modules for deciding whether a UK property retains Permitted
Development (PD) rights or needs a full planning application.

Components:
  1. Planning constraint rules engine (rules)
  2. Property fact providers and storage (facts)
  3. Planning rights facade (api)

Usage:
    from pd_checker.rules import PropertyFacts, PlanningConstraints, PlanningRulesEngine
    from pd_checker.api import check_planning_rights
"""

__version__ = "0.3.0"
