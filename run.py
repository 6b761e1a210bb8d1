#!/usr/bin/env python3
"""
PD Checker - Command Line

Checks one or more addresses for Permitted Development rights and
prints a report for each. With no addresses, runs every reference
property through the engine.

Usage:
    python run.py ["ADDRESS" ...] [--json] [--store PATH]

Example:
    python run.py "45 Georgian Square, Bath"
"""

import argparse
import json
import logging

from pd_checker.api import PlanningResult, check_planning_rights
from pd_checker.facts import PropertyFactStore, create_sample_properties
from pd_checker.rules import CheckStatus


STATUS_ICONS = {
    CheckStatus.PASS: "[ OK ]",
    CheckStatus.WARNING: "[ !! ]",
    CheckStatus.FAIL: "[FAIL]",
}


def print_result(result: PlanningResult) -> None:
    """Print a human-readable report for one result."""
    verdict = (
        "PERMITTED DEVELOPMENT RIGHTS RETAINED"
        if result.has_permitted_development_rights
        else "PLANNING PERMISSION LIKELY REQUIRED"
    )

    print("\n" + "=" * 60)
    print(f"  {result.address}")
    print("=" * 60)
    print(f"  Verdict: {verdict}")
    print(f"  Confidence: {result.confidence:.1f}%")
    print(f"  Local authority: {result.local_authority}")
    if result.sources:
        print(f"  Sources: {', '.join(result.sources)}")
    if result.is_fallback:
        print("  NOTE: No property data found - low confidence result")

    print("\n--- Checks ---")
    for check in result.checks:
        icon = STATUS_ICONS.get(check.status, "[????]")
        print(f"{icon} {check.type}")
        print(f"       {check.description}")

    print("\n--- Summary ---")
    print(f"  {result.summary}")


def main():
    parser = argparse.ArgumentParser(
        description="PD Checker - Permitted Development rights check"
    )
    parser.add_argument(
        "addresses",
        nargs="*",
        help="Addresses to check (default: all stored properties)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON"
    )
    parser.add_argument(
        "--store",
        type=str,
        default=None,
        help="Path to a property facts JSON file (default: in-memory samples)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    store = PropertyFactStore(args.store)
    if store.count() == 0:
        create_sample_properties(store)

    addresses = args.addresses or [p.address for p in store.get_all()]
    results = [check_planning_rights(store, address) for address in addresses]

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2))
        return

    for result in results:
        print_result(result)
    print()


if __name__ == "__main__":
    main()
