"""
Address helpers for fact providers.

Postcode extraction and validation, plus a coarse property-type guess
from free-text addresses.
"""

import re
from typing import Optional

from pd_checker.rules.models import PropertyType


# UK postcode regex pattern (full postcode)
UK_POSTCODE_PATTERN = re.compile(
    r"^[A-Z]{1,2}[0-9][0-9A-Z]?\s?[0-9][A-Z]{2}$",
    re.IGNORECASE
)

# Postcode embedded anywhere in an address line
POSTCODE_IN_TEXT_PATTERN = re.compile(
    r"\b([A-Z]{1,2}[0-9][0-9A-Z]?\s?[0-9][A-Z]{2})\b",
    re.IGNORECASE
)


def validate_postcode(postcode: str) -> bool:
    """Validate full UK postcode format."""
    if not postcode:
        return False
    return bool(UK_POSTCODE_PATTERN.match(postcode.strip()))


def extract_postcode(address: str) -> Optional[str]:
    """
    Extract the first UK postcode from a free-text address.

    Returns the postcode upper-cased, or None if none is present.
    """
    if not address:
        return None

    match = POSTCODE_IN_TEXT_PATTERN.search(address)
    return match.group(1).upper() if match else None


def determine_property_type(address: str) -> PropertyType:
    """Guess the property type from keywords in the address."""
    lower_address = (address or "").lower()

    if "flat" in lower_address or "apartment" in lower_address:
        return PropertyType.FLAT
    if "maisonette" in lower_address:
        return PropertyType.MAISONETTE
    if "office" in lower_address or "commercial" in lower_address:
        return PropertyType.COMMERCIAL
    return PropertyType.HOUSE


def normalize_address(address: str) -> str:
    """Lower-cased, whitespace-collapsed key for address lookups."""
    return " ".join((address or "").lower().split())
