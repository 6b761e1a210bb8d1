"""
Property fact providers.

Everything that turns an address into a PropertyFacts record lives
here. The rules engine never talks to these directly.
"""

from .address import (
    determine_property_type,
    extract_postcode,
    normalize_address,
    validate_postcode,
)
from .provider import (
    AdapterFactProvider,
    AddressMatch,
    DesignationSource,
    FactLookup,
    FactProvider,
    FactProviderError,
    PropertyNotFoundError,
)
from .storage import (
    PropertyFactStore,
    calculate_data_confidence,
    create_sample_properties,
)

__all__ = [
    # Address helpers
    "determine_property_type",
    "extract_postcode",
    "normalize_address",
    "validate_postcode",
    # Provider contract
    "AdapterFactProvider",
    "AddressMatch",
    "DesignationSource",
    "FactLookup",
    "FactProvider",
    "FactProviderError",
    "PropertyNotFoundError",
    # Storage
    "PropertyFactStore",
    "calculate_data_confidence",
    "create_sample_properties",
]
