"""
Scoring Contract
Defines what the engine accepts at its entry points and how raw caller input is
turned into the typed models the pillar calculators consume.
"""

from typing import Any, Mapping, Optional

from data.models import PreferenceConfig, ProductRecord

# Accepted inputs:
#   product:     ProductRecord, or a mapping (snake_case fields or an Open Food Facts payload)
#   preferences: PreferenceConfig, a mapping, or None
# Anything else for the product (None, strings, lists, numbers) is rejected without
# computation and yields the zero result.

CONSTRAINTS = [
    "Never raise to the caller; unusable input and internal faults yield the zero result.",
    "Do not perform I/O while scoring; reference tables are loaded before the first call.",
    "Insights never change pillar values or the composite score.",
    "Missing product fields map to pillar defaults, never to errors.",
]


def is_valid_product_input(product: Any) -> bool:
    """Shape check only; field-level problems surface later and are caught by the engine."""
    return isinstance(product, (ProductRecord, Mapping))


def coerce_product(product: Any) -> ProductRecord:
    if isinstance(product, ProductRecord):
        return product
    return ProductRecord.from_dict(product)


def coerce_preferences(preferences: Any) -> Optional[PreferenceConfig]:
    if preferences is None or isinstance(preferences, PreferenceConfig):
        return preferences
    if isinstance(preferences, Mapping):
        return PreferenceConfig.from_dict(preferences)
    raise TypeError(f"Unsupported preferences type: {type(preferences).__name__}")
