"""Data package for the TruScore engine.

Exposes the input models and the in-memory reference lookups (additive safety,
brand registry, region catalog) that are injected into the scoring engine.
"""

from .additives import AdditiveInfo, AdditiveSafetyTable, normalize_additive_code
from .brands import BrandData, BrandRegistry
from .models import PackagingUnit, PreferenceConfig, ProductRecord
from .regions import Region, RegionCatalog

__all__ = [
    "AdditiveInfo",
    "AdditiveSafetyTable",
    "normalize_additive_code",
    "BrandData",
    "BrandRegistry",
    "PackagingUnit",
    "PreferenceConfig",
    "ProductRecord",
    "Region",
    "RegionCatalog",
]
