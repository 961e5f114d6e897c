"""
Brand / parent-company registry.

Resolves a free-text brand name to a known company record and answers whether the
brand is linked to an ethically-flagged parent company (Care pillar, ethical
insights) or to a country (geopolitical insights).
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from data.reference import load_yaml, table_path

logger = logging.getLogger(__name__)

# Names shorter than this only ever match exactly; 'rb' must not match 'herb co'.
MIN_PARTIAL_MATCH_LENGTH = 3


@dataclass(frozen=True)
class BrandData:
    key: str
    name: str
    aliases: Tuple[str, ...] = ()
    parent_company: Optional[str] = None
    country_of_origin: Tuple[str, ...] = ()
    flagged: bool = False
    animal_testing: bool = False
    palm_oil_policy: str = "unknown"
    labor_practices: str = "unknown"
    subsidiaries: Tuple[str, ...] = field(default=(), repr=False)


def _norm(value: str) -> str:
    return value.strip().lower()


class BrandRegistry:
    """Read-only, in-memory company table with exact, alias, subsidiary and partial matching."""

    def __init__(self, brands: Iterable[BrandData]):
        self._brands: Dict[str, BrandData] = {b.key: b for b in brands}
        self._aliases: Dict[str, str] = {}
        self._subsidiaries: Dict[str, str] = {}
        for brand in self._brands.values():
            for alias in brand.aliases:
                self._aliases.setdefault(_norm(alias), brand.key)
            for sub in brand.subsidiaries:
                self._subsidiaries.setdefault(_norm(sub), brand.key)

        # Longest names first so 'johnson & johnson' wins over 'johnson'
        names = [(b.key, b.key) for b in self._brands.values()]
        names += [(alias, key) for alias, key in self._aliases.items()]
        self._partial_names: List[Tuple[str, str]] = sorted(
            (n for n in names if len(n[0]) >= MIN_PARTIAL_MATCH_LENGTH),
            key=lambda n: len(n[0]),
            reverse=True,
        )

    def __len__(self) -> int:
        return len(self._brands)

    def __contains__(self, brand_name: str) -> bool:
        return self.get_brand_data(brand_name) is not None

    def _exact(self, name: str) -> Optional[BrandData]:
        if name in self._brands:
            return self._brands[name]
        if name in self._aliases:
            return self._brands[self._aliases[name]]
        if name in self._subsidiaries:
            return self._brands[self._subsidiaries[name]]
        return None

    def get_brand_data(self, brand_name: Optional[str]) -> Optional[BrandData]:
        """
        Resolve a brand name to its company record.

        Order: exact key, alias or subsidiary match on the whole string, then on
        each comma-separated part, then containment in either direction against
        company keys and aliases.
        """
        if not brand_name or not isinstance(brand_name, str):
            return None
        normalized = _norm(brand_name)
        if not normalized:
            return None

        candidates = [normalized] + [_norm(p) for p in normalized.split(',') if _norm(p)]
        for candidate in candidates:
            found = self._exact(candidate)
            if found:
                return found

        if len(normalized) < MIN_PARTIAL_MATCH_LENGTH:
            return None
        for name, key in self._partial_names:
            if name in normalized or normalized in name:
                return self._brands[key]
        return None

    def is_flagged(self, brand_name: Optional[str]) -> bool:
        """True if the brand, or its parent company, is ethically flagged."""
        data = self.get_brand_data(brand_name)
        if data is None:
            return False
        if data.flagged:
            return True
        if data.parent_company:
            parent = self.get_brand_data(data.parent_company)
            return bool(parent and parent.flagged)
        return False

    def is_country_linked(self, brand_name: Optional[str], country_code: str) -> bool:
        data = self.get_brand_data(brand_name)
        if data is None or not country_code:
            return False
        return country_code.upper() in data.country_of_origin

    def flagged_companies(self) -> List[str]:
        return [b.name for b in self._brands.values() if b.flagged]

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Mapping[str, Any]]) -> 'BrandRegistry':
        brands = []
        for key, item in raw.items():
            brands.append(BrandData(
                key=_norm(str(key)),
                name=item.get('name', str(key)),
                aliases=tuple(_norm(a) for a in item.get('aliases') or ()),
                parent_company=item.get('parent_company'),
                country_of_origin=tuple(c.upper() for c in item.get('country_of_origin') or ()),
                flagged=bool(item.get('flagged', False)),
                animal_testing=bool(item.get('animal_testing', False)),
                palm_oil_policy=item.get('palm_oil_policy', 'unknown'),
                labor_practices=item.get('labor_practices', 'unknown'),
                subsidiaries=tuple(_norm(s) for s in item.get('subsidiaries') or ()),
            ))
        return cls(brands)

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> 'BrandRegistry':
        path = path or table_path('brands.yml')
        data = load_yaml(path)
        registry = cls.from_mapping(data.get('companies', {}))
        logger.info(f"Loaded {len(registry)} companies from {path}")
        return registry
