"""
Region linkage catalog for geopolitical insights.

Each preference axis (e.g. 'india_china') offers a set of regions a user can choose
to avoid. A region knows which brand keywords, origin tag tokens and registry
country codes link a product to it.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple, Union

from data.reference import load_yaml, table_path

logger = logging.getLogger(__name__)

NEUTRAL = "neutral"
AVOID_PREFIX = "avoid_"

_LOCALE_PREFIX_RE = re.compile(r"^[a-z]{2,3}:")
_WORD_SPLIT_RE = re.compile(r"[\s/\-]+")

# Words shorter than this ('in', 'of') only count when they are the whole tag.
MIN_WORD_TOKEN_LENGTH = 3


def origin_tokens(values: Iterable[str]) -> Set[str]:
    """
    Reduce origin tags / free text to comparable lowercase tokens.

    Each comma-separated entry contributes itself (locale prefix stripped) plus its
    longer words, so 'en:made-in-china' -> {'made-in-china', 'made', 'china'} and
    'en:in' -> {'in'}.
    """
    tokens: Set[str] = set()
    for value in values:
        if not value:
            continue
        for entry in str(value).lower().split(','):
            entry = _LOCALE_PREFIX_RE.sub("", entry.strip())
            if not entry:
                continue
            tokens.add(entry)
            tokens.update(w for w in _WORD_SPLIT_RE.split(entry) if len(w) >= MIN_WORD_TOKEN_LENGTH)
    return tokens


@dataclass(frozen=True)
class Region:
    key: str
    label: str
    brand_keywords: Tuple[str, ...] = ()
    origin_tokens: Tuple[str, ...] = ()
    country_codes: Tuple[str, ...] = ()

    @property
    def choice(self) -> str:
        return f"{AVOID_PREFIX}{self.key}"

    def matches_brand(self, brand_lower: str) -> bool:
        return bool(brand_lower) and any(kw in brand_lower for kw in self.brand_keywords)

    def matches_origin(self, tokens: Set[str]) -> bool:
        """Whole-token match; 'il' must not match inside 'brazil'."""
        return any(tok in tokens for tok in self.origin_tokens)


class RegionCatalog:
    """Ordered geopolitical axes, each mapping choice names to regions."""

    def __init__(self, axes: Mapping[str, Iterable[Region]]):
        self._axes: Dict[str, Dict[str, Region]] = {
            axis: {r.choice: r for r in regions} for axis, regions in axes.items()
        }

    @property
    def axes(self) -> List[str]:
        return list(self._axes)

    def choices(self, axis: str) -> List[str]:
        return [NEUTRAL] + list(self._axes.get(axis, {}))

    def resolve(self, axis: str, choice: Optional[str]) -> Optional[Region]:
        """Return the region selected on an axis, or None for neutral / unknown choices."""
        if not choice or choice == NEUTRAL:
            return None
        region = self._axes.get(axis, {}).get(choice)
        if region is None:
            logger.warning(f"Unknown geopolitical choice {choice!r} for axis {axis!r}; treating as neutral")
        return region

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Mapping[str, Mapping[str, Any]]]) -> 'RegionCatalog':
        axes = {}
        for axis, regions in raw.items():
            axes[axis] = [
                Region(
                    key=str(key).lower(),
                    label=item.get('label', str(key).title()),
                    brand_keywords=tuple(k.lower() for k in item.get('brand_keywords') or ()),
                    origin_tokens=tuple(t.lower() for t in item.get('origin_tokens') or ()),
                    country_codes=tuple(c.upper() for c in item.get('country_codes') or ()),
                )
                for key, item in regions.items()
            ]
        return cls(axes)

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> 'RegionCatalog':
        path = path or table_path('regions.yml')
        data = load_yaml(path)
        catalog = cls.from_mapping(data.get('axes', {}))
        logger.info(f"Loaded {len(catalog.axes)} geopolitical axes from {path}")
        return catalog
