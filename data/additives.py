"""
Additive safety lookup.

Maps normalized E-number codes (e.g. 'e250') to a safety class used by the
Body pillar: 'safe', 'caution' or 'avoid'.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from data.reference import load_yaml, table_path

logger = logging.getLogger(__name__)

SAFETY_CLASSES = ('safe', 'caution', 'avoid')

_LOCALE_PREFIX_RE = re.compile(r"^[a-z]{2,3}:")


def normalize_additive_code(code: str) -> str:
    """
    Normalize a raw additive code for lookup.

    'en:E412' -> 'e412', ' E 330 ' -> 'e330', 'fr:e150d' -> 'e150d'
    """
    if not code:
        return ""
    c = code.strip().lower()
    c = _LOCALE_PREFIX_RE.sub("", c)
    return re.sub(r"[\s\-]", "", c)


@dataclass(frozen=True)
class AdditiveInfo:
    code: str
    name: str
    safety: str


class AdditiveSafetyTable:
    """Read-only, in-memory additive lookup."""

    def __init__(self, entries: Mapping[str, AdditiveInfo]):
        self._entries: Dict[str, AdditiveInfo] = dict(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, code: str) -> Optional[AdditiveInfo]:
        return self._entries.get(normalize_additive_code(code))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Mapping[str, str]]) -> 'AdditiveSafetyTable':
        """
        Build a table from {code: {name, safety}} data.

        Entries with an unrecognized safety class are skipped; they will then be
        treated like unresolved codes by the scorer.
        """
        entries: Dict[str, AdditiveInfo] = {}
        for raw_code, item in raw.items():
            code = normalize_additive_code(str(raw_code))
            safety = str(item.get('safety', '')).lower()
            if safety not in SAFETY_CLASSES:
                logger.warning(f"Skipping additive {raw_code}: unknown safety class {safety!r}")
                continue
            entries[code] = AdditiveInfo(code=code, name=item.get('name', code.upper()), safety=safety)
        return cls(entries)

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> 'AdditiveSafetyTable':
        path = path or table_path('additives.yml')
        data = load_yaml(path)
        table = cls.from_mapping(data.get('additives', {}))
        logger.info(f"Loaded {len(table)} additives from {path}")
        return table
