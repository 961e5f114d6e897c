"""Input models for the TruScore engine.

* ``ProductRecord``: a sparse, read-only product description. Every field is
  optional; scoring maps absence to pillar defaults.
* ``PreferenceConfig``: the user's values preferences, grouped into three
  categories each gated by a master switch.

Both can be built from plain dicts (``from_dict``), including Open Food Facts
shaped product payloads and the camelCase preference payloads of the values store.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Tuple

from data.regions import NEUTRAL

GRADES = ('a', 'b', 'c', 'd', 'e')
NOVA_GROUPS = (1, 2, 3, 4)


@dataclass(frozen=True)
class PackagingUnit:
    recyclability: Optional[str] = None


@dataclass(frozen=True)
class ProductRecord:
    """Read-only product description consumed by the pillar calculators."""

    nutrition_grade: Optional[str] = None
    eco_grade: Optional[str] = None
    nova_group: Optional[int] = None
    additive_codes: Tuple[str, ...] = ()
    analysis_tags: Tuple[str, ...] = ()
    label_tags: Tuple[str, ...] = ()
    ingredients_text: Optional[str] = None
    brand_name: Optional[str] = None
    packaging_units: Tuple[PackagingUnit, ...] = ()
    origin_signal: Optional[str] = None
    origin_tags: Tuple[str, ...] = ()

    def __post_init__(self):
        # None means absent, same as an empty collection
        for name in _COLLECTION_FIELDS:
            if getattr(self, name) is None:
                object.__setattr__(self, name, ())

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> 'ProductRecord':
        """
        Build a record from snake_case field names or an Open Food Facts payload.

        Raises:
            TypeError / ValueError: for values of the wrong shape (e.g. a number
            where a tag list is expected). The engine turns these into a zero result.
        """
        get = payload.get

        origin_tags = _first(get, 'origin_tags')
        if origin_tags is None:
            origin_tags = list(_as_strings(get('origins_tags'))) + list(_as_strings(get('manufacturing_places_tags')))

        return cls(
            nutrition_grade=_grade(_first(get, 'nutrition_grade', 'nutriscore_grade')),
            eco_grade=_grade(_first(get, 'eco_grade', 'ecoscore_grade')),
            nova_group=_nova(_first(get, 'nova_group')),
            additive_codes=_as_strings(_first(get, 'additive_codes', 'additives_tags')),
            analysis_tags=_as_strings(_first(get, 'analysis_tags', 'ingredients_analysis_tags')),
            label_tags=_as_strings(_first(get, 'label_tags', 'labels_tags')),
            ingredients_text=_optional_str(_first(get, 'ingredients_text')),
            brand_name=_optional_str(_first(get, 'brand_name', 'brands')),
            packaging_units=_packaging(_first(get, 'packaging_units', 'packagings')),
            origin_signal=_origin_signal(payload),
            origin_tags=_as_strings(origin_tags),
        )


@dataclass(frozen=True)
class PreferenceConfig:
    """
    Values preferences. Sub-toggles only take effect when their category's master
    switch is on.

    Geopolitical axes are tri-state strings: 'neutral' or 'avoid_<region>'.
    Axes beyond the two built-in ones go in ``extra_axes``.
    """

    geopolitical_enabled: bool = False
    ethical_enabled: bool = False
    environmental_enabled: bool = False

    israel_palestine: str = NEUTRAL
    india_china: str = NEUTRAL
    extra_axes: Mapping[str, str] = field(default_factory=dict)

    avoid_animal_testing: bool = False
    avoid_forced_labour: bool = False
    avoid_palm_oil: bool = False

    def axis_choice(self, axis: str) -> str:
        if axis in _AXIS_FIELDS:
            return getattr(self, axis)
        return self.extra_axes.get(axis, NEUTRAL)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> 'PreferenceConfig':
        """Accepts snake_case or camelCase keys; unknown string-valued keys become extra axes."""
        known = {f.name for f in fields(cls)} - {'extra_axes'}
        values: Dict[str, Any] = {}
        extra: Dict[str, str] = dict(payload.get('extra_axes') or {})

        for raw_key, value in payload.items():
            key = _snake_case(raw_key)
            if key == 'extra_axes':
                continue
            if key in known:
                values[key] = value if key in _AXIS_FIELDS else _flag(key, value)
            elif isinstance(value, str):
                extra[key] = value

        return cls(extra_axes=extra, **values)


_AXIS_FIELDS = ('israel_palestine', 'india_china')

_COLLECTION_FIELDS = ('additive_codes', 'analysis_tags', 'label_tags', 'packaging_units', 'origin_tags')

_TRUE_STRINGS = ('true', '1')
_FALSE_STRINGS = ('false', '0')


def _flag(key: str, value: Any) -> bool:
    """Stored toggles may be real booleans, 0/1, or their string forms."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise TypeError(f"Preference {key!r} expects a boolean, got {value!r}")


_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(key: str) -> str:
    return _CAMEL_RE.sub('_', key).lower()


def _first(get, *keys: str) -> Any:
    for key in keys:
        value = get(key)
        if value is not None:
            return value
    return None


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"Expected text, got {type(value).__name__}")
    return value


def _as_strings(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(v.strip() for v in value.split(',') if v.strip())
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise TypeError(f"Expected a list of strings, got {type(value).__name__}")
    return tuple(str(v) for v in value if v is not None)


def _grade(value: Any) -> Optional[str]:
    if value is None:
        return None
    grade = str(value).strip().lower()
    return grade if grade in GRADES else None


def _nova(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    group = int(value)
    return group if group in NOVA_GROUPS else None


def _packaging(value: Any) -> Tuple[PackagingUnit, ...]:
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"Expected a list of packaging units, got {type(value).__name__}")
    units = []
    for item in value:
        if isinstance(item, PackagingUnit):
            units.append(item)
        elif isinstance(item, Mapping):
            units.append(PackagingUnit(recyclability=_optional_str(
                _first(item.get, 'recyclability', 'recycling'))))
        else:
            raise TypeError(f"Unexpected packaging unit: {item!r}")
    return tuple(units)


def _origin_signal(payload: Mapping[str, Any]) -> Optional[str]:
    """First non-empty origin source: explicit signal, origin tags, manufacturing tags, free text."""
    for key in ('origin_signal', 'origins_tags', 'manufacturing_places_tags', 'origins', 'manufacturing_places'):
        value = payload.get(key)
        if not value:
            continue
        if isinstance(value, (list, tuple)):
            return ",".join(str(v) for v in value)
        return str(value)
    return None
