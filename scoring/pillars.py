"""
Pillar calculators: Body, Planet, Care, Open.

Each pillar starts from a base value and runs an ordered list of steps. A step
looks at the product and returns an Adjustment (or None when it does not apply).
The adjustments are folded into the base, then clamped to [0, 25] and rounded.
"""

import logging
import re
from decimal import Decimal, ROUND_HALF_UP
from functools import reduce
from typing import Any, Callable, Dict, Iterable, List, Optional

from data.additives import AdditiveSafetyTable
from data.brands import BrandRegistry
from data.models import ProductRecord
from scoring import matchers
from scoring.types import Adjustment, PillarResult

logger = logging.getLogger(__name__)

Step = Callable[[ProductRecord], Optional[Adjustment]]

_LOCALE_PREFIX_RE = re.compile(r"^[a-z]{2,3}:")


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def apply_adjustment(value: float, adjustment: Adjustment) -> float:
    if adjustment.override is not None:
        return adjustment.override
    return value + adjustment.delta


def fold_adjustments(base: float, adjustments: Iterable[Adjustment]) -> float:
    return reduce(apply_adjustment, adjustments, base)


class PillarCalculator:
    """Base class; subclasses define the base value and the ordered steps."""

    name = ""

    def __init__(self, config: Dict[str, Any], max_points: int = 25):
        self.config = config
        self.max_points = max_points

    def base(self, product: ProductRecord) -> float:
        raise NotImplementedError

    def steps(self) -> List[Step]:
        raise NotImplementedError

    def signal_present(self, product: ProductRecord) -> bool:
        return False

    def adjustments(self, product: ProductRecord) -> List[Adjustment]:
        found = (step(product) for step in self.steps())
        return [a for a in found if a is not None]

    def calculate(self, product: ProductRecord) -> PillarResult:
        base = self.base(product)
        adjustments = self.adjustments(product)
        raw = fold_adjustments(base, adjustments)
        value = round_half_up(clamp(raw, 0, self.max_points))
        logger.debug(f"{self.name}: base={base} raw={raw} value={value} steps={[a.label for a in adjustments]}")
        return PillarResult(
            name=self.name,
            value=value,
            raw=raw,
            base=base,
            adjustments=tuple(adjustments),
            signal_present=self.signal_present(product),
        )


class GradedPillar(PillarCalculator):
    """Pillar whose base comes from an A-E letter grade on the product."""

    grade_field = ""

    def _grade(self, product: ProductRecord) -> Optional[str]:
        grade = getattr(product, self.grade_field)
        if not grade:
            return None
        grade = grade.strip().lower()
        return grade if grade in self.config['grade_points'] else None

    def base(self, product: ProductRecord) -> float:
        grade = self._grade(product)
        if grade is None:
            return float(self.config['base_without_grade'])
        return float(self.config['grade_points'][grade])

    def signal_present(self, product: ProductRecord) -> bool:
        return self._grade(product) is not None


class BodyPillar(GradedPillar):
    """Nutrition and ingredient safety."""

    name = "body"
    grade_field = "nutrition_grade"

    def __init__(self, config: Dict[str, Any], additives: AdditiveSafetyTable, max_points: int = 25):
        super().__init__(config, max_points)
        self.additives = additives

    def steps(self) -> List[Step]:
        return [
            self.additive_penalty,
            self.risk_tag_penalty,
            self.irritant_penalty,
            self.fragrance_penalty,
            self.processing_penalty,
        ]

    def additive_penalty(self, product: ProductRecord) -> Optional[Adjustment]:
        weights = self.config['additive_penalty']
        penalty = 0.0
        for code in product.additive_codes:
            info = self.additives.lookup(code)
            penalty += weights[info.safety] if info else weights['unresolved']
        penalty = min(penalty, weights['cap'])
        if penalty <= 0:
            return None
        return Adjustment("additives", delta=-penalty)

    def risk_tag_penalty(self, product: ProductRecord) -> Optional[Adjustment]:
        count = matchers.count_matching_tags(product.analysis_tags, self.config['risk_tag_keywords'])
        if not count:
            return None
        return Adjustment("risk_tags", delta=-count * self.config['risk_tag_penalty'])

    def irritant_penalty(self, product: ProductRecord) -> Optional[Adjustment]:
        if matchers.has_any_term(product.ingredients_text or "", self.config['irritant_terms']):
            return Adjustment("irritant_terms", delta=-self.config['irritant_penalty'])
        return None

    def fragrance_penalty(self, product: ProductRecord) -> Optional[Adjustment]:
        if matchers.has_any_term(product.ingredients_text or "", self.config['fragrance_terms']):
            return Adjustment("fragrance_terms", delta=-self.config['fragrance_penalty'])
        return None

    def processing_penalty(self, product: ProductRecord) -> Optional[Adjustment]:
        penalty = self.config['nova_penalties'].get(product.nova_group)
        if not penalty:
            return None
        return Adjustment(f"nova_group_{product.nova_group}", delta=-penalty)


class PlanetPillar(GradedPillar):
    """Environmental impact: eco grade, palm oil, packaging."""

    name = "planet"
    grade_field = "eco_grade"

    def steps(self) -> List[Step]:
        return [self.palm_oil_penalty, self.packaging_bonus]

    def palm_oil_penalty(self, product: ProductRecord) -> Optional[Adjustment]:
        has_palm = matchers.any_tag_contains(product.analysis_tags, self.config['palm_keyword'])
        palm_free = matchers.any_tag_contains(
            list(product.analysis_tags) + list(product.label_tags), self.config['palm_free_marker'])
        if has_palm and not palm_free:
            return Adjustment("palm_oil", delta=-self.config['palm_penalty'])
        return None

    def _is_recyclable(self, recyclability: Optional[str]) -> bool:
        if not recyclability:
            return False
        value = _LOCALE_PREFIX_RE.sub("", recyclability.strip().lower())
        return value in self.config['recyclable_values']

    def packaging_bonus(self, product: ProductRecord) -> Optional[Adjustment]:
        units = product.packaging_units
        recyclable = sum(1 for u in units if self._is_recyclable(u.recyclability))
        if units and recyclable == len(units):
            return Adjustment("packaging_recyclable", delta=self.config['full_recycling_bonus'])
        if recyclable > 0:
            return Adjustment("packaging_partly_recyclable", delta=self.config['partial_recycling_bonus'])
        return None


class CarePillar(PillarCalculator):
    """
    Ethics and certification.

    Starts at 18 (no known violations). Label bonuses stack and can push the raw
    value past 25; the result is clamped, not scaled.
    """

    name = "care"

    def __init__(self, config: Dict[str, Any], brands: BrandRegistry, max_points: int = 25):
        super().__init__(config, max_points)
        self.brands = brands

    def base(self, product: ProductRecord) -> float:
        return float(self.config['base'])

    def steps(self) -> List[Step]:
        bonus_steps = [self._label_bonus(group) for group in self.config['label_bonuses']]
        return bonus_steps + [self.flagged_parent_penalty]

    def _label_bonus(self, group: Dict[str, Any]) -> Step:
        keywords = [kw.lower() for kw in group['labels']]
        label = "label_" + "/".join(keywords)

        def step(product: ProductRecord) -> Optional[Adjustment]:
            if any(matchers.tag_contains(tag, keywords) for tag in product.label_tags):
                return Adjustment(label, delta=group['points'])
            return None

        return step

    def flagged_parent_penalty(self, product: ProductRecord) -> Optional[Adjustment]:
        if product.brand_name and self.brands.is_flagged(product.brand_name.lower()):
            return Adjustment("flagged_parent", delta=-self.config['flagged_parent_penalty'])
        return None


class OpenPillar(PillarCalculator):
    """Transparency: disclosed ingredients and known origin."""

    name = "open"

    def base(self, product: ProductRecord) -> float:
        return float(self.config['base'])

    def steps(self) -> List[Step]:
        # The missing-ingredients override must run after the hidden-term penalty
        return [self.hidden_terms_penalty, self.missing_ingredients_override, self.missing_origin_penalty]

    def hidden_terms_penalty(self, product: ProductRecord) -> Optional[Adjustment]:
        count = matchers.count_terms(product.ingredients_text or "", self.config['hidden_terms'])
        if count >= self.config['hidden_many_threshold']:
            return Adjustment("hidden_terms", delta=-self.config['hidden_many_penalty'])
        if count >= 1:
            return Adjustment("hidden_terms", delta=-self.config['hidden_some_penalty'])
        return None

    def missing_ingredients_override(self, product: ProductRecord) -> Optional[Adjustment]:
        text = product.ingredients_text
        if text is None:
            return None
        if not text.strip() or matchers.starts_with_any(text, self.config['placeholder_prefixes']):
            return Adjustment("missing_ingredients", override=float(self.config['missing_ingredients_score']))
        return None

    def has_known_origin(self, product: ProductRecord) -> bool:
        origin = product.origin_signal
        if not origin or not origin.strip():
            return False
        return self.config['unknown_origin_marker'] not in origin.lower()

    def missing_origin_penalty(self, product: ProductRecord) -> Optional[Adjustment]:
        if self.has_known_origin(product):
            return None
        return Adjustment("missing_origin", delta=-self.config['missing_origin_penalty'])

    def signal_present(self, product: ProductRecord) -> bool:
        return self.has_known_origin(product)


def build_pillars(rubric: Dict[str, Any], additives: AdditiveSafetyTable, brands: BrandRegistry) -> List[PillarCalculator]:
    """Pillars in breakdown order: body, planet, care, open."""
    cfg = rubric['pillars']
    max_points = cfg.get('max_points', 25)
    return [
        BodyPillar(cfg['body'], additives, max_points),
        PlanetPillar(cfg['planet'], max_points),
        CarePillar(cfg['care'], brands, max_points),
        OpenPillar(cfg['open'], max_points),
    ]
