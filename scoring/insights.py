"""
Values Insight Generator
Evaluates a user's values preferences against product attributes and emits
explanatory insights. Insights never affect the TruScore.

Categories run in a fixed order (geopolitical, ethical, environmental) and each is
gated by its own master switch; sub-checks never run while the switch is off.
"""

import logging
from typing import Any, Dict, List, Optional

from data.brands import BrandRegistry
from data.models import PreferenceConfig, ProductRecord
from data.regions import Region, RegionCatalog, origin_tokens
from scoring import matchers
from scoring.types import Insight, InsightCategory

logger = logging.getLogger(__name__)


class InsightGenerator:
    """Stateless insight rules over (ProductRecord, PreferenceConfig)"""

    def __init__(self, config: Dict[str, Any], brands: BrandRegistry, regions: RegionCatalog):
        """
        Args:
            config: the 'insights' section of the rubric
            brands: registry used for flagged-parent and country checks
            regions: geopolitical axes and their region linkage data
        """
        self.config = config
        self.brands = brands
        self.regions = regions

    def generate(self, product: ProductRecord, preferences: PreferenceConfig) -> List[Insight]:
        insights: List[Insight] = []
        if preferences.geopolitical_enabled:
            insights.extend(self._geopolitical(product, preferences))
        if preferences.ethical_enabled:
            insights.extend(self._ethical(product, preferences))
        if preferences.environmental_enabled:
            insights.extend(self._environmental(product, preferences))
        logger.debug(f"Generated {len(insights)} insights")
        return insights

    # --- Geopolitical ---

    def _geopolitical(self, product: ProductRecord, preferences: PreferenceConfig) -> List[Insight]:
        cfg = self.config['geopolitical']
        brand = (product.brand_name or "").lower()
        tokens = origin_tokens(list(product.origin_tags) + [product.origin_signal or ""])

        insights = []
        for axis in self.regions.axes:
            # Tri-state axis: only the selected region is evaluated
            region = self.regions.resolve(axis, preferences.axis_choice(axis))
            if region is None:
                continue
            if self._region_linked(region, brand, tokens, product.brand_name):
                insights.append(Insight(
                    category=InsightCategory.GEOPOLITICAL,
                    message=cfg['message'].format(label=region.label),
                    source_description=cfg.get('source'),
                    color_tag=cfg['color'],
                ))
        return insights

    def _region_linked(self, region: Region, brand_lower: str, tokens, brand_name: Optional[str]) -> bool:
        if region.matches_brand(brand_lower) or region.matches_origin(tokens):
            return True
        return any(self.brands.is_country_linked(brand_name, code) for code in region.country_codes)

    # --- Ethical ---

    def _ethical(self, product: ProductRecord, preferences: PreferenceConfig) -> List[Insight]:
        cfg = self.config['ethical']
        insights = []

        if preferences.avoid_animal_testing and product.brand_name:
            if self.brands.is_flagged(product.brand_name.lower()):
                insights.append(self._insight(InsightCategory.ETHICAL, cfg['animal_testing'], cfg['color']))

        if preferences.avoid_forced_labour:
            rule = cfg['forced_labour']
            if matchers.count_matching_tags(product.analysis_tags, rule['tag_keywords']):
                insights.append(self._insight(InsightCategory.ETHICAL, rule, cfg['color']))

        return insights

    # --- Environmental ---

    def _environmental(self, product: ProductRecord, preferences: PreferenceConfig) -> List[Insight]:
        cfg = self.config['environmental']
        if preferences.avoid_palm_oil and self.contains_palm_oil(product):
            return [self._insight(InsightCategory.ENVIRONMENTAL, cfg['palm_oil'], cfg['color'])]
        return []

    def contains_palm_oil(self, product: ProductRecord) -> bool:
        """
        Palm oil from analysis tags (a 'palm' tag that is not itself a palm-oil-free
        tag) or from whole-word ingredient terms, ignoring palm-oil-free claims.
        """
        rule = self.config['environmental']['palm_oil']
        keyword = rule['tag_keyword']
        exclusion = rule['tag_exclusion']
        for tag in product.analysis_tags:
            tag_lower = tag.lower()
            if keyword in tag_lower and exclusion not in tag_lower:
                return True

        text = product.ingredients_text or ""
        if not text:
            return False
        text = matchers.strip_pattern(text, rule['free_assertion_pattern'])
        return matchers.has_any_term(text, rule['ingredient_terms'])

    @staticmethod
    def _insight(category: InsightCategory, rule: Dict[str, Any], color: str) -> Insight:
        return Insight(
            category=category,
            message=rule['message'],
            source_description=rule.get('source'),
            color_tag=color,
        )
