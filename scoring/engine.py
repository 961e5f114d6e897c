"""
TruScore engine
Entry points for scoring a product and generating values insights.

The engine is built once with its lookup services (additive table, brand
registry, region catalog) and rubric, then used as a pure function: no I/O and
no state carried between calls. It never raises to its caller.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from data.additives import AdditiveSafetyTable
from data.brands import BrandRegistry
from data.regions import RegionCatalog
from scoring.aggregator import ScoringAggregator
from scoring.contract import coerce_preferences, coerce_product, is_valid_product_input
from scoring.insights import InsightGenerator
from scoring.pillars import build_pillars
from scoring.rubric import load_rubric
from scoring.types import Insight, ScoreResult
from utils.exceptions import ReferenceDataError

logger = logging.getLogger(__name__)


class TruScoreEngine:
    """Four-pillar product scorer with preference-driven insights"""

    def __init__(
        self,
        additives: Optional[AdditiveSafetyTable] = None,
        brands: Optional[BrandRegistry] = None,
        regions: Optional[RegionCatalog] = None,
        rubric: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the engine. Any service left as None is loaded from the
        bundled reference tables.

        Raises:
            ReferenceDataError: if a bundled table or the rubric cannot be loaded
        """
        self.rubric = rubric if rubric is not None else load_rubric()
        self.additives = additives if additives is not None else AdditiveSafetyTable.load()
        self.brands = brands if brands is not None else BrandRegistry.load()
        self.regions = regions if regions is not None else RegionCatalog.load()

        self.pillars = build_pillars(self.rubric, self.additives, self.brands)
        self.aggregator = ScoringAggregator(self.rubric)
        self.insight_generator = InsightGenerator(self.rubric['insights'], self.brands, self.regions)

    def compute_score(self, product: Any, preferences: Any = None) -> ScoreResult:
        """
        Score a product.

        Args:
            product: ProductRecord or a product mapping (snake_case or Open Food Facts keys)
            preferences: optional PreferenceConfig or mapping; insights are only
                generated when preferences are supplied

        Returns:
            ScoreResult; the zero result for unusable input or internal failure
        """
        if not is_valid_product_input(product):
            logger.warning(f"Rejected product input of type {type(product).__name__}; returning zero score")
            return ScoreResult.zero()

        try:
            record = coerce_product(product)
            prefs = coerce_preferences(preferences)

            pillars = [pillar.calculate(record) for pillar in self.pillars]
            composite, breakdown, signals = self.aggregator.calculate_composite(pillars)

            insights = ()
            if prefs is not None:
                insights = tuple(self.insight_generator.generate(record, prefs))

            return ScoreResult(
                composite_score=composite,
                breakdown=breakdown,
                availability_signals=signals,
                insights=insights,
                adjustments={p.name: p.adjustments for p in pillars},
            )
        except Exception as e:
            logger.error(f"TruScore computation failed, returning zero score: {e}", exc_info=True)
            return ScoreResult.zero()

    def generate_insights(self, product: Any, preferences: Any) -> List[Insight]:
        """Insights only, without computing scores. Returns [] on unusable input or failure."""
        if not is_valid_product_input(product) or preferences is None:
            return []
        try:
            return self.insight_generator.generate(coerce_product(product), coerce_preferences(preferences))
        except Exception as e:
            logger.error(f"Insight generation failed: {e}", exc_info=True)
            return []


_default_engine: Optional[TruScoreEngine] = None
_default_engine_lock = threading.Lock()


def get_default_engine() -> TruScoreEngine:
    """Engine backed by the bundled tables, built on first use and shared afterwards."""
    global _default_engine
    if _default_engine is None:
        with _default_engine_lock:
            if _default_engine is None:
                _default_engine = TruScoreEngine()
    return _default_engine


def compute_score(product: Any, preferences: Any = None) -> ScoreResult:
    try:
        engine = get_default_engine()
    except ReferenceDataError as e:
        logger.error(f"Default engine unavailable, returning zero score: {e}")
        return ScoreResult.zero()
    return engine.compute_score(product, preferences)


def generate_insights(product: Any, preferences: Any) -> List[Insight]:
    try:
        engine = get_default_engine()
    except ReferenceDataError as e:
        logger.error(f"Default engine unavailable, returning no insights: {e}")
        return []
    return engine.generate_insights(product, preferences)
