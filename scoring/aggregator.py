"""
Scoring Aggregator
Responsible for combining the four pillar results into the composite TruScore
and the availability signals reported alongside it.
"""

import logging
from typing import Any, Dict, List, Tuple

from scoring.pillars import clamp, round_half_up
from scoring.types import AvailabilitySignals, PillarBreakdown, PillarResult

logger = logging.getLogger(__name__)


class ScoringAggregator:
    def __init__(self, config: Dict[str, Any]):
        """
        Initialize aggregator with the rubric

        Args:
            config: Loaded truscore.yml rubric
        """
        self.config = config
        self.max_score = config.get('aggregate', {}).get('max_score', 100)

    def build_breakdown(self, pillars: List[PillarResult]) -> PillarBreakdown:
        values = {p.name: p.value for p in pillars}
        missing = {'body', 'planet', 'care', 'open'} - set(values)
        if missing:
            logger.warning(f"No result for pillars {sorted(missing)}; scoring them as 0")
        return PillarBreakdown(
            body=values.get('body', 0),
            planet=values.get('planet', 0),
            care=values.get('care', 0),
            open=values.get('open', 0),
        )

    def availability_signals(self, pillars: List[PillarResult]) -> AvailabilitySignals:
        """Informational flags: which primary graded signals were present, whatever their value."""
        present = {p.name: p.signal_present for p in pillars}
        return AvailabilitySignals(
            has_primary_nutrition_signal=present.get('body', False),
            has_primary_eco_signal=present.get('planet', False),
            has_origin_signal=present.get('open', False),
        )

    def calculate_composite(self, pillars: List[PillarResult]) -> Tuple[int, PillarBreakdown, AvailabilitySignals]:
        """
        Composite TruScore.

        Formula:
        TruScore = clamp(Body + Planet + Care + Open, 0, 100)
        Pillar values are already rounded, so the final rounding is a no-op kept
        for non-integer rubrics.
        """
        breakdown = self.build_breakdown(pillars)
        composite = round_half_up(clamp(breakdown.total(), 0, self.max_score))
        logger.debug(f"Composite score {composite} from {breakdown}")
        return composite, breakdown, self.availability_signals(pillars)
