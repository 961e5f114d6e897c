"""TruScore scoring: four pillar calculators, composite aggregation and values insights."""

from scoring.engine import TruScoreEngine, compute_score, generate_insights, get_default_engine
from scoring.types import (
    Adjustment,
    AvailabilitySignals,
    Insight,
    InsightCategory,
    PillarBreakdown,
    PillarResult,
    ScoreResult,
)

__all__ = [
    'TruScoreEngine',
    'compute_score',
    'generate_insights',
    'get_default_engine',
    'Adjustment',
    'AvailabilitySignals',
    'Insight',
    'InsightCategory',
    'PillarBreakdown',
    'PillarResult',
    'ScoreResult',
]
