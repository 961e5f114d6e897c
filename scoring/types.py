from dataclasses import asdict, dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class InsightCategory(str, Enum):
    GEOPOLITICAL = "geopolitical"
    ETHICAL = "ethical"
    ENVIRONMENTAL = "environmental"


@dataclass(frozen=True)
class Adjustment:
    """One step applied to a pillar's running value"""
    label: str                       # e.g. "nova_group_4"
    delta: float = 0.0               # added to the running value
    override: Optional[float] = None # replaces the running value when set


@dataclass(frozen=True)
class PillarResult:
    """Outcome of one pillar calculator"""
    name: str                        # "body", "planet", "care", "open"
    value: int                       # clamped and rounded, 0-25
    raw: float                       # value after all adjustments, before clamping
    base: float
    adjustments: Tuple[Adjustment, ...] = ()
    signal_present: bool = False     # primary graded signal available (nutrition/eco grade, origin)


@dataclass(frozen=True)
class PillarBreakdown:
    body: int = 0
    planet: int = 0
    care: int = 0
    open: int = 0

    def total(self) -> int:
        return self.body + self.planet + self.care + self.open


@dataclass(frozen=True)
class AvailabilitySignals:
    has_primary_nutrition_signal: bool = False
    has_primary_eco_signal: bool = False
    has_origin_signal: bool = False


@dataclass(frozen=True)
class Insight:
    """Explanatory, non-scoring flag tied to a user preference"""
    category: InsightCategory
    message: str
    source_description: Optional[str]
    color_tag: str


@dataclass(frozen=True)
class ScoreResult:
    """Top-level engine output"""
    composite_score: int             # 0-100, sum of the breakdown
    breakdown: PillarBreakdown
    availability_signals: AvailabilitySignals
    insights: Tuple[Insight, ...] = ()
    # Read-only view keyed by pillar name; left out of the hash
    adjustments: Mapping[str, Tuple[Adjustment, ...]] = field(
        default_factory=lambda: MappingProxyType({}), hash=False)

    def __post_init__(self):
        object.__setattr__(self, 'insights', tuple(self.insights))
        object.__setattr__(self, 'adjustments', MappingProxyType(
            {name: tuple(steps) for name, steps in self.adjustments.items()}))

    @classmethod
    def zero(cls) -> 'ScoreResult':
        """Safe result returned for unusable input or internal failures."""
        return cls(
            composite_score=0,
            breakdown=PillarBreakdown(),
            availability_signals=AvailabilitySignals(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'composite_score': self.composite_score,
            'breakdown': asdict(self.breakdown),
            'availability_signals': asdict(self.availability_signals),
            'insights': [
                {**asdict(i), 'category': i.category.value} for i in self.insights
            ],
            'adjustments': {
                name: [asdict(a) for a in steps] for name, steps in self.adjustments.items()
            },
        }
