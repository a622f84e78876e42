"""Threshold classifiers for market regime and precious-metal fear."""

from collections.abc import Sequence

from ..extract.commodities import mentions_of
from ..models import CommodityCount, FearLevel, Regime

# (minimum ratio, regime), checked in order
REGIME_THRESHOLDS = (
    (4.0, Regime.EUPHORIA),
    (2.5, Regime.BULLISH),
    (1.5, Regime.LEANING_BULL),
    (0.7, Regime.NEUTRAL),
    (0.4, Regime.LEANING_BEAR),
)

# (mentions strictly above, level), checked in order
FEAR_THRESHOLDS = (
    (50, FearLevel.EXTREME),
    (30, FearLevel.HIGH),
    (15, FearLevel.ELEVATED),
    (5, FearLevel.MODERATE),
)

FEAR_KEYWORDS = ("gold", "silver")


def detect_regime(ratio: float) -> Regime:
    """Map a bull:bear ratio to a regime label."""
    for minimum, regime in REGIME_THRESHOLDS:
        if ratio >= minimum:
            return regime
    return Regime.BEARISH


def fear_gauge(commodities: Sequence[CommodityCount]) -> FearLevel:
    """Classify flight-to-safety pressure from combined gold and silver mentions."""
    total = sum(mentions_of(commodities, name) for name in FEAR_KEYWORDS)
    for floor, level in FEAR_THRESHOLDS:
        if total > floor:
            return level
    return FearLevel.LOW
