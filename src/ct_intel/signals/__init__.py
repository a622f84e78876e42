"""Derived signals computed from a window of scans."""

from .engagement import get_high_engagement
from .momentum import compute_momentum
from .narratives import detect_narratives
from .regime import detect_regime, fear_gauge
from .sentiment import analyze_sentiment, classify_trend

__all__ = [
    "analyze_sentiment",
    "classify_trend",
    "compute_momentum",
    "detect_narratives",
    "detect_regime",
    "fear_gauge",
    "get_high_engagement",
]
