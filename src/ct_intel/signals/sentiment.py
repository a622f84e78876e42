"""Window-level bullish/bearish sentiment."""

from collections.abc import Mapping, Sequence

from ..models import SentimentSummary, Trend
from ..records import ScanRecord, as_number, round_half_up, split_halves

RISING_FACTOR = 1.1
DECLINING_FACTOR = 0.9


def _score(record: ScanRecord, key: str) -> float:
    sentiment = record.get("sentiment")
    if not isinstance(sentiment, Mapping):
        return 0.0
    value = as_number(sentiment.get(key))
    # Negative scores are treated as missing.
    return max(value, 0.0) if value is not None else 0.0


def _mean_bullish(scans: Sequence[ScanRecord]) -> float:
    return sum(_score(s, "bullish") for s in scans) / (len(scans) or 1)


def classify_trend(scans: Sequence[ScanRecord]) -> Trend:
    """Compare mean bullish score of the second half of the window against the first."""
    first, second = split_halves(scans)
    first_bull = _mean_bullish(first)
    second_bull = _mean_bullish(second)

    if second_bull > first_bull * RISING_FACTOR:
        return Trend.RISING
    if second_bull < first_bull * DECLINING_FACTOR:
        return Trend.DECLINING
    return Trend.STABLE


def analyze_sentiment(scans: Sequence[ScanRecord]) -> SentimentSummary:
    """
    Average bullish/bearish scores, their ratio and trend.

    Args:
        scans: Scan records in window order

    Returns:
        SentimentSummary; an empty window gives zeros and trend NO DATA
    """
    if not scans:
        return SentimentSummary(bull=0.0, bear=0.0, ratio=0.0, trend=Trend.NO_DATA, scans=0)

    avg_bull = sum(_score(s, "bullish") for s in scans) / len(scans)
    avg_bear = sum(_score(s, "bearish") for s in scans) / len(scans)

    ratio = 0.0
    unbounded = False
    if avg_bear > 0:
        ratio = round_half_up(avg_bull / avg_bear, 2)
    elif avg_bull > 0:
        unbounded = True

    return SentimentSummary(
        bull=round_half_up(avg_bull, 1),
        bear=round_half_up(avg_bear, 1),
        ratio=ratio,
        ratio_unbounded=unbounded,
        trend=classify_trend(scans),
        scans=len(scans),
    )
