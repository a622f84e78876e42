"""Split-half ticker momentum."""

from collections.abc import Sequence
from typing import Optional

from ..extract.tickers import count_tickers, extract_tickers
from ..models import MomentumEntry, TickerCount
from ..records import ScanRecord, round_half_up, split_halves

MOMENTUM_LIMIT = 10
NEW = "NEW"


def compute_momentum(
    scans: Sequence[ScanRecord],
    tickers: Optional[Sequence[TickerCount]] = None,
    limit: int = MOMENTUM_LIMIT,
) -> list[MomentumEntry]:
    """
    Compare per-scan mention rates between the two halves of the window.

    Args:
        scans: Scan records in window order
        tickers: Ranked tickers for the whole window (computed if omitted)
        limit: Number of top tickers to evaluate

    Returns:
        One entry per ticker with the percent change in mention rate, or
        "NEW" when the ticker had no first-half mentions
    """
    if tickers is None:
        tickers = extract_tickers(scans)

    first, second = split_halves(scans)
    first_counts = count_tickers(first)
    second_counts = count_tickers(second)

    entries = []
    for ticker in tickers[:limit]:
        first_rate = first_counts.get(ticker.name, 0) / len(first) if first else 0.0
        second_rate = second_counts.get(ticker.name, 0) / len(second) if second else 0.0

        if first_rate > 0:
            change = int(round_half_up((second_rate - first_rate) / first_rate * 100))
        else:
            change = NEW

        entries.append(MomentumEntry(name=ticker.name, mentions=ticker.mentions, change=change))

    return entries
