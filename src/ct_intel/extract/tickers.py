"""
Ticker mention extraction.

Scanners have emitted ticker counts in three shapes over time:

- ``topTickers``: list of ``[symbol, count]`` pairs
- ``tickers``: mapping of symbol -> count
- ``byCategory``: mapping of category -> list of ``{"ticker", "count"}``

A record may carry any combination; counts from every shape are summed.
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from ..models import TickerCount
from ..records import ScanRecord, as_count, is_array

TICKER_LIMIT = 20


@dataclass(frozen=True)
class PairListShape:
    """``topTickers: [["$BTC", 5], ...]``"""

    pairs: Sequence[Any]

    def mentions(self) -> Iterator[tuple[str, int]]:
        for entry in self.pairs:
            if not is_array(entry) or len(entry) < 2:
                continue
            count = as_count(entry[1])
            if isinstance(entry[0], str) and count is not None:
                yield entry[0], count


@dataclass(frozen=True)
class CountMapShape:
    """``tickers: {"BTC": 3, ...}``"""

    counts: Mapping[str, Any]

    def mentions(self) -> Iterator[tuple[str, int]]:
        for symbol, value in self.counts.items():
            count = as_count(value)
            if count is not None:
                yield symbol, count


@dataclass(frozen=True)
class CategorizedShape:
    """``byCategory: {"memecoins": [{"ticker": "PEPE", "count": 4}], ...}``"""

    categories: Mapping[str, Any]

    def mentions(self) -> Iterator[tuple[str, int]]:
        for items in self.categories.values():
            if not is_array(items):
                continue
            for item in items:
                if not isinstance(item, Mapping):
                    continue
                symbol = item.get("ticker")
                count = as_count(item.get("count"))
                # Zero counts carry no mention.
                if isinstance(symbol, str) and symbol and count:
                    yield symbol, count


TickerShape = Union[PairListShape, CountMapShape, CategorizedShape]


def ticker_shapes(record: ScanRecord) -> list[TickerShape]:
    """Return the ticker shapes present on a record, in extraction order."""
    shapes: list[TickerShape] = []
    if is_array(record.get("topTickers")):
        shapes.append(PairListShape(record["topTickers"]))
    if isinstance(record.get("tickers"), Mapping):
        shapes.append(CountMapShape(record["tickers"]))
    if isinstance(record.get("byCategory"), Mapping):
        shapes.append(CategorizedShape(record["byCategory"]))
    return shapes


def normalize_symbol(symbol: str) -> str:
    """Strip one leading $ so $BTC and BTC aggregate together."""
    return symbol[1:] if symbol.startswith("$") else symbol


def count_tickers(scans: Iterable[ScanRecord]) -> dict[str, int]:
    """
    Sum ticker mentions across scans and shapes.

    Returns:
        Mapping of normalized symbol -> mentions, in first-seen order
    """
    counts: dict[str, int] = {}
    for record in scans:
        for shape in ticker_shapes(record):
            for symbol, count in shape.mentions():
                name = normalize_symbol(symbol)
                counts[name] = counts.get(name, 0) + count
    return counts


def rank_counts(counts: Mapping[str, int]) -> list[tuple[str, int]]:
    """Sort (name, count) pairs by count descending; ties keep first-seen order."""
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)


def extract_tickers(scans: Iterable[ScanRecord], limit: int = TICKER_LIMIT) -> list[TickerCount]:
    """
    Rank the most mentioned tickers across scans.

    Args:
        scans: Loaded scan records
        limit: Maximum number of tickers returned

    Returns:
        Up to `limit` TickerCount entries, most mentioned first
    """
    ranked = rank_counts(count_tickers(scans))[:limit]
    return [TickerCount(name=name, mentions=mentions) for name, mentions in ranked]
