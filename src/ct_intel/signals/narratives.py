"""Rule-based narrative detection over aggregate ticker and fear signals."""

from collections.abc import Sequence

from ..extract.commodities import mentions_of
from ..models import CommodityCount, FearLevel, Narrative, TickerCount

MAJOR_ASSETS = frozenset({"BTC", "ETH", "SOL", "MSTR", "SPX", "NVDA", "TSLA"})
TRADFI_TICKERS = frozenset({"MSTR", "SPX", "NVDA", "TSLA", "AAPL"})

MEMECOIN_MIN_TICKERS = 5


def detect_narratives(
    tickers: Sequence[TickerCount],
    commodities: Sequence[CommodityCount],
    fear: FearLevel,
) -> list[Narrative]:
    """
    Flag qualitative narratives.

    Rules (each independent):
    - More than 5 tickers outside the major assets: memecoin attention
    - Any TradFi ticker present: TradFi crossover
    - Fear gauge HIGH or EXTREME: precious metals / flight to safety
    """
    narratives = []

    memecoins = [t for t in tickers if t.name not in MAJOR_ASSETS]
    if len(memecoins) > MEMECOIN_MIN_TICKERS:
        narratives.append(Narrative(
            type="🎰",
            label="Memecoin attention dominates",
            strength=sum(t.mentions for t in memecoins),
        ))

    tradfi = [t for t in tickers if t.name in TRADFI_TICKERS]
    if tradfi:
        narratives.append(Narrative(
            type="🏦",
            label="TradFi crossover active",
            strength=sum(t.mentions for t in tradfi),
        ))

    if fear in (FearLevel.HIGH, FearLevel.EXTREME):
        narratives.append(Narrative(
            type="🥇",
            label="Precious metals elevated: flight to safety",
            strength=mentions_of(commodities, "gold"),
        ))

    return narratives
