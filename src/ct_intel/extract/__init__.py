"""Mention extraction from scan records."""

from .commodities import KEYWORD_CATEGORIES, extract_commodities, mentions_of
from .tickers import (
    CategorizedShape,
    CountMapShape,
    PairListShape,
    count_tickers,
    extract_tickers,
    ticker_shapes,
)

__all__ = [
    "KEYWORD_CATEGORIES",
    "CategorizedShape",
    "CountMapShape",
    "PairListShape",
    "count_tickers",
    "extract_commodities",
    "extract_tickers",
    "mentions_of",
    "ticker_shapes",
]
