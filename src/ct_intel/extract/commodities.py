"""Commodity and macro keyword mention extraction."""

from collections.abc import Iterable, Mapping, Sequence

from ..models import CommodityCount
from ..records import ScanRecord, as_count
from .tickers import rank_counts

KEYWORD_CATEGORIES = ("commodities", "metals", "macro", "industry")


def extract_commodities(scans: Iterable[ScanRecord]) -> list[CommodityCount]:
    """
    Sum `keywordMentions` counts across the fixed keyword categories.

    A keyword listed under two categories (gold under both commodities
    and metals) has both counts added.

    Returns:
        Every keyword seen, most mentioned first
    """
    counts: dict[str, int] = {}
    for record in scans:
        mentions = record.get("keywordMentions")
        if not isinstance(mentions, Mapping):
            continue
        for category in KEYWORD_CATEGORIES:
            keywords = mentions.get(category)
            if not isinstance(keywords, Mapping):
                continue
            for keyword, value in keywords.items():
                count = as_count(value)
                if count is not None:
                    counts[keyword] = counts.get(keyword, 0) + count

    return [CommodityCount(name=name, mentions=mentions) for name, mentions in rank_counts(counts)]


def mentions_of(commodities: Sequence[CommodityCount], name: str) -> int:
    """Mentions for one keyword, 0 when absent."""
    for commodity in commodities:
        if commodity.name == name:
            return commodity.mentions
    return 0
