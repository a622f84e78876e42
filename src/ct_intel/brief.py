"""
Brief assembly.

Composes loader output and every derived signal into a single Brief.
Each call reloads scans; nothing is cached between calls.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .config import BriefConfig
from .extract import extract_commodities, extract_tickers
from .loader import ScanLoader
from .logging import get_logger, log_execution_time
from .models import Brief, CompactBrief, RegimeSummary, format_number
from .signals import (
    analyze_sentiment,
    compute_momentum,
    detect_narratives,
    detect_regime,
    fear_gauge,
    get_high_engagement,
)

logger = get_logger(__name__)

BRIEF_TICKERS = 15
BRIEF_COMMODITIES = 8
BRIEF_POSTS = 5
COMPACT_TICKERS = 5


def format_iso(dt: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix."""
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def _display_zone(name: str):
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown display timezone {name!r}; using UTC")
        return timezone.utc


def format_human(dt: datetime, tz_name: str = "America/New_York") -> str:
    """Render e.g. "Saturday, October 17, 2026 at 5:36 PM" in the display timezone."""
    local = dt.astimezone(_display_zone(tz_name))
    hour = local.hour % 12 or 12
    return f"{local:%A, %B} {local.day}, {local.year} at {hour}:{local:%M} {local:%p}"


def generate_brief(
    loader: ScanLoader,
    hours: int = 24,
    *,
    config: Optional[BriefConfig] = None,
    now: Optional[datetime] = None,
) -> Brief:
    """
    Build the intelligence brief for the trailing window.

    Args:
        loader: Scan source
        hours: Window size in hours, 0 for every scan
        config: Display timezone and meta block; defaults when omitted
        now: Generation timestamp, current time when omitted

    Returns:
        Brief; an empty window gives an all-zero NO DATA brief
    """
    config = config or BriefConfig()
    now = now or datetime.now(timezone.utc)

    with log_execution_time(logger, f"brief generation ({hours}h)"):
        report = loader.load_with_report(hours)
        scans = report.scans

        sentiment = analyze_sentiment(scans)
        tickers = extract_tickers(scans)
        commodities = extract_commodities(scans)
        fear = fear_gauge(commodities)

        brief = Brief(
            generated=format_iso(now),
            generated_human=format_human(now, config.display_timezone),
            window=f"{hours}h",
            scan_count=len(scans),
            regime=RegimeSummary(
                label=detect_regime(sentiment.ratio),
                sentiment=sentiment,
                fear=fear,
            ),
            tickers=tickers[:BRIEF_TICKERS],
            momentum=compute_momentum(scans, tickers),
            commodities=commodities[:BRIEF_COMMODITIES],
            narratives=detect_narratives(tickers, commodities, fear),
            top_posts=get_high_engagement(scans, BRIEF_POSTS),
            meta={
                **config.meta,
                "scanSource": report.source,
                "droppedRecords": report.dropped,
            },
        )

    logger.debug(
        f"Brief {brief.window}: {brief.scan_count} scans from {report.source}, "
        f"regime {brief.regime.label.value}"
    )
    return brief


def compact_brief(brief: Brief) -> CompactBrief:
    """One-line digest: regime, sentiment, ratio and the top five tickers."""
    sentiment = brief.regime.sentiment
    return CompactBrief(
        regime=brief.regime.label,
        sentiment=f"{format_number(sentiment.bull)}%↑ {format_number(sentiment.bear)}%↓",
        ratio=f"{sentiment.ratio_label}:1",
        trend=sentiment.trend,
        fear=brief.regime.fear,
        top_tickers=" ".join(f"${t.name}({t.mentions})" for t in brief.tickers[:COMPACT_TICKERS]),
        scans=brief.scan_count,
    )
