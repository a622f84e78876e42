"""FastAPI service exposing CT intelligence briefs."""

import string
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import HTMLResponse

from .. import __version__
from ..brief import compact_brief, generate_brief
from ..config import CTIntelConfig
from ..extract import extract_commodities, extract_tickers
from ..loader import ScanArchive, ScanLoader
from ..logging import get_logger
from ..models import Brief, CompactBrief, FearReport, TickerCount
from ..signals import fear_gauge
from .dashboard import render_dashboard

logger = get_logger(__name__)


def parse_hours(raw: Optional[str], default: int) -> int:
    """
    Parse a window query value leniently.

    Missing, non-numeric or negative values fall back to the default.
    A leading integer is accepted ("12h" -> 12).
    """
    if raw is None:
        return default
    digits = ""
    for char in raw.strip():
        if char not in string.digits:
            break
        digits += char
    return int(digits) if digits else default


def window_hours(request: Request, hours: Optional[str] = Query(None)) -> int:
    """Dependency resolving the `hours` query parameter."""
    return parse_hours(hours, request.app.state.config.brief.default_window_hours)


def get_loader(request: Request) -> ScanLoader:
    """Dependency building a loader over the live directory and the shared archive."""
    state = request.app.state
    return ScanLoader(state.config.data.data_dir, archive=state.archive)


def create_app(
    config: Optional[CTIntelConfig] = None,
    archive: Optional[ScanArchive] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        config: Service configuration; defaults when omitted
        archive: Fallback scans; loaded from config.data.bundle_path when omitted

    Returns:
        Configured FastAPI app
    """
    config = config or CTIntelConfig.default()
    if archive is None:
        archive = ScanArchive.load(config.data.bundle_path)

    app = FastAPI(
        title="CT Intelligence API",
        description="Rolling sentiment, ticker and narrative briefs from Crypto Twitter scans",
        version=__version__,
    )
    app.state.config = config
    app.state.archive = archive

    logger.info(f"Serving scans from {config.data.data_dir} ({len(archive)} archived)")

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    @app.get("/api/brief", response_model=Brief)
    def get_brief(
        hours: int = Depends(window_hours),
        loader: ScanLoader = Depends(get_loader),
    ):
        """Full brief for the trailing window."""
        return generate_brief(loader, hours, config=config.brief)

    @app.get("/api/brief/compact", response_model=CompactBrief)
    def get_compact_brief(
        hours: int = Depends(window_hours),
        loader: ScanLoader = Depends(get_loader),
    ):
        """One-line digest of the brief."""
        return compact_brief(generate_brief(loader, hours, config=config.brief))

    @app.get("/api/tickers", response_model=list[TickerCount])
    def get_tickers(
        hours: int = Depends(window_hours),
        loader: ScanLoader = Depends(get_loader),
    ):
        """Ranked ticker mentions (top 20)."""
        return extract_tickers(loader.load(hours))

    @app.get("/api/fear", response_model=FearReport)
    def get_fear(
        hours: int = Depends(window_hours),
        loader: ScanLoader = Depends(get_loader),
    ):
        """Fear gauge with every commodity count behind it."""
        commodities = extract_commodities(loader.load(hours))
        return FearReport(gauge=fear_gauge(commodities), commodities=commodities)

    @app.get("/", response_class=HTMLResponse)
    def dashboard(
        hours: int = Depends(window_hours),
        loader: ScanLoader = Depends(get_loader),
    ):
        """HTML dashboard."""
        return render_dashboard(generate_brief(loader, hours, config=config.brief), hours)

    return app
