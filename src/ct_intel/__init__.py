"""
CT Intelligence: rolling sentiment and ticker briefs from social-media scans.

Pipeline:
- Scan loading from a live directory with archive fallback
- Ticker and commodity mention extraction
- Sentiment, regime and fear classification
- Split-half momentum, narrative detection and engagement ranking
"""

from .brief import generate_brief
from .config import CTIntelConfig, load_config
from .extract import extract_commodities, extract_tickers
from .loader import ScanArchive, ScanLoader
from .signals import (
    analyze_sentiment,
    compute_momentum,
    detect_narratives,
    detect_regime,
    fear_gauge,
    get_high_engagement,
)

__version__ = "0.1.0"
__all__ = [
    "CTIntelConfig",
    "ScanArchive",
    "ScanLoader",
    "analyze_sentiment",
    "compute_momentum",
    "detect_narratives",
    "detect_regime",
    "extract_commodities",
    "extract_tickers",
    "fear_gauge",
    "generate_brief",
    "get_high_engagement",
    "load_config",
]
