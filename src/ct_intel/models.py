"""
Data models for briefs and their derived signals.

All models serialize with camelCase keys, the shape dashboard and API
clients consume.
"""

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Immutable model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Trend(str, Enum):
    RISING = "RISING"
    DECLINING = "DECLINING"
    STABLE = "STABLE"
    NO_DATA = "NO DATA"


class Regime(str, Enum):
    EUPHORIA = "EUPHORIA"
    BULLISH = "BULLISH"
    LEANING_BULL = "LEANING BULL"
    NEUTRAL = "NEUTRAL"
    LEANING_BEAR = "LEANING BEAR"
    BEARISH = "BEARISH"


class FearLevel(str, Enum):
    EXTREME = "EXTREME"
    HIGH = "HIGH"
    ELEVATED = "ELEVATED"
    MODERATE = "MODERATE"
    LOW = "LOW"


class TickerCount(CamelModel):
    """Aggregated mention count for one ticker symbol."""

    name: str = Field(..., description="Ticker symbol without a leading $")
    mentions: int = Field(..., description="Summed mentions across scans")


class CommodityCount(CamelModel):
    """Aggregated mention count for one commodity/macro keyword."""

    name: str
    mentions: int


class SentimentSummary(CamelModel):
    """Window-level bullish/bearish averages and trend."""

    bull: float = 0.0
    bear: float = 0.0
    ratio: float = Field(0.0, description="bull/bear; 0 when unbounded or undefined")
    ratio_unbounded: bool = Field(False, description="True when bear is 0 and bull is positive")
    trend: Trend = Trend.NO_DATA
    scans: int = 0

    @property
    def ratio_label(self) -> str:
        """Ratio as displayed, with an unbounded ratio shown as ∞."""
        return "∞" if self.ratio_unbounded else format_number(self.ratio)


class MomentumEntry(CamelModel):
    """Split-half change in per-scan mention rate for one ticker."""

    name: str
    mentions: int
    change: Union[int, Literal["NEW"]]


class Narrative(CamelModel):
    """Qualitative pattern flagged from aggregate signals."""

    type: str = Field(..., description="Icon for the narrative")
    label: str
    strength: int


class Post(CamelModel):
    """High-engagement post, deduplicated by url."""

    author: Optional[str] = None
    likes: int = 0
    text: Optional[str] = None
    url: Optional[str] = None


class RegimeSummary(CamelModel):
    label: Regime
    sentiment: SentimentSummary
    fear: FearLevel


class Brief(CamelModel):
    """Full intelligence brief for one time window."""

    generated: str
    generated_human: str
    window: str
    scan_count: int
    regime: RegimeSummary
    tickers: list[TickerCount]
    momentum: list[MomentumEntry]
    commodities: list[CommodityCount]
    narratives: list[Narrative]
    top_posts: list[Post]
    meta: dict[str, Union[str, int]] = Field(default_factory=dict)


class CompactBrief(CamelModel):
    """One-line friendly digest of a brief."""

    regime: Regime
    sentiment: str
    ratio: str
    trend: Trend
    fear: FearLevel
    top_tickers: str
    scans: int


class FearReport(CamelModel):
    gauge: FearLevel
    commodities: list[CommodityCount]


def format_number(value: float) -> str:
    """Render 70.0 as "70" and 2.33 as "2.33"."""
    return str(int(value)) if float(value).is_integer() else str(value)
