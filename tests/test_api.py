"""Tests for the HTTP API and dashboard."""

import pytest
from fastapi.testclient import TestClient

from ct_intel import __version__
from ct_intel.api import create_app
from ct_intel.api.main import parse_hours
from ct_intel.config import CTIntelConfig, DataConfig
from ct_intel.loader import ScanArchive

from .helpers import scan


@pytest.fixture
def config(data_dir, tmp_path):
    return CTIntelConfig(data=DataConfig(data_dir=data_dir, bundle_path=tmp_path / "bundle.json"))


@pytest.fixture
def client(config):
    return TestClient(create_app(config, archive=ScanArchive.empty()))


@pytest.fixture
def recent_scans(write_scan):
    # Timestamps are relative to the fixed test clock, so use the 0h window.
    write_scan("01.json", scan(
        1,
        sentiment={"bullish": 80, "bearish": 20},
        topTickers=[["$BTC", 5]],
        keywordMentions={"metals": {"gold": 60}},
        highEngagement=[{"author": "<script>", "likes": 200, "text": "<b>pump</b>", "url": "https://x.com/1"}],
    ))
    write_scan("02.json", scan(
        1,
        sentiment={"bullish": 60, "bearish": 40},
        tickers={"BTC": 3},
    ))


class TestParseHours:
    """Tests for lenient window parsing."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, 24),
            ("8", 8),
            ("0", 0),
            ("168", 168),
            ("12h", 12),
            ("abc", 24),
            ("-5", 24),
            ("", 24),
            ("²", 24),
            ("1²", 1),
            ("8¹", 8),
            ("٣", 24),
        ],
    )
    def test_values(self, raw, expected):
        """Test that the leading ASCII digits are used, or the default."""
        assert parse_hours(raw, 24) == expected


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client):
        """Test that health reports status and version."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}


class TestBriefEndpoints:
    """Tests for /api/brief and /api/brief/compact."""

    def test_empty_brief(self, client):
        """Test that an empty data directory still gives a brief."""
        response = client.get("/api/brief")

        assert response.status_code == 200
        data = response.json()
        assert data["scanCount"] == 0
        assert data["window"] == "24h"
        assert data["regime"]["sentiment"]["trend"] == "NO DATA"

    def test_full_brief(self, client, recent_scans):
        """Test the full brief over the live scans."""
        data = client.get("/api/brief", params={"hours": 0}).json()

        assert data["window"] == "0h"
        assert data["scanCount"] == 2
        assert data["tickers"] == [{"name": "BTC", "mentions": 8}]
        assert data["regime"]["fear"] == "EXTREME"
        assert data["regime"]["sentiment"]["ratio"] == 2.33
        assert data["topPosts"][0]["likes"] == 200
        assert data["meta"]["scanSource"] == "live"

    def test_invalid_hours_uses_default(self, client):
        """Test that a non-numeric window falls back to the default."""
        assert client.get("/api/brief", params={"hours": "soon"}).json()["window"] == "24h"

    @pytest.mark.parametrize("hours", ["²", "٣"])
    def test_non_ascii_digits_use_default(self, client, hours):
        """Test that superscript and non-Latin digits fall back to the default window."""
        response = client.get("/api/brief", params={"hours": hours})

        assert response.status_code == 200
        assert response.json()["window"] == "24h"

    def test_compact(self, client, recent_scans):
        """Test the compact summary endpoint."""
        data = client.get("/api/brief/compact", params={"hours": 0}).json()

        assert data == {
            "regime": "LEANING BULL",
            "sentiment": "70%↑ 30%↓",
            "ratio": "2.33:1",
            "trend": "DECLINING",
            "fear": "EXTREME",
            "topTickers": "$BTC(8)",
            "scans": 2,
        }


class TestSignalEndpoints:
    """Tests for /api/tickers and /api/fear."""

    def test_tickers(self, client, recent_scans):
        """Test that tickers are returned ranked."""
        assert client.get("/api/tickers?hours=0").json() == [{"name": "BTC", "mentions": 8}]

    def test_fear(self, client, recent_scans):
        """Test that the fear gauge comes with its commodity counts."""
        data = client.get("/api/fear?hours=0").json()

        assert data == {"gauge": "EXTREME", "commodities": [{"name": "gold", "mentions": 60}]}

    def test_archive_fallback(self, config):
        """Test that the archive serves requests when no live scans exist."""
        client = TestClient(create_app(config, archive=ScanArchive.from_scans([{"tickers": {"ETH": 4}}])))

        assert client.get("/api/tickers?hours=0").json() == [{"name": "ETH", "mentions": 4}]


class TestDashboard:
    """Tests for the HTML dashboard."""

    def test_renders_html(self, client, recent_scans):
        """Test that the dashboard renders the brief as HTML."""
        response = client.get("/?hours=0")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "$BTC" in response.text
        assert "LEANING BULL" in response.text

    def test_scan_text_escaped(self, client, recent_scans):
        """Test that scan-supplied text is HTML-escaped."""
        html = client.get("/?hours=0").text

        assert "<b>pump</b>" not in html
        assert "&lt;b&gt;pump&lt;/b&gt;" in html
        assert "@&lt;script&gt;" in html

    def test_active_window_link(self, client):
        """Test that the selected window link is highlighted."""
        html = client.get("/?hours=48").text

        assert 'class="active" href="/?hours=48"' in html

    def test_empty_window_renders(self, client):
        """Test that the dashboard renders with no scans."""
        assert client.get("/").status_code == 200

    def test_non_ascii_digit_window_renders(self, client):
        """Test that a superscript window falls back instead of failing."""
        assert client.get("/", params={"hours": "²"}).status_code == 200
