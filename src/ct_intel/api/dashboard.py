"""
Server-rendered HTML dashboard for a brief.

Every scan-derived string passes through ``html.escape`` before it is
placed in the page.
"""

from html import escape

from ..extract.commodities import mentions_of
from ..models import Brief, FearLevel, MomentumEntry, Regime, format_number

WINDOW_LINKS = ((8, "8h"), (24, "24h"), (48, "48h"), (168, "7d"))

BULLISH_REGIMES = {Regime.EUPHORIA, Regime.BULLISH, Regime.LEANING_BULL}
BEARISH_REGIMES = {Regime.LEANING_BEAR, Regime.BEARISH}

STYLES = """
<style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    :root {
        --bg: #0b0d12;
        --panel: #141821;
        --line: #232a36;
        --text: #dde3ec;
        --muted: #7a8597;
        --up: #34d399;
        --down: #f87171;
        --warn: #fbbf24;
        --link: #60a5fa;
    }
    body { background: var(--bg); color: var(--text); font-family: system-ui, sans-serif; }
    .header { border-bottom: 1px solid var(--line); padding: 1.75rem 2rem; }
    .wrap { max-width: 920px; margin: 0 auto; }
    .title { font-family: monospace; font-size: 1.1rem; color: var(--up); }
    .generated { font-family: monospace; font-size: 0.75rem; color: var(--muted); margin-top: 0.4rem; }
    .windows { margin-top: 0.9rem; display: flex; gap: 0.4rem; }
    .windows a { font-family: monospace; font-size: 0.75rem; color: var(--muted);
                 border: 1px solid var(--line); border-radius: 4px; padding: 0.2rem 0.6rem;
                 text-decoration: none; }
    .windows a.active { color: var(--up); border-color: var(--up); }
    .content { padding: 2rem; }
    .card, .section { background: var(--panel); border: 1px solid var(--line);
                      border-radius: 10px; padding: 1.4rem; margin-bottom: 1.4rem; }
    .card { display: grid; grid-template-columns: repeat(3, 1fr); gap: 1.2rem; text-align: center; }
    .label { font-family: monospace; font-size: 0.7rem; color: var(--muted); text-transform: uppercase; }
    .value { font-family: monospace; font-size: 1.4rem; font-weight: 600; margin: 0.4rem 0; }
    .detail { font-size: 0.8rem; color: var(--muted); }
    .bullish, .up { color: var(--up); }
    .bearish, .down, .fear-high { color: var(--down); }
    .neutral, .new { color: var(--warn); }
    .fear-low { color: var(--up); }
    h2 { font-family: monospace; font-size: 0.8rem; color: var(--muted); text-transform: uppercase;
         border-bottom: 1px solid var(--line); padding-bottom: 0.5rem; margin-bottom: 1rem; }
    .tickers { display: grid; grid-template-columns: repeat(auto-fill, minmax(130px, 1fr)); gap: 0.5rem; }
    .ticker { display: flex; justify-content: space-between; font-family: monospace; font-size: 0.8rem;
              padding: 0.45rem 0.7rem; background: rgba(255, 255, 255, 0.03); border-radius: 5px; }
    .row { display: flex; align-items: center; gap: 0.75rem; font-family: monospace;
           font-size: 0.8rem; padding: 0.35rem 0; }
    .row .name { width: 90px; }
    .bar { flex: 1; height: 5px; background: var(--line); border-radius: 3px; overflow: hidden; }
    .fill { height: 100%; background: var(--link); }
    .fill.up { background: var(--up); }
    .fill.down { background: var(--down); }
    .fill.new { background: var(--warn); }
    .narrative { display: flex; gap: 0.75rem; padding: 0.4rem 0; font-size: 0.9rem; }
    .strength { margin-left: auto; color: var(--muted); font-family: monospace; font-size: 0.8rem; }
    .post { padding: 0.8rem 0; border-bottom: 1px solid var(--line); }
    .post:last-child { border-bottom: none; }
    .author { font-family: monospace; font-size: 0.8rem; color: var(--link); }
    .text { font-size: 0.9rem; margin: 0.3rem 0; line-height: 1.45; }
    .likes { font-size: 0.75rem; color: var(--muted); }
    .likes a { color: var(--link); text-decoration: none; }
    .api-note { font-family: monospace; font-size: 0.75rem; color: var(--muted); text-align: center; }
    code { color: var(--text); }
</style>
"""


def _regime_class(regime: Regime) -> str:
    if regime in BULLISH_REGIMES:
        return "bullish"
    if regime in BEARISH_REGIMES:
        return "bearish"
    return "neutral"


def _fear_class(fear: FearLevel) -> str:
    return "fear-high" if fear in (FearLevel.HIGH, FearLevel.EXTREME) else "fear-low"


def _window_links(hours: int) -> str:
    links = ""
    for value, label in WINDOW_LINKS:
        active = ' class="active"' if value == hours else ""
        links += f'<a{active} href="/?hours={value}">{label}</a>'
    return links


def _regime_card(brief: Brief) -> str:
    regime = brief.regime
    sentiment = regime.sentiment
    gold = mentions_of(brief.commodities, "gold")
    return f"""
    <div class="card">
        <div>
            <div class="label">Regime</div>
            <div class="value {_regime_class(regime.label)}">{regime.label.value}</div>
            <div class="detail">{sentiment.ratio_label}:1 ratio &middot; {sentiment.trend.value}</div>
        </div>
        <div>
            <div class="label">Sentiment</div>
            <div class="value">{format_number(sentiment.bull)}% <span class="up">&uarr;</span> {format_number(sentiment.bear)}% <span class="down">&darr;</span></div>
            <div class="detail">{brief.scan_count} scans analyzed</div>
        </div>
        <div>
            <div class="label">Fear Gauge</div>
            <div class="value {_fear_class(regime.fear)}">{regime.fear.value}</div>
            <div class="detail">Gold: {gold} mentions</div>
        </div>
    </div>
    """


def _tickers_section(brief: Brief) -> str:
    items = "".join(
        f'<div class="ticker"><span>${escape(t.name)}</span><span>{t.mentions}</span></div>'
        for t in brief.tickers
    )
    return f'<div class="section"><h2>Top Tickers</h2><div class="tickers">{items}</div></div>'


def _momentum_row(entry: MomentumEntry) -> str:
    if entry.change == "NEW":
        direction, width, label = "new", 50, "NEW"
    else:
        direction = "up" if entry.change > 0 else "down"
        width = min(abs(entry.change), 100)
        label = f"{'+' if entry.change > 0 else ''}{entry.change}%"
    return (
        f'<div class="row"><span class="name">${escape(entry.name)}</span>'
        f'<div class="bar"><div class="fill {direction}" style="width:{width}%"></div></div>'
        f'<span class="{direction}">{label}</span></div>'
    )


def _momentum_section(brief: Brief) -> str:
    rows = "".join(_momentum_row(m) for m in brief.momentum)
    return f'<div class="section"><h2>Momentum (split-half)</h2>{rows}</div>'


def _narratives_section(brief: Brief) -> str:
    if not brief.narratives:
        return ""
    rows = "".join(
        f'<div class="narrative"><span>{escape(n.type)}</span><span>{escape(n.label)}</span>'
        f'<span class="strength">{n.strength} signals</span></div>'
        for n in brief.narratives
    )
    return f'<div class="section"><h2>Active Narratives</h2>{rows}</div>'


def _commodities_section(brief: Brief) -> str:
    top = brief.commodities[0].mentions if brief.commodities else 0
    rows = ""
    for commodity in brief.commodities:
        width = round(commodity.mentions / top * 100) if top > 0 else 0
        rows += (
            f'<div class="row"><span class="name">{escape(commodity.name)}</span>'
            f'<div class="bar"><div class="fill" style="width:{width}%"></div></div>'
            f"<span>{commodity.mentions}</span></div>"
        )
    return f'<div class="section"><h2>Commodity &amp; Macro Signals</h2>{rows}</div>'


def _posts_section(brief: Brief) -> str:
    if not brief.top_posts:
        return ""
    posts = ""
    for post in brief.top_posts:
        link = ""
        if post.url and post.url.startswith(("http://", "https://")):
            link = f' &middot; <a href="{escape(post.url)}" target="_blank" rel="noopener">View</a>'
        posts += f"""
        <div class="post">
            <div class="author">@{escape(post.author or "unknown")}</div>
            <div class="text">{escape(post.text or "")}</div>
            <div class="likes">{post.likes:,} likes{link}</div>
        </div>
        """
    return f'<div class="section"><h2>Top Engagement</h2>{posts}</div>'


def render_dashboard(brief: Brief, hours: int) -> str:
    """
    Render the dashboard page for a brief.

    Args:
        brief: Brief to display
        hours: Window the brief was built for, used to mark the active link
    """
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>CT Intelligence Brief</title>
    {STYLES}
</head>
<body>
    <div class="header">
        <div class="wrap">
            <div class="title">CT Intelligence</div>
            <div class="generated">{escape(brief.generated_human)} &middot; {brief.scan_count} scans &middot; {escape(brief.window)} window</div>
            <div class="windows">{_window_links(hours)}</div>
        </div>
    </div>
    <div class="content wrap">
        {_regime_card(brief)}
        {_tickers_section(brief)}
        {_momentum_section(brief)}
        {_narratives_section(brief)}
        {_commodities_section(brief)}
        {_posts_section(brief)}
        <div class="api-note">
            API: <code>GET /api/brief</code> &middot; <code>/api/brief/compact</code> &middot;
            <code>/api/tickers</code> &middot; <code>/api/fear</code><br>
            Params: <code>?hours=24</code> (8, 24, 48, 168; 0 for all scans)
        </div>
    </div>
</body>
</html>
"""
