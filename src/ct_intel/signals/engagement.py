"""Top engagement posts across scans."""

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from ..models import Post
from ..records import ScanRecord, as_count, is_array

TEXT_LIMIT = 200
RAW_LIKES_THRESHOLD = 100
DEFAULT_LIMIT = 5


def _text(value: Any) -> Optional[str]:
    return value[:TEXT_LIMIT] if isinstance(value, str) else None


def _str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def to_post(raw: Mapping[str, Any], prefer_username: bool = False) -> Post:
    """Map a scanner post object to a Post."""
    names = (raw.get("username"), raw.get("author"))
    if not prefer_username:
        names = names[::-1]
    author = next((n for n in map(_str, names) if n), None)

    return Post(
        author=author,
        likes=as_count(raw.get("likes")) or 0,
        text=_text(raw.get("text")),
        url=_str(raw.get("url")),
    )


def collect_posts(scans: Iterable[ScanRecord]) -> list[Post]:
    """Gather pre-extracted high-engagement posts and raw tweets above the likes threshold."""
    posts = []
    for record in scans:
        high_engagement = record.get("highEngagement")
        if is_array(high_engagement):
            posts.extend(to_post(p) for p in high_engagement if isinstance(p, Mapping))

        tweets = record.get("tweets")
        if is_array(tweets):
            for tweet in tweets:
                if not isinstance(tweet, Mapping):
                    continue
                if (as_count(tweet.get("likes")) or 0) > RAW_LIKES_THRESHOLD:
                    posts.append(to_post(tweet, prefer_username=True))
    return posts


def get_high_engagement(scans: Iterable[ScanRecord], limit: int = DEFAULT_LIMIT) -> list[Post]:
    """
    Rank posts by likes and keep the first occurrence of each url.

    Posts without a url are never merged with each other.

    Args:
        scans: Scan records
        limit: Number of posts to return

    Returns:
        Up to `limit` posts, most liked first
    """
    ranked = sorted(collect_posts(scans), key=lambda p: p.likes, reverse=True)

    seen_urls: set[str] = set()
    unique = []
    for post in ranked:
        if post.url is not None:
            if post.url in seen_urls:
                continue
            seen_urls.add(post.url)
        unique.append(post)

    return unique[:limit]
