import logging
from dataclasses import dataclass, field
from datetime import datetime
from urllib.parse import urlparse

import feedparser
import requests

from shared.errors import FeedFetchError, FeedParseError
from shared.settings import settings

logger = logging.getLogger(__name__)


@dataclass
class ParsedItem:
    url: str | None
    title: str | None
    content: str | None
    description: str | None
    published: datetime


@dataclass
class ParsedFeed:
    title: str
    items: list[ParsedItem] = field(default_factory=list)


def _to_datetime(entry) -> datetime | None:
    # feedparser normalises dates to UTC struct_time; stored naive
    t = entry.get("published_parsed") or entry.get("updated_parsed")
    if not t:
        return None
    return datetime(*t[:6])


def _content_of(entry) -> str | None:
    blocks = entry.get("content") or []
    for b in blocks:
        if b.get("value"):
            return b["value"]
    return entry.get("summary")


def parse_feed(data, url: str | None = None) -> ParsedFeed:
    """Turn a raw RSS/Atom document into a ParsedFeed.

    Raises FeedParseError when the document is not a feed at all, or when an
    item carries no usable publish date (it could never be compared against
    the watermark).
    """
    parsed = feedparser.parse(data)
    title = parsed.feed.get("title")
    if parsed.bozo and not title and not parsed.entries:
        raise FeedParseError(url, parsed.get("bozo_exception", "not a feed"))
    # HTML pages and empty bodies parse cleanly but are no known feed type
    if not parsed.get("version"):
        raise FeedParseError(url, "not an RSS or Atom document")

    if not title:
        title = urlparse(url).netloc if url else "untitled"

    items = []
    for e in parsed.entries:
        published = _to_datetime(e)
        if published is None:
            raise FeedParseError(url, f"item {e.get('link') or e.get('title')!r} has no date")
        items.append(ParsedItem(
            url=e.get("link"),
            title=e.get("title"),
            content=_content_of(e),
            description=e.get("summary"),
            published=published,
        ))
    logger.debug("parsed %s: %r with %d items", url, title, len(items))
    return ParsedFeed(title=title, items=items)


def fetch_feed(url: str, timeout: float | None = None) -> ParsedFeed:
    timeout = timeout or settings.REQUEST_TIMEOUT
    logger.info("fetching %s", url)
    try:
        r = requests.get(url, headers={"User-Agent": settings.USER_AGENT}, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        raise FeedFetchError(url, e) from e
    return parse_feed(r.content, url=url)
