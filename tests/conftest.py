from datetime import datetime

import pytest

from apps.archiver.app import create_app
from services.collector.fetch import parse_feed
from services.storage.store import FeedStore
from shared.db import db
from shared.errors import FeedFetchError


def rss(title, items, extra_ns=False):
    """Render a small RSS 2.0 document. items: dicts with title/link/date[/description/content]."""
    out = []
    for it in items:
        parts = [f"<title>{it['title']}</title>", f"<link>{it['link']}</link>"]
        if it.get("date"):
            parts.append(f"<pubDate>{it['date'].strftime('%a, %d %b %Y %H:%M:%S')} +0000</pubDate>")
        if it.get("description") is not None:
            parts.append(f"<description>{it['description']}</description>")
        if it.get("content") is not None:
            parts.append(f"<content:encoded><![CDATA[{it['content']}]]></content:encoded>")
        out.append("<item>" + "".join(parts) + "</item>")
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">'
        f"<channel><title>{title}</title><link>http://example.com/</link>"
        "<description>test feed</description>"
        + "".join(out)
        + "</channel></rss>"
    ).encode("utf-8")


def item(n, date, **kw):
    return dict(title=f"Item {n}", link=f"http://example.com/{n}", date=date,
                description=kw.pop("description", f"About item {n}"), **kw)


class FakeFetcher:
    """Serves canned documents by URL through the real parser; no network."""

    def __init__(self):
        self.docs = {}
        self.calls = []

    def __call__(self, url):
        self.calls.append(url)
        if url not in self.docs:
            raise FeedFetchError(url, "404 Not Found")
        return parse_feed(self.docs[url], url=url)


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "feedbag.db")


@pytest.fixture
def app(db_path):
    app = create_app(db_path)
    with app.app_context():
        yield app
        db.session.remove()


@pytest.fixture
def store(app):
    s = FeedStore(db)
    s.create_tables()
    return s


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def jan():
    return lambda day, hour=0: datetime(2020, 1, day, hour)
