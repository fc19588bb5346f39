import logging

from services.collector.fetch import fetch_feed

logger = logging.getLogger(__name__)


def _echo(text: str):
    print(text, end="", flush=True)


def scan_feed(store, feed, fetch=fetch_feed, out=_echo) -> int:
    """Archive every item newer than the feed's watermark, then advance it.

    Items are committed one at a time; a failure part way through keeps
    whatever was already saved and propagates. `out` receives progress
    text verbatim (newlines included).
    """
    parsed = fetch(feed.url)
    watermark = feed.last_checked

    added = 0
    for item in parsed.items:
        if item.published > watermark:
            out(f"\t{item.title or '(untitled)'}\n")
            store.add_entry(feed, item)
            added += 1
        else:
            out(".")

    store.advance(feed)
    logger.info("feed %s: %d new of %d items, checked up to %s",
                feed.id, added, len(parsed.items), feed.last_checked)
    return added


def scan_all(store, fetch=fetch_feed, out=_echo) -> int:
    total = 0
    for feed in store.all_feeds():
        out(f"\nScanning {feed.name}\n")
        total += scan_feed(store, feed, fetch=fetch, out=out)
    return total
