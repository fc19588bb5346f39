"""Feed Bag: an RSS feed archiver.

With URL arguments, each feed is fetched once, named and added to the
database. Without arguments, every known feed is scanned and new items are
archived.
"""
import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from apps.archiver.app import create_app
from services.collector.fetch import fetch_feed
from services.collector.scan import scan_all
from services.storage.store import FeedStore
from shared.db import db
from shared.errors import FeedbagError, FeedExistsError
from shared.settings import settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="feedbag",
        usage="%(prog)s [options] [feed_url ...]",
        description=__doc__.splitlines()[0],
    )
    p.add_argument("urls", nargs="*", metavar="feed_url",
                   help="feed to add; without any, all known feeds are scanned")
    p.add_argument("-d", "--db", default=settings.DATABASE, metavar="DB",
                   help="use feed database DB (default: %(default)s)")
    p.add_argument("-l", "--list", action="store_true", help="list all the feeds")
    p.add_argument("-C", "--clean", action="store_true",
                   help="wipe the current feed DB and rebuild it (be careful!)")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p


def _list_feeds(store: FeedStore):
    for feed in store.all_feeds():
        print(f"{feed.id}: {feed.name} (Checked: {feed.last_checked}) - {store.count_entries(feed)}")


def _add_feeds(store: FeedStore, urls, fetch):
    for url in urls:
        try:
            feed = store.add_feed(url, fetch=fetch)
        except FeedExistsError as e:
            print(e)
            continue
        print(f"Created new feed for {url}")
        print(f"\tThe new feed is called '{feed.name}'")


def run(args, fetch=fetch_feed) -> int:
    print(f"Using {args.db} for Feed DB")
    app = create_app(args.db)
    with app.app_context():
        store = FeedStore(db)

        if args.clean:
            store.clean()
            print("Cleaned DB!")
            return 0

        # no-op unless the database is new
        store.create_tables()

        if args.list:
            _list_feeds(store)
        elif args.urls:
            _add_feeds(store, args.urls, fetch)
        else:
            n = scan_all(store, fetch=fetch)
            print()
            logger.info("archived %d new entries", n)
    return 0


def main(argv=None, fetch=fetch_feed) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return run(args, fetch=fetch)
    except (FeedbagError, SQLAlchemyError) as e:
        logger.debug("aborted", exc_info=True)
        print(f"[feedbag] error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
