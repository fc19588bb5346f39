import logging
from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from apps.archiver.models import Entry, Feed
from apps.archiver.models.feed import EPOCH
from services.collector.fetch import fetch_feed
from shared.errors import FeedExistsError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class FeedStore:
    """Storage service over the feeds/entries tables.

    Every operation that touches the database goes through one of these;
    it must be used inside the Flask app context the extension is bound to.
    """

    def __init__(self, db):
        self.db = db

    @property
    def session(self):
        return self.db.session

    # ---- schema ----

    def create_feeds_table(self):
        Feed.__table__.create(self.db.engine, checkfirst=True)

    def create_entries_table(self):
        Entry.__table__.create(self.db.engine, checkfirst=True)

    def drop_feeds_table(self):
        Feed.__table__.drop(self.db.engine, checkfirst=True)

    def drop_entries_table(self):
        Entry.__table__.drop(self.db.engine, checkfirst=True)

    def create_tables(self):
        self.create_feeds_table()
        self.create_entries_table()

    def clean(self):
        # entries reference feeds, so they go first
        self.session.remove()
        self.drop_entries_table()
        self.drop_feeds_table()
        self.create_tables()
        logger.info("dropped and recreated feeds/entries")

    def _commit(self):
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.debug("commit failed, rolled back", exc_info=True)
            raise

    # ---- feeds ----

    def find_feed(self, url: str) -> Feed | None:
        return Feed.query.filter_by(url=url).first()

    def all_feeds(self) -> list[Feed]:
        return Feed.query.order_by(Feed.id).all()

    def add_feed(self, url: str, fetch=fetch_feed) -> Feed:
        existing = self.find_feed(url)
        if existing:
            raise FeedExistsError(existing)

        # fetch before touching the session; a failed fetch leaves no row
        parsed = fetch(url)

        feed = Feed(url=url)
        feed.name = parsed.title
        feed.created = _utcnow()
        feed.last_checked = EPOCH
        self.session.add(feed)
        self._commit()
        logger.info("added feed %s (%s) as id %s", url, feed.name, feed.id)
        return feed

    # ---- entries ----

    def list_entries(self, feed: Feed) -> list[Entry]:
        return Entry.query.filter_by(feed_id=feed.id).order_by(Entry.id).all()

    def count_entries(self, feed: Feed) -> int:
        return Entry.query.filter_by(feed_id=feed.id).count()

    def last_entry_time(self, feed: Feed) -> datetime:
        last = (self.session.query(func.max(Entry.time))
                .filter(Entry.feed_id == feed.id)
                .scalar())
        return last if last is not None else feed.last_checked

    def add_entry(self, feed: Feed, item) -> Entry:
        entry = Entry(
            url=item.url,
            title=item.title,
            content=item.content,
            time=item.published,
            feed_id=feed.id,
        )
        if item.description != item.content:
            entry.description = item.description
        self.session.add(entry)
        self._commit()
        return entry

    def advance(self, feed: Feed) -> datetime:
        """Move last_checked up to the newest archived entry; never backwards."""
        newest = self.last_entry_time(feed)
        if newest > feed.last_checked:
            logger.debug("feed %s watermark %s -> %s", feed.id, feed.last_checked, newest)
            feed.last_checked = newest
        self._commit()
        return feed.last_checked
