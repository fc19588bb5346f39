from apps.archiver.models.feed import Feed
from apps.archiver.models.entry import Entry

__all__ = ["Feed", "Entry"]
