class FeedbagError(Exception):
    """Base class for archiver failures the CLI reports and exits on."""


class FeedFetchError(FeedbagError):
    def __init__(self, url: str, reason):
        super().__init__(f"could not fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class FeedParseError(FeedbagError):
    def __init__(self, url: str | None, reason):
        super().__init__(f"could not parse {url or 'feed'}: {reason}")
        self.url = url
        self.reason = reason


class FeedExistsError(FeedbagError):
    def __init__(self, feed):
        super().__init__(f"Feed entitled '{feed.name}' already exists for {feed.url}")
        self.feed = feed
