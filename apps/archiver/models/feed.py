from shared.db import db
from datetime import datetime

# last_checked starts here so that every dated item counts as new
EPOCH = datetime(1970, 1, 1)

class Feed(db.Model):
    __tablename__ = "feeds"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text)
    url = db.Column(db.Text)            # uniqueness is checked by FeedStore, not the schema
    last_checked = db.Column(db.DateTime, default=EPOCH)
    created = db.Column(db.DateTime)

    def __repr__(self):
        return f"<Feed {self.id} {self.url!r}>"
