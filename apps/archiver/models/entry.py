from shared.db import db

class Entry(db.Model):
    __tablename__ = "entries"
    id = db.Column(db.Integer, primary_key=True)
    url = db.Column(db.Text, index=True)
    title = db.Column(db.Text)
    content = db.Column(db.Text)
    description = db.Column(db.Text)    # NULL when identical to content
    time = db.Column(db.DateTime)
    feed_id = db.Column(db.Integer, db.ForeignKey("feeds.id"))

    def __repr__(self):
        return f"<Entry {self.id} feed={self.feed_id} {self.time}>"
