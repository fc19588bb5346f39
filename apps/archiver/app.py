import os
from flask import Flask
from shared.settings import settings
from shared.db import db

def create_app(db_path: str | None = None):
    db_path = db_path or settings.DATABASE
    app = Flask(__name__)
    app.config.from_mapping(
        SQLALCHEMY_DATABASE_URI=f"sqlite:///{os.path.abspath(db_path)}",
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        FEEDBAG_DB=db_path,
    )

    db.init_app(app)
    return app
