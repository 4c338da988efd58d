from flask import Flask

from app.config import Config
from app.extensions import db, migrate
from app.routes import register_routes


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.from_mapping(test_config)

    db.init_app(app)
    migrate.init_app(app, db)

    register_routes(app)
    return app


app = create_app()

__all__ = ["app", "db", "migrate", "create_app"]
