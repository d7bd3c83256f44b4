import logging

from flask import Flask

from app.config import Config
from app.extensions.document_store import DocumentStore
from app.extensions.extensions import jwt, ma
from app.repositories.post_repository import PostRepository
from app.repositories.user_repository import UserRepository
from app.routes.auth_routes import auth_bp
from app.routes.main_routes import main_bp
from app.routes.post_routes import post_bp


def _configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("app").setLevel(level)


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    _configure_logging(app)

    ma.init_app(app)
    jwt.init_app(app)

    app.extensions["post_repository"] = PostRepository(
        DocumentStore(app.config["POSTS_DB_PATH"], "posts")
    )
    app.extensions["user_repository"] = UserRepository(
        DocumentStore(app.config["USERS_DB_PATH"], "users")
    )

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp, url_prefix="/api/v1/auth")
    app.register_blueprint(post_bp, url_prefix="/api/v1")

    return app
