import os
from datetime import timedelta

from dotenv import load_dotenv


load_dotenv()


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


class Config:
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-secret")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=_env_int("JWT_ACCESS_TOKEN_MINUTES", 10))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=_env_int("JWT_REFRESH_TOKEN_DAYS", 15))

    DATA_DIR = os.getenv("DATA_DIR", "data")
    POSTS_DB_PATH = os.getenv("POSTS_DB_PATH", os.path.join(DATA_DIR, "posts.db.json"))
    USERS_DB_PATH = os.getenv("USERS_DB_PATH", os.path.join(DATA_DIR, "users.db.json"))
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", os.path.join(DATA_DIR, "uploads"))

    # Post bodies carry full HTML, so the request cap is generous.
    MAX_CONTENT_LENGTH = _env_int("MAX_CONTENT_LENGTH", 20 * 1024 * 1024)
    UPLOAD_MAX_IMAGE_BYTES = _env_int("UPLOAD_MAX_IMAGE_BYTES", 10 * 1024 * 1024)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
