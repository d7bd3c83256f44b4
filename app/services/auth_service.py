import logging

from flask import current_app
from flask_jwt_extended import create_access_token, create_refresh_token
from werkzeug.security import check_password_hash, generate_password_hash

from app.errors import NotFoundError
from app.schemas.auth_schema import login_schema, register_schema
from app.services.upload_service import save_image


logger = logging.getLogger(__name__)


def _user_repository():
    return current_app.extensions["user_repository"]


def _identity_claims(user):
    return {"username": user.username, "imgProfile": user.img_profile}


def _issue_tokens(user):
    identity = str(user.id)
    claims = _identity_claims(user)
    return {
        "access_token": create_access_token(identity=identity, additional_claims=claims),
        "refresh_token": create_refresh_token(identity=identity, additional_claims=claims),
    }


def register(payload):
    data = register_schema.load(payload)
    username = data["username"].strip()
    if not username:
        raise ValueError("Username is required")

    user = _user_repository().create_user(
        username=username,
        password_hash=generate_password_hash(data["password"]),
        name=data.get("name"),
        img_profile=data.get("img_profile"),
    )
    logger.info("Registered user %s (%s)", user.id, user.username)
    return _issue_tokens(user)


def login(payload):
    data = login_schema.load(payload)
    username = data["username"].strip()

    user = _user_repository().get_by_username(username)
    if not user or not check_password_hash(user.password_hash, data["password"]):
        logger.info("Rejected login for %s", username)
        raise ValueError("Invalid credentials")

    return _issue_tokens(user)


def refresh_access_token(identity):
    user = _user_repository().get_by_id(int(identity))
    if not user:
        raise NotFoundError("User not found")
    return {
        "access_token": create_access_token(identity=str(user.id), additional_claims=_identity_claims(user))
    }


def get_profile(user_id: int):
    user = _user_repository().get_by_id(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user.to_public_dict()


def upload_profile_image(user_id: int, file_storage):
    """Store a new avatar and point the user's ``imgProfile`` at it.

    Posts copy the avatar from the token claims at creation time, so a fresh
    access token carrying the new ``imgProfile`` is returned alongside the url.
    """
    repository = _user_repository()
    if not repository.get_by_id(user_id):
        raise NotFoundError("User not found")

    url = save_image(file_storage, "profile")
    user = repository.update_img_profile(user_id, url)
    logger.info("Updated profile image for user %s", user.id)
    return {
        "message": "Profile image uploaded",
        "url": url,
        "access_token": create_access_token(identity=str(user.id), additional_claims=_identity_claims(user)),
    }
