from flask import current_app
from flask_jwt_extended import get_jwt, get_jwt_identity

from app.models.post_model import OwnerContext
from app.schemas.post_schema import post_create_schema, post_update_schema


def _post_repository():
    return current_app.extensions["post_repository"]


def current_owner() -> OwnerContext:
    """Build the owner context from the verified access token."""
    claims = get_jwt()
    return OwnerContext(
        id=int(get_jwt_identity()),
        username=claims.get("username") or "",
        avatar_ref=claims.get("imgProfile"),
    )


def _serialize_posts(posts):
    return [post.to_dict() for post in posts]


def get_posts(limit, offset):
    return _serialize_posts(_post_repository().list_posts(limit, offset))


def count_posts():
    return {"total": _post_repository().count()}


def get_post_by_slug(slug: str):
    return _post_repository().get_by_slug(slug).to_dict()


def search_posts(query, limit):
    return _serialize_posts(_post_repository().search(query, limit))


def create_post(payload, owner: OwnerContext):
    fields = post_create_schema.load(payload)
    return _post_repository().create(fields, owner).to_dict()


def update_post(post_id: int, payload, owner: OwnerContext):
    fields = post_update_schema.load(payload)
    return _post_repository().update(post_id, fields, owner).to_dict()


def delete_post(post_id: int, owner: OwnerContext):
    _post_repository().remove(post_id, owner)
    return {"success": True}
