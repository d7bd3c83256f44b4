from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from marshmallow import ValidationError

from app.errors import NotFoundError, StorageDegradedError, UnauthorizedError
from app.services import post_service
from app.services.upload_service import UploadError, save_image

post_bp = Blueprint("posts", __name__)


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


def _mutation_error(e):
    if isinstance(e, ValidationError):
        return jsonify({"error": "Invalid payload", "fields": e.messages}), 400
    if isinstance(e, NotFoundError):
        return jsonify({"error": str(e)}), 404
    if isinstance(e, UnauthorizedError):
        return jsonify({"error": str(e)}), 403
    return jsonify({"error": "Post storage is unavailable"}), 503


@post_bp.route("/posts", methods=["GET"])
def list_posts():
    limit = request.args.get("limit")
    offset = request.args.get("offset")
    return jsonify(post_service.get_posts(limit, offset)), 200


@post_bp.route("/posts/count", methods=["GET"])
def count_posts():
    return jsonify(post_service.count_posts()), 200


@post_bp.route("/posts/search/query", methods=["GET"])
def search_posts():
    query = request.args.get("q", "")
    limit = request.args.get("limit")
    return jsonify(post_service.search_posts(query, limit)), 200


@post_bp.route("/posts/<slug>", methods=["GET"])
def get_post(slug):
    try:
        return jsonify(post_service.get_post_by_slug(slug)), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404


@post_bp.route("/posts", methods=["POST"])
@jwt_required()
def create_post():
    data = _json_body()
    if data is None:
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        post = post_service.create_post(data, post_service.current_owner())
        return jsonify(post), 201
    except (ValidationError, StorageDegradedError) as e:
        return _mutation_error(e)


@post_bp.route("/posts/<int:post_id>", methods=["PATCH"])
@jwt_required()
def update_post(post_id):
    data = _json_body()
    if data is None:
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        post = post_service.update_post(post_id, data, post_service.current_owner())
        return jsonify(post), 200
    except (ValidationError, NotFoundError, UnauthorizedError, StorageDegradedError) as e:
        return _mutation_error(e)


@post_bp.route("/posts/<int:post_id>", methods=["DELETE"])
@jwt_required()
def delete_post(post_id):
    try:
        return jsonify(post_service.delete_post(post_id, post_service.current_owner())), 200
    except (NotFoundError, UnauthorizedError, StorageDegradedError) as e:
        return _mutation_error(e)


@post_bp.route("/posts/upload/cover", methods=["POST"])
@jwt_required()
def upload_cover():
    try:
        url = save_image(request.files.get("file"), "covers")
    except UploadError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"url": url}), 201


@post_bp.route("/posts/upload/img", methods=["POST"])
@jwt_required()
def upload_image():
    try:
        url = save_image(request.files.get("file"), "posts")
    except UploadError as e:
        return jsonify({"error": str(e), "url": None}), 400
    return jsonify({"url": url, "message": "Image uploaded successfully"}), 201
