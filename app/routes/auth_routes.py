from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity
from marshmallow import ValidationError

from app.errors import NotFoundError, StorageDegradedError
from app.services import auth_service
from app.services.upload_service import UploadError


auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        tokens = auth_service.register(data)
        return jsonify(tokens), 201
    except ValidationError as e:
        return jsonify({"error": "Invalid payload", "fields": e.messages}), 400
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except StorageDegradedError:
        return jsonify({"error": "User storage is unavailable"}), 503


@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        return jsonify(auth_service.login(data)), 200
    except ValidationError as e:
        return jsonify({"error": "Invalid payload", "fields": e.messages}), 400
    except ValueError as e:
        return jsonify({"error": str(e)}), 401


@auth_bp.route("/refresh", methods=["POST"])
@jwt_required(refresh=True)
def refresh_token():
    try:
        return jsonify(auth_service.refresh_access_token(get_jwt_identity())), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 401


@auth_bp.route("/profile/<int:user_id>", methods=["GET"])
@jwt_required()
def get_profile(user_id):
    if int(get_jwt_identity()) != user_id:
        return jsonify({"error": "You can only access your own profile"}), 403

    try:
        return jsonify(auth_service.get_profile(user_id)), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404


@auth_bp.route("/upload/profile", methods=["POST"])
@jwt_required()
def upload_profile_image():
    try:
        result = auth_service.upload_profile_image(int(get_jwt_identity()), request.files.get("file"))
        return jsonify(result), 201
    except UploadError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except StorageDegradedError:
        return jsonify({"error": "User storage is unavailable"}), 503
