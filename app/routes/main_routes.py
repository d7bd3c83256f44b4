import os

from flask import Blueprint, current_app, jsonify, send_from_directory

main_bp = Blueprint("main", __name__)


@main_bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"}), 200


@main_bp.route("/uploads/<path:filename>", methods=["GET"])
def uploaded_file(filename):
    upload_folder = os.path.abspath(current_app.config["UPLOAD_FOLDER"])
    return send_from_directory(upload_folder, filename)
