import logging
import os
import time
import uuid

from flask import current_app
from werkzeug.utils import secure_filename


logger = logging.getLogger(__name__)

ALLOWED_IMAGE_MIME_TYPES = {
    "image/jpeg",
    "image/png",
    "image/webp",
    "image/gif",
}

UPLOAD_KINDS = {"covers", "posts", "profile"}


class UploadError(Exception):
    pass


def _extension_for(file_storage) -> str:
    filename = secure_filename(getattr(file_storage, "filename", "") or "")
    extension = os.path.splitext(filename)[1].lower()
    if extension:
        return extension

    mapping = {
        "image/jpeg": ".jpeg",
        "image/png": ".png",
        "image/webp": ".webp",
        "image/gif": ".gif",
    }
    return mapping.get(file_storage.mimetype, ".png")


def _stream_length(file_storage) -> int:
    stream = getattr(file_storage, "stream", file_storage)
    try:
        stream.seek(0, 2)
        length = stream.tell()
        stream.seek(0)
        return length
    except (AttributeError, OSError):
        return -1


def save_image(file_storage, kind: str) -> str:
    """Store an uploaded image and return the public path for it.

    The returned reference is what callers put into ``coverImg`` or post
    content; nothing here inspects the image itself.
    """
    if kind not in UPLOAD_KINDS:
        raise ValueError(f"Unknown upload kind: {kind}")
    if file_storage is None or not getattr(file_storage, "filename", ""):
        raise UploadError("No file uploaded")

    mimetype = getattr(file_storage, "mimetype", None) or ""
    if mimetype not in ALLOWED_IMAGE_MIME_TYPES:
        raise UploadError(f"Unsupported media type: {mimetype}")

    max_bytes = current_app.config.get("UPLOAD_MAX_IMAGE_BYTES")
    length = _stream_length(file_storage)
    if max_bytes and length > max_bytes:
        raise UploadError("Image is too large")

    filename = f"{int(time.time() * 1000)}_{uuid.uuid4().hex[:10]}{_extension_for(file_storage)}"
    directory = os.path.join(current_app.config["UPLOAD_FOLDER"], kind)
    os.makedirs(directory, exist_ok=True)
    file_storage.save(os.path.join(directory, filename))

    url = f"/uploads/{kind}/{filename}"
    logger.info("Stored upload %s (%s, %d bytes)", url, mimetype, length)
    return url
