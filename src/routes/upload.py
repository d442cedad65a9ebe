import os
import logging
from flask import Blueprint, current_app, request, jsonify
from observability.metrics import inc
from services.upload.errors import NoFilesError
from services.upload.models import UploadedFile

upload_bp = Blueprint("upload", __name__)
logger = logging.getLogger(__name__)


def _file_size(f):
    """Size of a multipart part, measured on its spooled stream."""
    stream = f.stream
    pos = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(pos)
    return size


def _reject(message, error, status):
    inc("upload_rejected")
    logger.warning("Upload rejected: %s", error)
    return jsonify({"success": False, "message": message, "error": error}), status


@upload_bp.route("/upload", methods=["POST"])
async def upload_to_cloud():
    settings = current_app.config["UPLOAD_SETTINGS"]
    handler = current_app.extensions["upload_handler"]

    files = [f for f in request.files.getlist(settings.field_name) if f.filename]
    logger.info("Received upload request: %d files", len(files))
    inc("upload_batches")
    inc("upload_files_total", len(files))

    # ---- HARD VALIDATION (count & size) ----
    if len(files) > settings.max_files:
        return _reject(
            "Too many files.",
            f"Maximum {settings.max_files} files allowed per upload",
            400,
        )

    for f in files:
        if _file_size(f) > settings.max_file_size:
            return _reject(
                "File too large.",
                f"{f.filename} exceeds {settings.max_file_size // (1024 * 1024)} MB limit",
                413,
            )
    # ---- END HARD VALIDATION ----

    uploads = [UploadedFile(original_name=f.filename, buffer=f.read()) for f in files]

    try:
        batch = await handler.process_batch(uploads)
    except NoFilesError as e:
        inc("upload_rejected")
        return jsonify({"success": False, "message": str(e)}), 400

    inc("upload_file_successes", batch.successful_count)
    inc("upload_file_failures", batch.failed_count)
    return jsonify({
        "success": True,
        "message": "Upload processed",
        "data": batch.to_dict(),
    }), 200
