import logging
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import Settings
from observability.logging_setup import configure_logging
from observability.request_context import start_request, end_request
from routes.health import health_bp
from routes.metrics import metrics_bp
from routes.upload import upload_bp
from services.upload.cloud_client import CloudinaryClient
from services.upload.handler import UploadHandler
from services.upload.temp_store import TempStore

logger = logging.getLogger(__name__)


def create_app(settings=None, upload_client=None):
    """
    Build the upload relay.
    Missing provider credentials raise ConfigError here, not on the first request.
    Pass upload_client to swap the Cloudinary client (tests).
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level, settings.debug_log_path)

    if upload_client is None:
        upload_client = CloudinaryClient(settings.cloudinary_config())

    store = TempStore(settings.temp_dir)
    store.ensure_directory()

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = settings.max_content_length
    app.config["UPLOAD_SETTINGS"] = settings
    app.extensions["upload_handler"] = UploadHandler(store, upload_client)
    CORS(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(upload_bp, url_prefix="/api")
    app.register_blueprint(metrics_bp, url_prefix="/api")

    @app.before_request
    def _before():
        start_request()

    @app.after_request
    def _after(response):
        return end_request(response)

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return jsonify({"success": False, "message": e.name, "error": e.description}), e.code

    @app.errorhandler(Exception)
    def _unhandled(e):
        logger.exception("Unhandled error")
        return jsonify({"success": False, "message": "Internal server error", "error": str(e)}), 500

    logger.info("Upload relay ready: temp_dir=%s max_files=%d", settings.temp_dir, settings.max_files)
    return app


if __name__ == "__main__":
    settings = Settings.from_env()
    app = create_app(settings)
    app.run(host="0.0.0.0", port=settings.port)
