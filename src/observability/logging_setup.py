import logging
import os

from flask import g, has_app_context

LOG_FORMAT = "%(asctime)s [%(request_id)s] %(name)s - %(levelname)s - %(message)s"


class RequestIdFilter(logging.Filter):
    """Stamps every record with the id of the request being served."""

    def filter(self, record):
        rid = "unknown"
        if has_app_context():
            rid = getattr(g, "request_id", rid)
        record.request_id = rid
        return True


def configure_logging(level="INFO", debug_log_path=None):
    """
    Console logging plus an append-only debug log file.
    Safe to call more than once; handlers installed earlier are replaced.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    for handler in list(root.handlers):
        if getattr(handler, "_upload_relay", False):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [logging.StreamHandler()]
    if debug_log_path:
        log_dir = os.path.dirname(debug_log_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(debug_log_path, encoding="utf-8"))

    for handler in handlers:
        handler._upload_relay = True
        handler.setFormatter(formatter)
        handler.addFilter(RequestIdFilter())
        root.addHandler(handler)

    # cloudinary's HTTP stack logs every connection
    logging.getLogger("urllib3").setLevel(logging.WARNING)
