import logging
import os
import time
import uuid

from werkzeug.utils import secure_filename

from services.upload.errors import TempStoreError
from services.upload.models import TempFileHandle

logger = logging.getLogger(__name__)


class TempStore:
    """
    Scratch directory used to stage uploads before they go to the provider.
    File names embed a timestamp and a random suffix so concurrent writes
    never collide.
    """

    def __init__(self, directory: str):
        self.directory = directory

    def ensure_directory(self) -> str:
        try:
            os.makedirs(self.directory, exist_ok=True)
        except OSError as e:
            raise TempStoreError(f"Unable to create temp directory {self.directory}: {e}") from e
        return self.directory

    def _temp_name(self, original_name: str) -> str:
        safe = secure_filename(original_name or "") or "upload"
        return f"temp_{time.time_ns()}_{uuid.uuid4().hex[:8]}_{safe}"

    def write(self, buffer: bytes, original_name: str) -> TempFileHandle:
        path = os.path.join(self.directory, self._temp_name(original_name))
        try:
            with open(path, "wb") as fh:
                fh.write(buffer)
        except OSError as e:
            # a partial file may have been created before the failure
            self.delete(TempFileHandle(path))
            raise TempStoreError(f"Unable to write temp file for {original_name}: {e}") from e
        return TempFileHandle(path)

    def delete(self, handle: TempFileHandle) -> bool:
        """Remove the staged file. Returns False when there was nothing to remove."""
        try:
            os.remove(handle.path)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error("Failed to delete temp file %s: %s", handle.path, e)
            return False
