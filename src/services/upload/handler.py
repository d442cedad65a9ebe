"""
Per-file upload pipeline: write to temp -> submit to provider -> delete temp.

Files in a batch run concurrently and are joined before the batch response is
built. A failure in one file is captured as that file's result and never
reaches its siblings.
"""
import asyncio
import logging
from typing import List

from services.upload.errors import NoFilesError, ProviderError, TempStoreError
from services.upload.models import (
    BatchResponse,
    UploadedFile,
    UploadFailure,
    UploadResult,
    UploadSuccess,
)

logger = logging.getLogger(__name__)


class UploadHandler:
    def __init__(self, store, client):
        self.store = store
        self.client = client

    async def process_file(self, file: UploadedFile) -> UploadResult:
        try:
            handle = await asyncio.to_thread(self.store.write, file.buffer, file.original_name)
        except TempStoreError as e:
            logger.error("Temp write failed for %s: %s", file.original_name, e)
            return UploadFailure(file.original_name, str(e))

        try:
            asset = await asyncio.to_thread(self.client.upload, handle.path)
        except ProviderError as e:
            return UploadFailure(file.original_name, str(e))
        except Exception as e:
            logger.exception("Unexpected error uploading %s", file.original_name)
            return UploadFailure(file.original_name, str(e) or e.__class__.__name__)
        finally:
            await asyncio.to_thread(self.store.delete, handle)

        return UploadSuccess(
            original_name=file.original_name,
            hosted_url=asset.url,
            secure_url=asset.secure_url,
            public_id=asset.public_id,
        )

    async def process_batch(self, files: List[UploadedFile]) -> BatchResponse:
        if not files:
            raise NoFilesError("No files were uploaded.")

        results = await asyncio.gather(*(self.process_file(f) for f in files))
        batch = BatchResponse.from_results(list(results))
        logger.info(
            "Upload batch processed: %d total, %d ok, %d failed",
            batch.total_processed,
            batch.successful_count,
            batch.failed_count,
        )
        return batch
