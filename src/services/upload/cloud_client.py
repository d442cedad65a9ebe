import logging
from dataclasses import dataclass
from typing import Optional

import cloudinary.uploader

from services.upload.errors import ProviderError
from services.upload.models import HostedAsset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CloudinaryConfig:
    cloud_name: str
    api_key: str
    api_secret: str
    folder: Optional[str] = None


class CloudinaryClient:
    """
    Uploads a local file to Cloudinary and returns where it is hosted.
    Credentials travel with each call; the SDK's global config is never touched.
    One attempt per call, no retries.
    """

    def __init__(self, config: CloudinaryConfig):
        self.config = config

    def _options(self):
        options = {
            "resource_type": "auto",
            "cloud_name": self.config.cloud_name,
            "api_key": self.config.api_key,
            "api_secret": self.config.api_secret,
        }
        if self.config.folder:
            options["folder"] = self.config.folder
        return options

    def upload(self, path: str) -> HostedAsset:
        if not path:
            raise ProviderError("No file path given")

        try:
            response = cloudinary.uploader.upload(path, **self._options())
        except Exception as e:
            logger.warning("Cloudinary upload failed for %s: %s", path, e)
            raise ProviderError(f"Cloudinary upload failed: {e}") from e

        if not response or not response.get("public_id") or not response.get("url"):
            raise ProviderError("Cloudinary upload failed: empty response")

        logger.info("File is uploaded on cloudinary %s", response["url"])
        return HostedAsset(
            url=response["url"],
            secure_url=response.get("secure_url") or response["url"],
            public_id=response["public_id"],
        )
