import os
import tempfile
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from services.upload.cloud_client import CloudinaryConfig

MAX_FILES = 5
MAX_FILE_SIZE = 5 * 1024 * 1024       # 5 MB
MULTIPART_OVERHEAD = 1024 * 1024


class ConfigError(RuntimeError):
    pass


@dataclass
class Settings:
    cloud_name: Optional[str] = None
    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    folder: Optional[str] = None
    temp_dir: str = os.path.join(tempfile.gettempdir(), "temp")
    field_name: str = "images"
    max_files: int = MAX_FILES
    max_file_size: int = MAX_FILE_SIZE
    log_level: str = "INFO"
    debug_log_path: str = os.path.join("storage", "error_debug.log")
    port: int = 8080

    @classmethod
    def from_env(cls, environ=None, env_file=".env") -> "Settings":
        """
        Read settings from `environ`, or from the process environment after
        loading `env_file`. Variables already set win over the file.
        """
        if environ is None:
            load_dotenv(env_file)
        env = os.environ if environ is None else environ
        defaults = cls()
        try:
            return cls(
                cloud_name=env.get("CLOUDINARY_CLOUD_NAME"),
                api_key=env.get("CLOUDINARY_API_KEY"),
                api_secret=env.get("CLOUDINARY_API_SECRET"),
                folder=env.get("CLOUDINARY_FOLDER") or None,
                temp_dir=env.get("UPLOAD_TEMP_DIR", defaults.temp_dir),
                field_name=env.get("UPLOAD_FIELD_NAME", defaults.field_name),
                max_files=int(env.get("MAX_UPLOAD_FILES", defaults.max_files)),
                max_file_size=int(env.get("MAX_UPLOAD_FILE_SIZE", defaults.max_file_size)),
                log_level=env.get("LOG_LEVEL", defaults.log_level),
                debug_log_path=env.get("DEBUG_LOG_PATH", defaults.debug_log_path),
                port=int(env.get("PORT", defaults.port)),
            )
        except ValueError as e:
            raise ConfigError(f"Invalid numeric setting: {e}") from e

    @property
    def max_content_length(self) -> int:
        return self.max_files * self.max_file_size + MULTIPART_OVERHEAD

    def cloudinary_config(self) -> CloudinaryConfig:
        missing = [
            name for name, value in (
                ("CLOUDINARY_CLOUD_NAME", self.cloud_name),
                ("CLOUDINARY_API_KEY", self.api_key),
                ("CLOUDINARY_API_SECRET", self.api_secret),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"Missing required settings: {', '.join(missing)}")
        return CloudinaryConfig(
            cloud_name=self.cloud_name,
            api_key=self.api_key,
            api_secret=self.api_secret,
            folder=self.folder,
        )
