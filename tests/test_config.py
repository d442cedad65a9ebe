"""Tests for environment-driven settings."""
import pytest

from app import create_app
from config import ConfigError, Settings, MAX_FILE_SIZE


class TestSettings:

    def test_defaults(self):
        s = Settings.from_env({})
        assert s.field_name == "images"
        assert s.max_files == 5
        assert s.max_file_size == MAX_FILE_SIZE == 5 * 1024 * 1024
        assert s.port == 8080

    def test_reads_environment(self):
        s = Settings.from_env({
            "CLOUDINARY_CLOUD_NAME": "demo",
            "CLOUDINARY_API_KEY": "key",
            "CLOUDINARY_API_SECRET": "secret",
            "CLOUDINARY_FOLDER": "relay",
            "UPLOAD_TEMP_DIR": "/var/tmp/relay",
            "MAX_UPLOAD_FILES": "3",
            "PORT": "9000",
        })
        cfg = s.cloudinary_config()
        assert (cfg.cloud_name, cfg.api_key, cfg.api_secret, cfg.folder) == ("demo", "key", "secret", "relay")
        assert s.temp_dir == "/var/tmp/relay"
        assert s.max_files == 3
        assert s.port == 9000

    def test_bad_number_raises(self):
        with pytest.raises(ConfigError):
            Settings.from_env({"MAX_UPLOAD_FILES": "five"})

    def test_missing_credentials_listed(self):
        with pytest.raises(ConfigError, match="CLOUDINARY_API_SECRET"):
            Settings(cloud_name="demo", api_key="key").cloudinary_config()


def test_create_app_fails_fast_without_credentials(tmp_path):
    settings = Settings(
        temp_dir=str(tmp_path / "scratch"),
        debug_log_path=str(tmp_path / "error_debug.log"),
    )
    with pytest.raises(ConfigError):
        create_app(settings)


def test_create_app_creates_temp_dir(settings, fake_client, temp_dir):
    import os
    create_app(settings, upload_client=fake_client)
    assert os.path.isdir(temp_dir)


class TestDotenv:

    KEYS = ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET", "MAX_UPLOAD_FILES")

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        # setenv first so teardown removes whatever load_dotenv writes
        for key in self.KEYS:
            monkeypatch.setenv(key, "")
            monkeypatch.delenv(key)

    def test_reads_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "CLOUDINARY_CLOUD_NAME=demo\n"
            "CLOUDINARY_API_KEY=key\n"
            "CLOUDINARY_API_SECRET=secret\n"
            "MAX_UPLOAD_FILES=4\n"
        )
        s = Settings.from_env(env_file=str(env_file))
        cfg = s.cloudinary_config()
        assert (cfg.cloud_name, cfg.api_key, cfg.api_secret) == ("demo", "key", "secret")
        assert s.max_files == 4

    def test_process_environment_wins(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("CLOUDINARY_CLOUD_NAME=from-file\n")
        monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "from-env")
        assert Settings.from_env(env_file=str(env_file)).cloud_name == "from-env"

    def test_missing_env_file_is_fine(self, tmp_path):
        s = Settings.from_env(env_file=str(tmp_path / "absent.env"))
        assert s.cloud_name is None
