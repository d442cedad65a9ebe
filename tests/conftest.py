"""Shared fixtures for the upload relay tests."""
import os

import pytest

from app import create_app
from config import Settings
from observability import metrics
from services.upload.errors import ProviderError
from services.upload.models import HostedAsset


class FakeUploadClient:
    """Stands in for Cloudinary; fails any path ending in one of `fail_names`."""

    def __init__(self, fail_names=()):
        self.fail_names = set(fail_names)
        self.calls = []
        self.existed = []

    def upload(self, path):
        self.calls.append(path)
        self.existed.append(os.path.exists(path))
        name = os.path.basename(path)
        if any(name.endswith(bad) for bad in self.fail_names):
            raise ProviderError("Cloudinary upload failed: Invalid image file")
        public_id = f"uploads/{len(self.calls)}"
        return HostedAsset(
            url=f"http://res.cloudinary.com/demo/{public_id}",
            secure_url=f"https://res.cloudinary.com/demo/{public_id}",
            public_id=public_id,
        )


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def temp_dir(tmp_path):
    return str(tmp_path / "scratch")


@pytest.fixture
def settings(tmp_path, temp_dir):
    return Settings(
        cloud_name="demo",
        api_key="key",
        api_secret="secret",
        temp_dir=temp_dir,
        debug_log_path=str(tmp_path / "logs" / "error_debug.log"),
    )


@pytest.fixture
def fake_client():
    return FakeUploadClient()


@pytest.fixture
def app(settings, fake_client):
    return create_app(settings, upload_client=fake_client)


@pytest.fixture
def client(app):
    return app.test_client()
