"""
pytest configuration for relay tests.

Cloudinary credentials are set before the app is imported so the
module-level Settings picks them up; the SDK itself is always replaced
by FakeCloudinary, so no test talks to the network.
"""
import os
from pathlib import Path

os.environ.setdefault("CLOUD_NAME", "test-cloud")
os.environ.setdefault("API_KEY", "test-key")
os.environ.setdefault("API_SECRET", "test-secret")
os.environ.setdefault("FOLDER_NAME", "portfolio-gallery")

import cloudinary.api
import cloudinary.uploader
import pytest
from fastapi.testclient import TestClient

from gallery_relay.config import settings
from gallery_relay.main import app


class FakeCloudinary:
    """In-memory stand-in for the three SDK calls the relay makes."""

    def __init__(self):
        self.assets: dict[str, dict] = {}
        self.upload_calls: list[dict] = []
        self.resources_calls: list[dict] = []
        self.staged_paths: list[Path] = []
        self._counter = 0

    def upload(self, file, **options):
        path = Path(file)
        assert path.exists(), "staged file must exist while the provider reads it"
        self.staged_paths.append(path)
        self.upload_calls.append({"file": file, **options})
        self._counter += 1
        public_id = f"{options['folder']}/{path.stem}_{self._counter:04d}"
        asset = {
            "asset_id": f"asset-{self._counter}",
            "public_id": public_id,
            "secure_url": f"https://res.cloudinary.com/test-cloud/image/upload/v1/{public_id}.png",
            "url": f"http://res.cloudinary.com/test-cloud/image/upload/v1/{public_id}.png",
            "width": 10,
            "height": 10,
            "format": "png",
            "bytes": path.stat().st_size,
            "type": "upload",
            "resource_type": "image",
            "created_at": "2026-10-18T12:00:00Z",
        }
        self.assets[public_id] = asset
        return dict(asset)

    def destroy(self, public_id, **options):
        if self.assets.pop(public_id, None) is None:
            return {"result": "not found"}
        return {"result": "ok"}

    def resources(self, **options):
        self.resources_calls.append(options)
        matching = [
            dict(asset)
            for public_id, asset in self.assets.items()
            if public_id.startswith(options.get("prefix", ""))
        ]
        max_results = options.get("max_results", 10)
        response = {"resources": matching[:max_results]}
        if len(matching) > max_results:
            response["next_cursor"] = "cursor-2"
        return response


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch):
    directory = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", str(directory))
    return directory


@pytest.fixture
def fake_cloudinary(monkeypatch):
    fake = FakeCloudinary()
    monkeypatch.setattr(cloudinary.uploader, "upload", fake.upload)
    monkeypatch.setattr(cloudinary.uploader, "destroy", fake.destroy)
    monkeypatch.setattr(cloudinary.api, "resources", fake.resources)
    return fake


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def png_bytes():
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
