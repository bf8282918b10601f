# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# tests/test_server.py

"""
HTTP endpoint tests through FastAPI's TestClient.
"""

import os
from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient

from pinman.config.manager import UserConfig
from pinman.core.backup import SIDECAR_DIRNAME
from pinman.server.app import create_app
from pinman.system.exceptions import BackupIOError

from tests.fixtures.sample_images import JPEG_BYTES, PNG_BYTES


@pytest.fixture
def client():
    return TestClient(create_app(UserConfig(open_browser=False)))


def _image_url(path) -> str:
    return "/image/" + quote(str(path), safe="")


class TestIndexPage:
    def test_serves_html(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "/api/list" in response.text

    def test_no_api_docs(self, client):
        assert client.get("/docs").status_code == 404


class TestListEndpoint:
    def test_lists_directory(self, client, image_dir):
        response = client.get("/api/list", params={"path": str(image_dir)})

        assert response.status_code == 200
        body = response.json()
        assert body["current_path"] == str(image_dir)
        assert body["parent_path"] == str(image_dir.parent)
        assert [e["name"] for e in body["entries"]] == ["alpha", "Beta", "A.jpg", "b.PNG"]
        assert body["entries"][0] == {
            "name": "alpha",
            "path": str(image_dir / "alpha"),
            "is_dir": True,
            "is_image": False,
        }

    def test_configured_extensions_apply(self, image_dir):
        client = TestClient(create_app(UserConfig(image_extensions={"txt"})))
        body = client.get("/api/list", params={"path": str(image_dir)}).json()
        assert [e["name"] for e in body["entries"]] == ["alpha", "Beta", "notes.txt"]

    def test_non_utf8_name_does_not_break_listing(self, client, image_dir):
        (image_dir / os.fsdecode(b"\xff\xfe.jpg")).write_bytes(JPEG_BYTES)

        response = client.get("/api/list", params={"path": str(image_dir)})

        assert response.status_code == 200
        assert [e["name"] for e in response.json()["entries"]] == ["alpha", "Beta", "A.jpg", "b.PNG"]

    def test_missing_directory(self, client, tmp_path):
        response = client.get("/api/list", params={"path": str(tmp_path / "nope")})
        assert response.status_code == 404

    def test_not_a_directory(self, client, image_dir):
        response = client.get("/api/list", params={"path": str(image_dir / "A.jpg")})
        assert response.status_code == 400


class TestImageEndpoint:
    def test_serves_bytes_with_media_type(self, client, image_dir):
        response = client.get(_image_url(image_dir / "A.jpg"))

        assert response.status_code == 200
        assert response.content == JPEG_BYTES
        assert response.headers["content-type"] == "image/jpeg"

    def test_uppercase_extension(self, client, image_dir):
        response = client.get(_image_url(image_dir / "b.PNG"))
        assert response.status_code == 200
        assert response.content == PNG_BYTES
        assert response.headers["content-type"] == "image/png"

    def test_unknown_extension(self, client, image_dir):
        response = client.get(_image_url(image_dir / "README"))
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/octet-stream"

    def test_missing_file(self, client, tmp_path):
        assert client.get(_image_url(tmp_path / "missing.jpg")).status_code == 404

    def test_directory(self, client, image_dir):
        assert client.get(_image_url(image_dir / "alpha")).status_code == 404


class TestDeleteEndpoint:
    def test_deletes_with_backup(self, client, image_dir):
        response = client.post("/api/delete", params={"path": str(image_dir / "A.jpg")})

        assert response.status_code == 200
        body = response.json()
        assert body["operation"] == "delete"
        assert body["backup_status"] == "created"
        assert not (image_dir / "A.jpg").exists()
        assert (image_dir / SIDECAR_DIRNAME).is_dir()

    def test_backup_failure_still_deletes(self, client, image_dir, monkeypatch):
        def fail(path):
            raise BackupIOError("read-only sidecar", path=str(path))

        monkeypatch.setattr("pinman.core.operations.ensure_backup", fail)

        response = client.post("/api/delete", params={"path": str(image_dir / "A.jpg")})

        assert response.status_code == 200
        assert response.json()["backup_status"] == "failed"
        assert response.json()["backup_error"] == "read-only sidecar"
        assert not (image_dir / "A.jpg").exists()

    def test_corrupt_index_still_deletes(self, client, image_dir):
        (image_dir / SIDECAR_DIRNAME).mkdir()
        (image_dir / SIDECAR_DIRNAME / "index.txt").write_bytes(b"\xff\xfe garbage\n")

        response = client.post("/api/delete", params={"path": str(image_dir / "A.jpg")})

        assert response.status_code == 200
        assert response.json()["backup_status"] == "failed"
        assert not (image_dir / "A.jpg").exists()

    def test_missing_file(self, client, tmp_path):
        response = client.post("/api/delete", params={"path": str(tmp_path / "missing.jpg")})
        assert response.status_code == 404


class TestRenameEndpoint:
    def test_renames_with_backup(self, client, image_dir):
        response = client.post("/api/rename", json={
            "old_path": str(image_dir / "A.jpg"),
            "new_name": "beach.jpg",
        })

        assert response.status_code == 200
        body = response.json()
        assert body["new_path"] == str(image_dir / "beach.jpg")
        assert body["backup_status"] == "created"
        assert (image_dir / "beach.jpg").exists()

    def test_missing_source(self, client, tmp_path):
        response = client.post("/api/rename", json={
            "old_path": str(tmp_path / "missing.jpg"),
            "new_name": "x.jpg",
        })
        assert response.status_code == 404

    def test_invalid_name(self, client, image_dir):
        response = client.post("/api/rename", json={
            "old_path": str(image_dir / "A.jpg"),
            "new_name": "../../outside.jpg",
        })
        assert response.status_code == 400
        assert (image_dir / "A.jpg").exists()

    def test_target_exists(self, client, image_dir):
        response = client.post("/api/rename", json={
            "old_path": str(image_dir / "A.jpg"),
            "new_name": "b.PNG",
        })
        assert response.status_code == 409
        assert "already exists" in response.json()["detail"]
