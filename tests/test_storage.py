"""
Storage adapter tests: local JSON files and the remote database + bucket.

The bucket client is always mocked; nothing talks to a real Spaces endpoint.
"""

import json
import os
from unittest.mock import patch

import pytest

from folio.core.config import Config
from folio.core.errors import BackendFailure
from folio.core.storage import LocalStorage, blob_filename

from conftest import ADMIN, pdf, png

BUCKET_URL = "https://folio-test.ams3.digitaloceanspaces.com"


@pytest.fixture
def local(tmp_root):
    return LocalStorage(
        data_dir=os.path.join(tmp_root, "data"),
        upload_folder=os.path.join(tmp_root, "uploads"),
        collection_files=Config.COLLECTION_FILES,
    )


# ---------------------------------------------------------------------------
# Local JSON backend
# ---------------------------------------------------------------------------

def test_missing_file_reads_empty(local):
    assert local.list_all("projects") == []
    assert local.get("projects", 1) is None


def test_insert_update_delete(local):
    local.insert("videos", {"id": 1, "title": "a"})
    local.insert("videos", {"id": 2, "title": "b"})

    updated = local.update("videos", 2, {"title": "B", "id": 99})
    assert updated == {"id": 2, "title": "B"}
    assert local.update("videos", 3, {"title": "x"}) is None

    assert local.delete("videos", 1) == {"id": 1, "title": "a"}
    assert local.delete("videos", 1) is None
    assert local.list_all("videos") == [{"id": 2, "title": "B"}]


def test_collection_file_names(local):
    local.insert("hero_photos", {"id": 1})
    path = os.path.join(local.data_dir, "hero-photos.json")
    with open(path) as f:
        assert json.load(f) == [{"id": 1}]


def test_corrupt_file_is_backend_failure(local):
    os.makedirs(local.data_dir)
    with open(os.path.join(local.data_dir, "projects.json"), "w") as f:
        f.write("[{broken")
    with pytest.raises(BackendFailure):
        local.list_all("projects")


def test_non_list_document_is_backend_failure(local):
    os.makedirs(local.data_dir)
    with open(os.path.join(local.data_dir, "videos.json"), "w") as f:
        json.dump({"id": 1}, f)
    with pytest.raises(BackendFailure):
        local.list_all("videos")


def test_failed_rewrite_keeps_previous_file(local):
    local.replace_all("projects", [{"id": 1, "title": "kept"}])

    with patch("folio.core.storage.json.dump", side_effect=OSError("disk full")):
        with pytest.raises(BackendFailure):
            local.replace_all("projects", [{"id": 2}])

    assert local.list_all("projects") == [{"id": 1, "title": "kept"}]
    assert [name for name in os.listdir(local.data_dir) if name.endswith(".tmp")] == []


def test_blob_upload_and_delete(local):
    url = local.upload_blob(b"data", "Photo.JPG", "image/jpeg", "projects")
    assert url.startswith("/uploads/projects/")
    assert url.endswith(".jpg")
    path = os.path.join(local.upload_folder, url[len("/uploads/"):])
    assert os.path.isfile(path)

    assert local.delete_blob(url) is True
    assert not os.path.exists(path)
    assert local.delete_blob(url) is False


def test_delete_blob_stays_inside_upload_folder(local, tmp_root):
    outside = os.path.join(tmp_root, "secret.txt")
    with open(outside, "w") as f:
        f.write("keep me")

    assert local.delete_blob("/uploads/../secret.txt") is False
    assert local.delete_blob("https://elsewhere.example.com/x.png") is False
    assert os.path.isfile(outside)


def test_blob_filenames_are_unique():
    names = {blob_filename("a.png") for _ in range(50)}
    assert len(names) == 50


# ---------------------------------------------------------------------------
# Remote database + bucket backend
# ---------------------------------------------------------------------------

def test_remote_project_lifecycle(remote_client, remote_app):
    with patch("boto3.client") as client_factory:
        s3 = client_factory.return_value

        response = remote_client.post(
            "/api/projects",
            data={"title": "Remote", "projectUrl": "https://example.com", "image": png()},
            headers=ADMIN,
            content_type="multipart/form-data",
        )
        assert response.status_code == 201
        project = response.get_json()["data"]
        assert project["image"].startswith(f"{BUCKET_URL}/portfolio/projects/")

        kwargs = s3.put_object.call_args.kwargs
        assert kwargs["Bucket"] == "folio-test"
        assert kwargs["ACL"] == "public-read"
        assert kwargs["ContentType"] == "image/png"
        assert kwargs["Key"].startswith("portfolio/projects/")

        assert remote_client.get("/api/projects").get_json() == [project]

        response = remote_client.delete(f"/api/projects/{project['id']}", headers=ADMIN)
        assert response.status_code == 200
        s3.delete_object.assert_called_once_with(Bucket="folio-test", Key=kwargs["Key"])


def test_remote_upload_failure_is_backend_failure(remote_client):
    from botocore.exceptions import ClientError

    with patch("boto3.client") as client_factory:
        client_factory.return_value.put_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject",
        )
        response = remote_client.post(
            "/api/hero-photos", data={"image": png()}, headers=ADMIN,
            content_type="multipart/form-data",
        )
    assert response.status_code == 500
    assert "AccessDenied" in response.get_json()["message"]


def test_remote_messages_round_trip(remote_client):
    remote_client.post("/api/messages", json={"name": "A", "email": "a@example.com", "message": "hi"})
    messages = remote_client.get("/api/messages", headers=ADMIN).get_json()
    assert len(messages) == 1

    response = remote_client.patch(f"/api/messages/{messages[0]['id']}/read", headers=ADMIN)
    assert response.get_json()["read"] is True


def test_remote_resume_keeps_single_record(remote_client, remote_app):
    with patch("boto3.client"):
        for name in ("one.pdf", "two.pdf"):
            remote_client.post(
                "/api/resume",
                data={"resume": pdf(name)},
                headers=ADMIN,
                content_type="multipart/form-data",
            )

    with remote_app.app_context():
        storage = remote_app.extensions["folio"].storage
        records = storage.list_all("resume")
    assert len(records) == 1
    assert records[0]["filename"] == "two.pdf"


def test_remote_empty_table_falls_back_to_local(remote_app):
    storage = remote_app.extensions["folio"].storage
    storage.fallback.replace_all("videos", [{"id": 7, "title": "cached"}])

    with remote_app.app_context():
        assert storage.list_all("videos") == [{"id": 7, "title": "cached"}]


def test_remote_read_failure_falls_back_to_local(remote_app):
    storage = remote_app.extensions["folio"].storage
    storage.fallback.replace_all("projects", [{"id": 3, "title": "offline copy"}])

    with remote_app.app_context():
        with patch.object(storage, "_query_all", side_effect=BackendFailure("db down")):
            assert storage.list_all("projects") == [{"id": 3, "title": "offline copy"}]


def test_remote_messages_do_not_fall_back(remote_app):
    storage = remote_app.extensions["folio"].storage
    storage.fallback.replace_all("messages", [{"id": 1, "name": "stale"}])

    with remote_app.app_context():
        with patch.object(storage, "_query_all", side_effect=BackendFailure("db down")):
            with pytest.raises(BackendFailure):
                storage.list_all("messages")
        assert storage.list_all("messages") == []


def test_remote_reorder_writes_to_database(remote_client):
    with patch("boto3.client"):
        ids = [
            remote_client.post(
                "/api/projects",
                data={"title": title, "projectUrl": "https://example.com", "image": png()},
                headers=ADMIN,
                content_type="multipart/form-data",
            ).get_json()["data"]["id"]
            for title in ("First", "Second")
        ]

    response = remote_client.post("/api/projects/reorder", json={"order": ids}, headers=ADMIN)
    assert response.status_code == 200
    listed = remote_client.get("/api/projects").get_json()
    assert [p["id"] for p in listed] == ids
    assert [p["order"] for p in listed] == [0, 1]


def test_remote_reorder_rejects_fallback_only_records(remote_app, remote_client):
    storage = remote_app.extensions["folio"].storage
    storage.fallback.replace_all("projects", [
        {"id": 1, "title": "a", "order": 0},
        {"id": 2, "title": "b", "order": 0},
    ])

    response = remote_client.post("/api/projects/reorder", json={"order": [2, 1]}, headers=ADMIN)
    assert response.status_code == 404
    assert response.get_json()["success"] is False
    assert [p["order"] for p in storage.fallback.list_all("projects")] == [0, 0]
