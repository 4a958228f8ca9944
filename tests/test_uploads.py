import io
import os

import pytest

from services.data_client import StorageBucket
from services.entities import GalleryScreen, ResourceScreen
from services.errors import StorageError, UploadError


class FakeClock:
    def __init__(self, *ticks):
        self.ticks = list(ticks)

    def __call__(self):
        return self.ticks.pop(0)


def blob_path(storage, bucket, url):
    return os.path.join(storage.root, bucket, url.split("/")[-1])


def test_upload_stores_blob_then_row(data_client, storage, admin_auth):
    screen = ResourceScreen(data_client, admin_auth, clock=FakeClock(1700000000.5))

    row = screen.upload(io.BytesIO(b"%PDF-1.7"), "report.pdf", "application/pdf", "Semester Report")

    assert row["file_url"] == "/static/uploads/files/1700000000500.pdf"
    assert row["file_type"] == "application/pdf"
    assert row["uploaded_by"] == admin_auth.user_id
    with open(blob_path(storage, "files", row["file_url"]), "rb") as fh:
        assert fh.read() == b"%PDF-1.7"


def test_same_file_uploaded_twice_gets_distinct_keys(data_client, storage, admin_auth):
    screen = ResourceScreen(data_client, admin_auth, clock=FakeClock(1700000000.0, 1700000005.0))

    first = screen.upload(b"v1", "report.pdf", "application/pdf", "Report")
    second = screen.upload(b"v2", "report.pdf", "application/pdf", "Report")

    assert first["file_url"] != second["file_url"]
    assert [r["title"] for r in screen.list()] == ["Report", "Report"]
    with open(blob_path(storage, "files", first["file_url"]), "rb") as fh:
        assert fh.read() == b"v1"
    with open(blob_path(storage, "files", second["file_url"]), "rb") as fh:
        assert fh.read() == b"v2"


def test_same_millisecond_collision_fails_without_overwrite(data_client, storage, admin_auth):
    screen = ResourceScreen(data_client, admin_auth, clock=FakeClock(1700000000.0, 1700000000.0))
    first = screen.upload(b"original", "report.pdf", "application/pdf", "Report")

    with pytest.raises(UploadError):
        screen.upload(b"clobber", "report.pdf", "application/pdf", "Report copy")

    assert len(screen.list()) == 1
    with open(blob_path(storage, "files", first["file_url"]), "rb") as fh:
        assert fh.read() == b"original"


def test_failed_row_insert_removes_the_blob(data_client, storage, admin_auth):
    screen = GalleryScreen(data_client, admin_auth, clock=FakeClock(1700000000.0))

    # title is NOT NULL, so phase 2 fails after the blob is stored
    with pytest.raises(UploadError) as excinfo:
        screen.upload(b"png-bytes", "team.png", "image/png", title=None)

    assert excinfo.value.orphaned_key is None
    assert not os.path.exists(os.path.join(storage.root, "gallery", "1700000000000.png"))
    assert screen.list() == []


def test_orphan_is_reported_when_cleanup_fails(data_client, admin_auth, monkeypatch):
    def broken_remove(self, keys):
        raise StorageError("bucket offline")

    monkeypatch.setattr(StorageBucket, "remove", broken_remove)
    screen = GalleryScreen(data_client, admin_auth, clock=FakeClock(1700000000.0))

    with pytest.raises(UploadError) as excinfo:
        screen.upload(b"png-bytes", "team.png", "image/png", title=None)

    assert excinfo.value.orphaned_key == "1700000000000.png"


def test_gallery_description_is_optional(data_client, admin_auth):
    screen = GalleryScreen(data_client, admin_auth, clock=FakeClock(1700000000.0))

    row = screen.upload(b"img", "hackathon.jpg", "image/jpeg", "Hackathon", "")

    assert row["description"] is None
    assert row["image_url"].endswith("/gallery/1700000000000.jpg")


def test_uploads_listed_newest_first(data_client, admin_auth):
    screen = GalleryScreen(data_client, admin_auth, clock=FakeClock(1.0, 2.0, 3.0))
    for title in ("first", "second", "third"):
        screen.upload(b"img", f"{title}.png", "image/png", title)

    assert [r["title"] for r in screen.list()] == ["third", "second", "first"]


def test_delete_removes_row_and_blob(data_client, storage, admin_auth):
    screen = ResourceScreen(data_client, admin_auth, clock=FakeClock(1700000000.0))
    row = screen.upload(b"notes", "notes.txt", "text/plain", "Notes")

    assert screen.confirm_delete(row["id"], confirmed=True) is True

    assert screen.items == []
    assert not os.path.exists(blob_path(storage, "files", row["file_url"]))


def test_delete_survives_missing_blob(data_client, storage, admin_auth):
    screen = ResourceScreen(data_client, admin_auth, clock=FakeClock(1700000000.0))
    row = screen.upload(b"notes", "notes.txt", "text/plain", "Notes")
    os.remove(blob_path(storage, "files", row["file_url"]))

    screen.delete(row["id"])

    assert screen.list() == []


def test_submit_upload_failure_keeps_typed_values(data_client, admin_auth):
    screen = GalleryScreen(data_client, admin_auth, clock=FakeClock(5.0, 5.0))
    screen.submit_upload(b"a", "a.png", "image/png", "Taken")

    ok = screen.submit_upload(b"b", "b.png", "image/png", "Retry me", "caption")

    assert ok is False
    assert screen.form == {"title": "Retry me", "description": "caption"}
    assert screen.notifications[-1].message == "Failed to upload image"
    assert [r["title"] for r in screen.items] == ["Taken"]


def test_storage_key_without_extension(data_client, admin_auth):
    screen = ResourceScreen(data_client, admin_auth, clock=FakeClock(42.0))

    assert screen.storage_key("Makefile") == "42000"


def test_delete_succeeds_when_blob_removal_fails(data_client, storage, admin_auth, monkeypatch, caplog):
    screen = ResourceScreen(data_client, admin_auth, clock=FakeClock(1700000000.0))
    row = screen.upload(b"notes", "notes.txt", "text/plain", "Notes")

    def disk_error(self, keys):
        raise StorageError("permission denied")

    monkeypatch.setattr(StorageBucket, "remove", disk_error)

    with caplog.at_level("WARNING", logger="services.management"):
        assert screen.confirm_delete(row["id"], confirmed=True) is True

    assert screen.items == []
    assert screen.notifications[-1].message == "Resource deleted successfully"
    assert "Orphaned blob '1700000000000.txt'" in caplog.text
    assert os.path.exists(blob_path(storage, "files", row["file_url"]))
