import io
import os

import pytest

from vpnportal.core.errors import UploadRejected
from vpnportal.core.uploads import ImageStorage, build_filename

MIB = 1024 * 1024


def _upload(client, name, content, content_type):
    return client.post("/api/v1/upload/image", files={"image": (name, content, content_type)})


def test_valid_png_is_stored_and_served(admin_client, upload_dir):
    payload = b"\x89PNG\r\n\x1a\n" + b"\x00" * (100 * 1024)
    resp = _upload(admin_client, "screen shot.png", payload, "image/png")
    assert resp.status_code == 201, resp.text

    body = resp.json()
    assert body["url"].startswith("/uploads/")
    assert body["url"] == f"/uploads/{body['filename']}"
    assert body["filename"].endswith("-screen_shot.png")
    assert (upload_dir / body["filename"]).read_bytes() == payload

    served = admin_client.get(body["url"])
    assert served.status_code == 200
    assert served.content == payload


def test_text_file_is_rejected(admin_client, upload_dir):
    resp = _upload(admin_client, "notes.txt", b"hello", "text/plain")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid file type. Only JPEG, PNG, WebP, and GIF are allowed."}
    assert not upload_dir.exists() or list(upload_dir.iterdir()) == []


def test_oversized_jpeg_is_rejected_without_leftovers(admin_client, upload_dir):
    resp = _upload(admin_client, "huge.jpg", b"\xff" * (6 * MIB), "image/jpeg")
    assert resp.status_code == 400
    assert "too large" in resp.json()["error"]
    assert list(upload_dir.iterdir()) == []


def test_upload_requires_admin(client, upload_dir):
    resp = _upload(client, "a.png", b"png", "image/png")
    assert resp.status_code == 401
    assert not upload_dir.exists() or list(upload_dir.iterdir()) == []


def test_missing_image_field_is_validation_error(admin_client):
    resp = admin_client.post("/api/v1/upload/image", files={"file": ("a.png", b"x", "image/png")})
    assert resp.status_code == 400


def test_delete_twice(admin_client):
    filename = _upload(admin_client, "logo.gif", b"GIF89a", "image/gif").json()["filename"]

    first = admin_client.delete(f"/api/v1/upload/image/{filename}")
    second = admin_client.delete(f"/api/v1/upload/image/{filename}")
    assert first.status_code == second.status_code == 200
    assert first.json() == {"deleted": True}
    assert second.json() == {"deleted": False}


def test_delete_requires_admin(client):
    assert client.delete("/api/v1/upload/image/whatever.png").status_code == 401


def test_filenames_are_sanitized_and_unique():
    names = {build_filename("../../etc/pass wd.PNG") for _ in range(50)}
    assert len(names) == 50
    for name in names:
        timestamp, token, rest = name.split("-", 2)
        assert timestamp.isdigit()
        assert len(token) == 12
        assert rest == "pass_wd.png"
        assert "/" not in name


def test_filename_without_extension_or_name():
    assert build_filename("photo").endswith("-photo")
    assert build_filename(None).endswith("-image")
    assert build_filename("C:\\Users\\me\\cat pic.webp").endswith("-cat_pic.webp")


def test_storage_rejects_traversal_on_delete(tmp_path):
    storage = ImageStorage(str(tmp_path), max_file_size=MIB)
    for bad in ("..", ".hidden", "a/b.png", "..\\x.png"):
        with pytest.raises(UploadRejected):
            storage.delete(bad)


def test_storage_enforces_exact_limit(tmp_path):
    storage = ImageStorage(str(tmp_path / "up"), max_file_size=10)
    name = storage.save(io.BytesIO(b"0123456789"), "ok.png", "image/png")
    assert os.path.getsize(tmp_path / "up" / name) == 10

    with pytest.raises(UploadRejected):
        storage.save(io.BytesIO(b"0123456789A"), "big.png", "image/png")
    assert os.listdir(tmp_path / "up") == [name]
