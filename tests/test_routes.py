import logging
import re
from urllib.parse import urlparse

import pytest

from random_cat.app import create_app
from random_cat.config import Settings
from random_cat.routes import base36


def test_base36():
    assert base36(0) == "0"
    assert base36(35) == "z"
    assert base36(36) == "10"
    assert base36(1296) == "100"
    with pytest.raises(ValueError):
        base36(-1)


def test_index_redirects_to_fresh_view(client):
    first = client.get("/")
    second = client.get("/")

    assert first.status_code == 307
    assert re.search(r"/view/[0-9a-z]+$", first.headers["Location"])
    assert first.headers["Location"] != second.headers["Location"]


def test_view_embeds_random_image(client):
    response = client.get("/view/abc123")

    assert response.status_code == 200
    assert response.headers["Cache-Control"] == "no-store"
    assert response.mimetype == "text/html"
    body = response.get_data(as_text=True)
    match = re.search(r'<meta property="og:image" content="([^"]+)"', body)
    assert match
    url = urlparse(match.group(1).replace("&amp;", "&"))
    assert url.scheme == "http"
    assert url.path in ("/image/cat1.jpg", "/image/cat2.PNG")
    assert re.match(r"t=\d+$", url.query)


def test_view_without_images(tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()
    client = create_app(Settings(image_dir=str(empty))).test_client()

    response = client.get("/view/x")

    assert response.status_code == 404
    assert "No cat found" in response.get_data(as_text=True)


def test_view_with_missing_directory(tmp_path):
    client = create_app(Settings(image_dir=str(tmp_path / "gone"))).test_client()

    response = client.get("/view/x")

    assert response.status_code == 500
    assert "No cat found" in response.get_data(as_text=True)


def test_image_is_served_with_no_cache_headers(client):
    response = client.get("/image/cat1.jpg")

    assert response.status_code == 200
    assert response.data == b"\xff\xd8\xff jpeg bytes"
    assert response.mimetype == "image/jpeg"
    assert response.headers["Cache-Control"] == "no-store, no-cache, must-revalidate, proxy-revalidate"
    assert response.headers["Pragma"] == "no-cache"
    assert response.headers["Expires"] == "0"
    assert response.headers["Surrogate-Control"] == "no-store"
    disposition = response.headers["Content-Disposition"]
    assert disposition.startswith("inline")
    assert "cat1.jpg" in disposition
    response.close()


def test_image_content_type_is_case_insensitive(client):
    response = client.get("/image/cat2.PNG")

    assert response.status_code == 200
    assert response.mimetype == "image/png"
    response.close()


def test_non_image_file_gets_generic_type(client):
    response = client.get("/image/notes.txt")

    assert response.status_code == 200
    assert response.mimetype == "application/octet-stream"
    response.close()


@pytest.mark.parametrize("path", [
    "/image/..%2F..%2Fetc%2Fpasswd",
    "/image/..%5Cwin.ini",
    "/image/sub/cat1.jpg",
    "/image/..",
])
def test_image_rejects_traversal(client, path):
    response = client.get(path)

    assert response.status_code == 400
    assert response.get_data(as_text=True) == "Invalid filename"


def test_missing_image(client):
    response = client.get("/image/missing.png")

    assert response.status_code == 404
    assert response.get_data(as_text=True) == "Image not found"


def test_settings_page(client):
    response = client.get("/settings")

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Cat Settings" in body
    assert 'id="darkmode-toggle"' in body


def test_healthz(client, image_root):
    data = client.get("/healthz").get_json()

    assert data == {"status": "ok", "image_dir": str(image_root), "image_dir_exists": True}


def test_view_never_offers_image_outside_root(tmp_path):
    root = tmp_path / "cats"
    root.mkdir()
    outside = tmp_path / "secret.jpg"
    outside.write_bytes(b"secret")
    try:
        (root / "link.jpg").symlink_to(outside)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")
    client = create_app(Settings(image_dir=str(root))).test_client()

    assert client.get("/view/x").status_code == 404
    assert client.get("/image/link.jpg").status_code == 400


def test_view_warns_when_pick_is_in_subdirectory(tmp_path, caplog):
    root = tmp_path / "cats"
    (root / "sub").mkdir(parents=True)
    (root / "sub" / "only.jpg").write_bytes(b"x")
    client = create_app(Settings(image_dir=str(root))).test_client()

    with caplog.at_level(logging.WARNING, logger="random_cat.routes"):
        response = client.get("/view/x")

    assert response.status_code == 200
    assert "subdirectory" in caplog.text
    assert "only.jpg" in caplog.text


def test_view_does_not_warn_for_top_level_pick(client, caplog):
    with caplog.at_level(logging.WARNING, logger="random_cat.routes"):
        client.get("/view/x")

    assert "subdirectory" not in caplog.text
