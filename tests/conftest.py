import pytest

from random_cat.app import create_app
from random_cat.config import Settings


@pytest.fixture
def image_root(tmp_path):
    root = tmp_path / "cats"
    root.mkdir()
    (root / "cat1.jpg").write_bytes(b"\xff\xd8\xff jpeg bytes")
    (root / "cat2.PNG").write_bytes(b"\x89PNG png bytes")
    (root / "notes.txt").write_text("not a cat")
    return root


@pytest.fixture
def app(image_root):
    app = create_app(Settings(image_dir=str(image_root)))
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
