import io

import pytest
from PIL import Image
from werkzeug.datastructures import FileStorage

from app import create_app
from core.pocketbase.fakes import FakePocketBase


def png_bytes(size=(8, 8)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, (10, 20, 30)).save(buf, format="PNG")
    return buf.getvalue()


def screenshot_file(filename="pong.png", data=None) -> FileStorage:
    """A Werkzeug upload as the form would hand it to the service."""
    return FileStorage(stream=io.BytesIO(png_bytes() if data is None else data), filename=filename,
                       content_type="image/png")


@pytest.fixture()
def fake_pocketbase():
    return FakePocketBase()


@pytest.fixture()
def test_app(fake_pocketbase):
    app = create_app("testing", pocketbase_factory=lambda: fake_pocketbase)
    yield app


@pytest.fixture()
def test_client(test_app):
    with test_app.test_client() as client:
        with test_app.app_context():
            yield client


def seed_submission(fake, **overrides):
    fields = {
        "full_name": "Grace Hopper",
        "adypu_email": "grace@adypu.edu.in",
        "game_title": "Compiler Quest",
        "hosted_link": "https://quest.example.com",
        "github_link": "https://github.com/grace/quest",
    }
    fields.update(overrides)
    return fake.collection("wap_games").create(fields, files={"screenshot": ("quest.png", io.BytesIO(), "image/png")})


def seed_review(fake, game_id, name="Alice", rating=5, comment="Loved it"):
    return fake.collection("wap_games_comments").create(
        {"name": name, "rating": rating, "comment": comment, "wap_game": game_id}
    )
