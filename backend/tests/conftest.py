from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from contactbook.core.config import Settings
from contactbook.main import create_app


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    """Minimal frontend bundle: an entry document plus one asset."""
    public = tmp_path / "public"
    (public / "assets").mkdir(parents=True)
    (public / "index.html").write_text("<!doctype html><title>Contact Book</title>", encoding="utf-8")
    (public / "assets" / "app.js").write_text("console.log('contacts');", encoding="utf-8")
    return public


@pytest.fixture
def settings(tmp_path: Path, public_dir: Path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'contacts.sqlite3'}",
        PUBLIC_DIR=public_dir,
        CORS_ORIGINS="*",
    )


@pytest.fixture
def client(settings: Settings):
    # context manager runs the startup hook, which connects the store
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def make_contact(client):
    def _make(name="Alice Example", email="alice@example.com", phone="5551234567"):
        resp = client.post("/api/contacts", json={"name": name, "email": email, "phone": phone})
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
