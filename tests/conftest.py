"""Shared test constants, fixtures, and factory functions."""

from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from blog_api.auth import issue_token
from blog_api.authors import AuthorService
from blog_api.config import Settings
from blog_api.main import app
from blog_api.models import PostDraft
from blog_api.store import MemoryPostStore

# -- Constants --

JWT_SECRET = "test-jwt-secret"
ADMIN_PASSWORD = "admin-test-password"
ANN = "Ann"
BOB = "Bob"
ANN_PASSWORD = "ann-secret"

VALID_TITLE = "My First Post"
VALID_CONTENT = (
    "Python is a friendly language for new programmers. It reads almost like "
    "plain English and has a large standard library for everyday tasks."
)

SAMPLE_SEED_FILE = Path(__file__).resolve().parent.parent / "resources" / "blog_data.json"


# -- Factories --


def make_settings(**overrides: Any) -> Settings:
    """Create a Settings instance with test defaults. Override any field."""
    defaults: dict[str, Any] = {
        "jwt_secret": JWT_SECRET,
        "admin_password": ADMIN_PASSWORD,
    }
    return Settings(**(defaults | overrides))


def make_draft(
    author: str = ANN, title: str = VALID_TITLE, content: str = VALID_CONTENT
) -> PostDraft:
    return PostDraft(title=title, content=content, author=author)


def post_body(title: str = VALID_TITLE, content: str = VALID_CONTENT, **extra: Any) -> dict[str, Any]:
    return {"title": title, "content": content, **extra}


def auth_headers(author: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {issue_token(author, make_settings())}"}


# -- Fixtures --


@pytest.fixture
def env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set required env vars for Settings; seeding is switched off."""
    monkeypatch.setenv("JWT_SECRET", JWT_SECRET)
    monkeypatch.setenv("ADMIN_PASSWORD", ADMIN_PASSWORD)
    monkeypatch.setenv("SEED_FILE", "")
    monkeypatch.delenv("OTEL_EXPORTER_OTLP_ENDPOINT", raising=False)


@pytest.fixture
def store() -> MemoryPostStore:
    return MemoryPostStore()


@pytest.fixture
def authors() -> AuthorService:
    service = AuthorService(admin_password=ADMIN_PASSWORD)
    service.register(ANN, ANN_PASSWORD)
    return service


@pytest.fixture
async def client(
    env_vars: None, store: MemoryPostStore, authors: AuthorService
) -> AsyncIterator[AsyncClient]:
    """AsyncClient wired to the FastAPI app with a fresh store and test settings."""
    app.state.settings = make_settings()
    app.state.store = store
    app.state.authors = authors
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
