"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from blog_api.config import Settings
from blog_api.validation import DEFAULT_SPAM_PHRASES
from tests.conftest import ADMIN_PASSWORD, JWT_SECRET, make_settings


def test_settings_loads_env_vars(env_vars: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("SEED_FILE", "/data/posts.json")

    settings = Settings()  # type: ignore[call-arg]

    assert settings.jwt_secret == JWT_SECRET
    assert settings.admin_password == ADMIN_PASSWORD
    assert settings.port == 9000
    assert settings.seed_file == "/data/posts.json"


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SEED_FILE", raising=False)
    settings = make_settings()
    assert settings.host == "0.0.0.0"
    assert settings.port == 8080
    assert settings.jwt_algorithm == "HS256"
    assert settings.jwt_expire_minutes == 30
    assert settings.seed_file == "resources/blog_data.json"
    assert settings.spam_phrase_list == DEFAULT_SPAM_PHRASES


def test_settings_missing_secret_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(ValidationError):
        Settings()  # type: ignore[call-arg]


def test_settings_rejects_blank_secret() -> None:
    with pytest.raises(ValidationError, match="JWT_SECRET must not be empty"):
        make_settings(jwt_secret="  ")


@pytest.mark.parametrize("minutes", [0, -5])
def test_settings_rejects_non_positive_expiry(minutes: int) -> None:
    with pytest.raises(ValidationError, match="JWT_EXPIRE_MINUTES must be positive"):
        make_settings(jwt_expire_minutes=minutes)


def test_spam_phrases_are_split_and_lowercased() -> None:
    settings = make_settings(spam_phrases=" Act Now ,, Crypto ")
    assert settings.spam_phrase_list == ("act now", "crypto")
