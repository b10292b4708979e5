import pytest
from pydantic import ValidationError

from gymdesk.adapters.configuration.config import Settings


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("http://a.com,http://b.com", ["http://a.com", "http://b.com"]),
        (" http://a.com , ,http://b.com ", ["http://a.com", "http://b.com"]),
        ('["http://a.com", "http://b.com"]', ["http://a.com", "http://b.com"]),
        ("http://a.com", ["http://a.com"]),
    ],
)
def test_cors_origins_from_environment(monkeypatch, raw, expected):
    monkeypatch.setenv("CORS_ORIGINS", raw)
    assert Settings(_env_file=None).CORS_ORIGINS == expected


def test_cors_origins_default_list():
    assert Settings(_env_file=None).CORS_ORIGINS == ["http://localhost:3000", "http://127.0.0.1:3000"]


def test_log_level_is_normalised(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert Settings(_env_file=None).LOG_LEVEL == "DEBUG"

    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_short_secret_key_is_rejected(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "too-short")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
