import pytest
from app.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    for name in ("POKEAPI_BASE_URL", "POKEAPI_TIMEOUT", "REDIS_URL", "CACHE_TTL", "LOG_LEVEL", "MAX_SESSIONS"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.pokeapi_base_url == "https://pokeapi.co/api/v2"
    assert settings.pokeapi_timeout == 5.0
    assert settings.redis_url == "redis://localhost:6379"
    assert settings.cache_ttl == 3600
    assert settings.log_level == "INFO"
    assert settings.max_sessions == 1000


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("POKEAPI_BASE_URL", "http://pokeapi.local/api/v2")
    monkeypatch.setenv("CACHE_TTL", "0")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.pokeapi_base_url == "http://pokeapi.local/api/v2"
    assert settings.cache_ttl == 0
    assert settings.log_level == "DEBUG"
