"""Tests for configuration."""
import os

from pycatalog.server.config import DEFAULT_POKEMON_URL, Settings


ENV_VARS = ("PORT", "CATALOG_BIND_ADDRESS", "CATALOG_REQUEST_DELAY", "CATALOG_DATA_DIR", "CATALOG_API_KEY",
            "CORS_ORIGINS", "CATALOG_PEOPLE_LIMIT", "CATALOG_DEBUG")


def clear_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_default_settings(monkeypatch, tmp_path):
    clear_env(monkeypatch)
    monkeypatch.chdir(tmp_path)

    settings = Settings()

    assert settings.server_host == "0.0.0.0"
    assert settings.server_port == 3000
    assert settings.debug is False
    assert settings.request_delay == 1.0
    assert settings.stars_pages == 34
    assert settings.people_limit == 83
    assert settings.cache_ttl == 86400
    assert settings.pokemon_url == DEFAULT_POKEMON_URL
    assert settings.api_key is None


def test_env_override(monkeypatch, tmp_path):
    clear_env(monkeypatch)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CATALOG_REQUEST_DELAY", "0.5")
    monkeypatch.setenv("CATALOG_API_KEY", "secret")
    monkeypatch.setenv("CORS_ORIGINS", '["http://localhost:8080"]')
    monkeypatch.setenv("CATALOG_DEBUG", "true")

    settings = Settings()

    assert settings.server_port == 8080
    assert settings.request_delay == 0.5
    assert settings.api_key == "secret"
    assert settings.cors_origins == ["http://localhost:8080"]
    assert settings.debug is True


def test_dotenv_file(monkeypatch, tmp_path):
    clear_env(monkeypatch)
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("CATALOG_PEOPLE_LIMIT=10\n")

    assert Settings().people_limit == 10


def test_populate_by_name():
    settings = Settings(server_port=9000, data_dir="/var/cache/pycatalog")
    assert settings.server_port == 9000
    assert settings.cache_path("pokemon") == os.path.join("/var/cache/pycatalog", "pokemon_cache.json")
    assert settings.csv_path == os.path.join("/var/cache/pycatalog", "pokemon_data.csv")
