"""Tests for settings loading."""

from chat_admin.config import Settings


def test_settings_read_env_file_and_ignore_unknown_keys(tmp_path, monkeypatch):
    monkeypatch.delenv("DISPLAY_TIMEZONE", raising=False)
    monkeypatch.delenv("API_PREFIX", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text(
        "DISPLAY_TIMEZONE=UTC\nAPI_PREFIX=/admin\nUNRELATED_SERVICE_TOKEN=abc\n"
    )

    settings = Settings(_env_file=env_file)

    assert settings.display_timezone == "UTC"
    assert settings.api_prefix == "/admin"
    assert not hasattr(settings, "unrelated_service_token")


def test_settings_env_file_points_at_project_root():
    assert Settings.model_config["env_file"].endswith(".env")
    assert Settings.model_config["extra"] == "ignore"


def test_test_environment_uses_test_database(monkeypatch):
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("TEST_DATABASE_URL", "postgresql://u:p@db:5432/chat_test")

    settings = Settings()

    assert settings.database_url == "postgresql://u:p@db:5432/chat_test"
    assert settings.async_database_url.drivername == "postgresql+asyncpg"


def test_cors_origins_split_on_commas(monkeypatch):
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example,")

    assert Settings().cors_origins == ["https://a.example", "https://b.example"]
