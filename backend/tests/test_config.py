from influenceflow.core.config import DEFAULT_JWT_SECRET, Settings
from influenceflow.main import create_app


def test_defaults(monkeypatch):
    for key in ("JWT_SECRET", "PORT", "TOKEN_TTL_DAYS", "BCRYPT_ROUNDS", "BACKEND_CORS_ORIGINS"):
        monkeypatch.delenv(key, raising=False)
    settings = Settings(_env_file=None)

    assert settings.JWT_SECRET == DEFAULT_JWT_SECRET
    assert settings.uses_default_secret
    assert settings.PORT == 4000
    assert settings.TOKEN_TTL_DAYS == 7
    assert settings.token_max_age_seconds == 7 * 24 * 60 * 60
    assert settings.BCRYPT_ROUNDS == 10
    assert settings.BACKEND_CORS_ORIGINS == ["http://localhost:3000"]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "from-env")
    monkeypatch.setenv("PORT", "5050")
    settings = Settings(_env_file=None)

    assert settings.JWT_SECRET == "from-env"
    assert not settings.uses_default_secret
    assert settings.PORT == 5050


def test_default_secret_logs_warning(tmp_path, caplog):
    create_app(Settings(_env_file=None, JWT_SECRET=DEFAULT_JWT_SECRET, DATABASE_PATH=str(tmp_path / "crm.db")))
    assert "insecure development default" in caplog.text


def test_each_app_gets_its_own_services(settings):
    first, second = create_app(settings), create_app(settings)

    assert first.state.token_service is not second.state.token_service
    assert first.state.settings is settings


def test_token_lifetime_follows_settings(settings):
    app = create_app(settings.model_copy(update={"TOKEN_TTL_DAYS": 2}))
    assert app.state.token_service.ttl.total_seconds() == 2 * 24 * 60 * 60
