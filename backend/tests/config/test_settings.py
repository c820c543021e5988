"""Settings — environment overrides and async driver URL rewriting."""

from gdp_records.config import Settings


def test_postgres_url_gets_async_driver():
    settings = Settings(database_url="postgresql://u:p@db:5432/gdp")
    assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/gdp"


def test_explicit_driver_left_alone():
    url = "postgresql+asyncpg://u:p@db:5432/gdp"
    assert Settings(database_url=url).database_url == url


def test_port_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    assert Settings().port == 8080


def test_default_port(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    assert Settings(_env_file=None).port == 3000
