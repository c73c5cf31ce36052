import tomllib

import pytest
from pydantic import ValidationError

from swiftlink.core.config import (
    BEARER_TOKEN_LENGTH,
    DatabaseConfig,
    DatabaseType,
    Settings,
    load_settings,
)
from swiftlink.db.Connection.database import build_database_url

CONFIG_TOML = """
[base]
code_size = 8
port = 9090
bearer_token = "abcdefghij"

[database]
database_type = "sqlite"
database = "links.db"
max_connections = 3
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(CONFIG_TOML)
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("SWIFTLINK_BASE__CODE_SIZE", "SWIFTLINK_DATABASE__DATABASE_TYPE"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings()
    assert settings.base.code_size == 6
    assert settings.base.port == 8080
    assert settings.database.database_type == DatabaseType.POSTGRES
    assert settings.database.database == "swiftlink_db"
    assert settings.database.max_connections == 5
    assert settings.rate_limit.enabled is False


def test_load_from_toml(config_file):
    settings = load_settings(config_file)
    assert settings.base.code_size == 8
    assert settings.base.port == 9090
    assert settings.base.bearer_token == "abcdefghij"
    assert settings.database.database_type == DatabaseType.SQLITE
    assert settings.database.database == "links.db"
    assert settings.database.max_connections == 3


def test_missing_file_falls_back_to_defaults(tmp_path):
    settings = load_settings(tmp_path / "does-not-exist.toml")
    assert settings.base.code_size == 6
    assert settings.database.database_type == DatabaseType.POSTGRES


def test_generates_bearer_token_when_absent():
    settings = load_settings()
    token = settings.base.bearer_token
    assert len(token) == BEARER_TOKEN_LENGTH
    assert token.isalnum()


def test_environment_overrides_file(config_file, monkeypatch):
    monkeypatch.setenv("SWIFTLINK_BASE__CODE_SIZE", "12")
    settings = load_settings(config_file)
    assert settings.base.code_size == 12
    assert settings.base.port == 9090


def test_invalid_toml_is_fatal(tmp_path):
    path = tmp_path / "broken.toml"
    path.write_text("[base\ncode_size = ")
    with pytest.raises(tomllib.TOMLDecodeError):
        load_settings(path)


def test_invalid_database_type(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text('[database]\ndatabase_type = "mysql"\n')
    with pytest.raises(ValidationError):
        load_settings(path)


def test_settings_are_immutable(config_file):
    settings = load_settings(config_file)
    with pytest.raises(ValidationError):
        settings.base.code_size = 3


def test_postgres_database_url():
    url = build_database_url(
        DatabaseConfig(username="swift", password="p@ss/word", host="db", port=5433, database="links")
    )
    assert url.drivername == "postgresql+psycopg2"
    assert url.username == "swift"
    assert url.password == "p@ss/word"
    assert url.host == "db"
    assert url.port == 5433
    assert url.database == "links"


def test_sqlite_database_url():
    url = build_database_url(DatabaseConfig(database_type=DatabaseType.SQLITE, database="/tmp/links.db"))
    assert url.drivername == "sqlite"
    assert url.database == "/tmp/links.db"
