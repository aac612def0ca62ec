"""Unit tests for runtime settings and configuration loading."""

import os
from unittest.mock import patch

import pytest

from src.bookshelf.core.services import DbSessionService
from src.bookshelf.runtime.config.config_data import ConfigData, DatabaseConfig
from src.bookshelf.runtime.config.config_template import (
    load_templated_yaml,
    substitute_env_vars,
)
from src.bookshelf.runtime.context import load_config
from src.bookshelf.runtime.settings import EnvironmentVariables


class TestEnvironmentVariables:
    def test_default_values(self):
        with patch.dict(os.environ, {}, clear=True):
            env_vars = EnvironmentVariables(_env_file=None)

            assert env_vars.environment == "development"
            assert env_vars.config_file == "config.yaml"

    def test_environment_variable_loading(self):
        test_env = {"APP_ENVIRONMENT": "test", "APP_CONFIG_FILE": "/etc/books.yaml"}

        with patch.dict(os.environ, test_env, clear=True):
            env_vars = EnvironmentVariables(_env_file=None)

            assert env_vars.environment == "test"
            assert env_vars.config_file == "/etc/books.yaml"


class TestSubstituteEnvVars:
    def test_default_used_when_unset(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("url: ${DB_URL:-sqlite://}") == "url: sqlite://"

    def test_value_overrides_default(self):
        with patch.dict(os.environ, {"DB_URL": "postgresql://db"}, clear=True):
            assert (
                substitute_env_vars("url: ${DB_URL:-sqlite://}")
                == "url: postgresql://db"
            )

    def test_required_variable_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="DB_URL not set"):
                substitute_env_vars("url: ${DB_URL}")

    def test_required_variable_custom_message(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="set the database"):
                substitute_env_vars("url: ${DB_URL:?set the database}")


class TestLoadTemplatedYaml:
    def test_loads_config_section(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "config:\n"
            "  database:\n"
            "    url: ${DB_URL:-sqlite:///books.db}\n"
            "    backend: memory\n"
            "  logging:\n"
            "    level: DEBUG\n"
        )

        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(path)

        assert config.database.url == "sqlite:///books.db"
        assert config.database.backend == "memory"
        assert config.logging.level == "DEBUG"
        assert config.app.environment == "development"

    def test_environment_prefixed_override(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("config:\n  database:\n    url: ${DB_URL:-sqlite://}\n")

        with patch.dict(os.environ, {"TEST_DB_URL": "sqlite:///test.db"}, clear=True):
            config = load_templated_yaml(path, env_mode="test")

        assert config.database.url == "sqlite:///test.db"

    def test_invalid_value_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("config:\n  database:\n    backend: mongo\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(path)

    def test_empty_file_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        with pytest.raises(ValueError):
            load_templated_yaml(path)

    def test_missing_file_falls_back_to_defaults(self, tmp_path):
        env = {"APP_CONFIG_FILE": str(tmp_path / "absent.yaml")}
        with patch.dict(os.environ, env, clear=True):
            config = load_config(EnvironmentVariables(_env_file=None))

        assert config == ConfigData()


class TestDatabaseConfig:
    def test_sqlite_detection(self):
        assert DatabaseConfig(url="sqlite:///:memory:").is_sqlite
        assert not DatabaseConfig(url="postgresql://u:p@db/books").is_sqlite

    def test_engine_uses_configured_url(self):
        database_service = DbSessionService(
            DatabaseConfig(url="sqlite:///:memory:", echo=True)
        )
        try:
            assert str(database_service.engine.url) == "sqlite:///:memory:"
            assert database_service.engine.echo is True
        finally:
            database_service.dispose()
