from pathlib import Path

import pytest

from db_analyzer.shared.errors import ConfigurationError
from db_analyzer.shared.settings import (
    Settings,
    database_name,
    load_settings,
    resolve_output_path,
)


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so teardown restores whatever was there before
    monkeypatch.setenv("DATABASE_URL", "placeholder")
    monkeypatch.delenv("DATABASE_URL")
    return monkeypatch


class TestLoadSettings:
    def test_reads_env_file(self, tmp_path, clean_env):
        env_file = tmp_path / ".env"
        env_file.write_text("DATABASE_URL=postgres://u:p@localhost:5432/shop\n")

        settings = load_settings(env_file)
        assert settings.database_url == "postgres://u:p@localhost:5432/shop"
        assert settings.database_name == "shop"

    def test_environment_wins_over_file(self, tmp_path, clean_env):
        env_file = tmp_path / ".env"
        env_file.write_text("DATABASE_URL=postgres://localhost/from_file\n")
        clean_env.setenv("DATABASE_URL", "postgres://localhost/from_env")

        assert load_settings(env_file).database_url == "postgres://localhost/from_env"

    def test_missing_database_url(self, tmp_path, clean_env):
        env_file = tmp_path / ".env"
        env_file.write_text("OTHER=1\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(env_file)
        assert exc_info.value.setting == "DATABASE_URL"


class TestDatabaseName:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("postgres://user:pw@localhost:5432/shop", "shop"),
            ("postgresql://localhost/analytics?sslmode=require", "analytics"),
            ("postgres://localhost:5432/", "db"),
            ("postgres://localhost", "db"),
            ("not a url", "db"),
            ("", "db"),
        ],
    )
    def test_database_name(self, url, expected):
        assert database_name(url) == expected

    def test_settings_property(self):
        assert Settings("postgres://localhost/inventory").database_name == "inventory"


class TestResolveOutputPath:
    def test_output_wins(self, tmp_path):
        output = tmp_path / "custom.rs"
        assert resolve_output_path(output, tmp_path / "other", "x.rs", "shop") == output

    def test_directory_and_name(self, tmp_path):
        assert resolve_output_path(None, tmp_path, "types.rs", "shop") == tmp_path / "types.rs"

    def test_default_name_from_database(self, tmp_path):
        assert resolve_output_path(None, tmp_path, None, "shop") == tmp_path / "shop_types.rs"

    def test_default_directory_is_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert resolve_output_path(None, None, None) == Path.cwd() / "db_types.rs"
