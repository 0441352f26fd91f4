"""
Tests for application settings and logging setup.
"""

from pathlib import Path

import pytest
import structlog
from pydantic import ValidationError

from src.config import Settings
from src.logging_config import configure_logging


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        """Test defaults when nothing is configured."""
        for var in (
            "AZURE_STORAGE_CONNECTION_STRING",
            "QUICKSTART_CONTAINER_PREFIX",
            "QUICKSTART_LOCAL_DIR",
            "QUICKSTART_FILE_CONTENT",
            "QUICKSTART_PUBLIC_ACCESS",
            "QUICKSTART_PAGE_SIZE",
        ):
            monkeypatch.delenv(var, raising=False)

        settings = Settings(_env_file=None)

        assert settings.azure_connection_string_str is None
        assert settings.quickstart_container_prefix == "quickstartblobs"
        assert settings.quickstart_local_dir is None
        assert settings.quickstart_file_content == "Hello, World!"
        assert settings.quickstart_public_access == "blob"
        assert settings.quickstart_page_size is None

    def test_reads_environment(self, monkeypatch, tmp_path):
        """Test values come from environment variables."""
        monkeypatch.setenv("AZURE_STORAGE_CONNECTION_STRING", "UseDevelopmentStorage=true")
        monkeypatch.setenv("QUICKSTART_LOCAL_DIR", str(tmp_path))
        monkeypatch.setenv("QUICKSTART_PUBLIC_ACCESS", "private")
        monkeypatch.setenv("QUICKSTART_PAGE_SIZE", "5")

        settings = Settings(_env_file=None)

        assert settings.azure_connection_string_str == "UseDevelopmentStorage=true"
        assert settings.quickstart_local_dir == Path(tmp_path)
        assert settings.quickstart_public_access == "private"
        assert settings.quickstart_page_size == 5

    def test_connection_string_is_secret(self, monkeypatch):
        """Test the connection string is masked in reprs."""
        monkeypatch.setenv("AZURE_STORAGE_CONNECTION_STRING", "AccountName=a;AccountKey=c2VjcmV0")

        settings = Settings(_env_file=None)

        assert "c2VjcmV0" not in repr(settings)

    def test_reads_env_file(self, monkeypatch, tmp_path):
        """Test values from a .env file."""
        monkeypatch.delenv("QUICKSTART_FILE_CONTENT", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("QUICKSTART_FILE_CONTENT=From dotenv\n")

        settings = Settings(_env_file=env_file)

        assert settings.quickstart_file_content == "From dotenv"

    @pytest.mark.parametrize(
        "var,value",
        [("QUICKSTART_PUBLIC_ACCESS", "everyone"), ("QUICKSTART_PAGE_SIZE", "0")],
    )
    def test_rejects_invalid_values(self, monkeypatch, var, value):
        monkeypatch.setenv(var, value)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestConfigureLogging:
    """Tests for structlog setup."""

    def test_json_output(self, capsys):
        """Test JSON lines go to stderr."""
        configure_logging("INFO", "json")
        structlog.get_logger("test").info("Container created", container="abc")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert '"event": "Container created"' in captured.err
        assert '"container": "abc"' in captured.err

    def test_default_format_matches_settings(self, capsys):
        """Test the default renderer is the console one, like Settings.log_format."""
        configure_logging("INFO")
        structlog.get_logger("test").info("Container created", container="abc")

        err = capsys.readouterr().err
        assert Settings.model_fields["log_format"].default == "text"
        assert "Container created" in err
        assert '"event":' not in err

    def test_level_filters(self, capsys):
        """Test events below the level are dropped."""
        configure_logging("WARNING", "text")
        structlog.get_logger("test").info("Hidden event")

        assert "Hidden event" not in capsys.readouterr().err
