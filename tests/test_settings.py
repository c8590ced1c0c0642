"""
Settings and logging configuration tests.
"""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from reviewpack.utils import configure_logging, load_settings
from reviewpack.utils.settings import ENV_OVERRIDES, PROJECT_ROOT


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    """Test YAML + environment settings."""

    def test_defaults_when_file_missing(self, tmp_path):
        settings = load_settings(tmp_path / "missing.yaml")
        assert settings.snapshot_path == PROJECT_ROOT / "data" / "snapshot.json"
        assert settings.page_title == "Class Review"
        assert settings.log_level == "INFO"
        assert settings.student_order == "input"

    def test_values_from_yaml(self, tmp_path):
        config = tmp_path / "review.yaml"
        config.write_text(
            "snapshot_path: exports/today.json\n"
            "page_title: Period 3\n"
            "student_order: student_id\n",
            encoding="utf-8",
        )
        settings = load_settings(config)
        assert settings.snapshot_path == PROJECT_ROOT / "exports" / "today.json"
        assert settings.page_title == "Period 3"
        assert settings.student_order == "student_id"

    def test_empty_yaml(self, tmp_path):
        config = tmp_path / "review.yaml"
        config.write_text("", encoding="utf-8")
        assert load_settings(config).page_title == "Class Review"

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        config = tmp_path / "review.yaml"
        config.write_text("page_title: From file\n", encoding="utf-8")
        monkeypatch.setenv("REVIEWPACK_PAGE_TITLE", "From env")
        monkeypatch.setenv("REVIEWPACK_SNAPSHOT", "/tmp/snap.json")
        settings = load_settings(config)
        assert settings.page_title == "From env"
        assert settings.snapshot_path == Path("/tmp/snap.json")

    def test_log_level_case_insensitive(self, tmp_path, monkeypatch):
        monkeypatch.setenv("REVIEWPACK_LOG_LEVEL", "debug")
        assert load_settings(tmp_path / "missing.yaml").log_level == "DEBUG"

    def test_invalid_student_order(self, tmp_path):
        config = tmp_path / "review.yaml"
        config.write_text("student_order: random\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_settings(config)

    def test_matrix_student_order(self, tmp_path, monkeypatch):
        monkeypatch.setenv("REVIEWPACK_STUDENT_ORDER", "matrix")
        assert load_settings(tmp_path / "missing.yaml").student_order == "matrix"

    def test_relative_snapshot_path_ignores_cwd(self, tmp_path, monkeypatch):
        config = tmp_path / "review.yaml"
        config.write_text("snapshot_path: data/sample_snapshot.json\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        settings = load_settings(config)
        assert settings.snapshot_path.is_absolute()
        assert settings.snapshot_path == PROJECT_ROOT / "data" / "sample_snapshot.json"
        assert settings.snapshot_path.exists()


class TestConfigureLogging:
    """Test the logging helper."""

    def test_returns_package_logger(self):
        logger = configure_logging("warning")
        assert logger.name == "reviewpack"
        assert isinstance(logger, logging.Logger)
