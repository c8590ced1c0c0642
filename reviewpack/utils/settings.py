"""
Settings loader for ReviewPack.

Loads review page settings from config/review.yaml, then applies
REVIEWPACK_* environment overrides (a .env file is honoured).
"""

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


# Project root; relative paths in settings resolve against it
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Default config file (relative to project root)
CONFIG_PATH = PROJECT_ROOT / "config" / "review.yaml"

ENV_OVERRIDES = {
    "REVIEWPACK_SNAPSHOT": "snapshot_path",
    "REVIEWPACK_PAGE_TITLE": "page_title",
    "REVIEWPACK_LOG_LEVEL": "log_level",
    "REVIEWPACK_STUDENT_ORDER": "student_order",
}


class ReviewSettings(BaseModel):
    snapshot_path: Path = Field(default=Path("data/snapshot.json"), validate_default=True)
    page_title: str = "Class Review"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    student_order: Literal["input", "student_id", "matrix"] = "input"

    @field_validator("snapshot_path")
    @classmethod
    def snapshot_from_project_root(cls, v: Path) -> Path:
        return v if v.is_absolute() else PROJECT_ROOT / v


def load_settings(config_path: Path | None = None) -> ReviewSettings:
    """
    Load review settings.

    Args:
        config_path: Optional YAML file (default: config/review.yaml)

    Returns:
        ReviewSettings with file values and environment overrides applied

    Raises:
        yaml.YAMLError: If YAML parsing fails
        pydantic.ValidationError: If a value is invalid
    """
    load_dotenv()

    file_path = config_path or CONFIG_PATH
    values: dict[str, Any] = {}
    if file_path.exists():
        with open(file_path, "r", encoding="utf-8") as f:
            values = yaml.safe_load(f) or {}

    for env_name, field_name in ENV_OVERRIDES.items():
        env_value = os.environ.get(env_name)
        if env_value:
            values[field_name] = env_value

    if isinstance(values.get("log_level"), str):
        values["log_level"] = values["log_level"].upper()

    return ReviewSettings.model_validate(values)
