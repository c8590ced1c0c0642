"""ReviewPack utilities."""

from .logging_config import configure_logging
from .settings import ReviewSettings, load_settings, CONFIG_PATH

__all__ = [
    "configure_logging",
    "ReviewSettings",
    "load_settings",
    "CONFIG_PATH",
]
