"""init file for config module."""
from app.config.config import Config, logger

__all__ = ["Config", "logger"]
