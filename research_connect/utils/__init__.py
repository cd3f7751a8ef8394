"""Utility helpers: configuration and logging."""

from __future__ import annotations

from research_connect.utils.config import get_default_config, load_config, save_config
from research_connect.utils.logging_setup import setup_logging

__all__ = ["get_default_config", "load_config", "save_config", "setup_logging"]
