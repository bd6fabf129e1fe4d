"""Configuration management for fedimigrate."""

from fedimigrate.config.loader import load_config
from fedimigrate.config.models import Config

__all__ = ["Config", "load_config"]
