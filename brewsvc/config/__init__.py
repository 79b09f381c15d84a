"""Configuration module for brewsvc."""

from brewsvc.config.loader import get_config_path, load_config
from brewsvc.config.schema import Config

__all__ = ["Config", "load_config", "get_config_path"]
