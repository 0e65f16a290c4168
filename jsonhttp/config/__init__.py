"""Configuration management modules."""

from jsonhttp.config.settings import ServerSettings, load_settings
from jsonhttp.config.defaults import DEFAULT_CONFIG, DEFAULT_INI_TEMPLATE

__all__ = ["ServerSettings", "load_settings", "DEFAULT_CONFIG", "DEFAULT_INI_TEMPLATE"]
