"""Configuration for the Greenhouse tooling."""

from config.settings import Config, load_config

__all__ = ["Config", "load_config"]
