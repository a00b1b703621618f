"""Configuration management for sierpinski.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides.
"""

from sierpinski.config.settings import Settings, build_config, load_settings

__all__ = ["Settings", "build_config", "load_settings"]
