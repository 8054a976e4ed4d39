"""Configuration management for Document Mapping Kit."""

from .manager import ConfigManager
from .models import MappingOptions, ProjectConfig
from .settings import Settings, settings

__all__ = ["ConfigManager", "MappingOptions", "ProjectConfig", "Settings", "settings"]
