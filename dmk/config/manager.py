"""Configuration manager for loading and validating project settings."""

import importlib
import logging
import yaml
from pathlib import Path
from typing import Any

from dmk.mapping import EntityDefinitionError, EntityDescriptor, MappingContext

from .models import ProjectConfig
from .settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages project configuration loading and validation."""

    def __init__(self, config_path: str | Path | None = None, settings: Settings | None = None) -> None:
        """Initialize configuration manager.

        Args:
            config_path: Path to the project configuration file. Without one,
                the defaults of `ProjectConfig` are used.
            settings: Environment settings (defaults to the process-wide ones)
        """
        self.settings = settings or default_settings
        if config_path is None and self.settings.config_path:
            config_path = self.settings.config_path
        self.config_path = Path(config_path) if config_path else None
        self._config: ProjectConfig | None = None
        self._context: MappingContext | None = None

    def load_config(self) -> ProjectConfig:
        """Load and validate project configuration.

        Returns:
            Validated project configuration

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If config file is invalid YAML
            ValidationError: If config doesn't match schema
        """
        if self.config_path is None:
            self._config = ProjectConfig()
            return self._config

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        self._config = ProjectConfig(**config_data)
        return self._config

    @property
    def config(self) -> ProjectConfig:
        """Get the loaded configuration.

        Returns:
            Project configuration (loads if not already loaded)
        """
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def get_type_key(self) -> str:
        """Discriminator key; the environment overrides the configuration file."""
        return self.settings.type_key or self.config.mapping.type_key

    def build_context(self) -> MappingContext:
        """Get the mapping context described by the configuration.

        Imports the configured model modules, then resolves simple types and
        type aliases. The context is built once and reused.
        """
        if self._context is not None:
            return self._context

        config = self.config
        options = config.mapping
        for module_name in config.models:
            logger.debug("Importing model module %s", module_name)
            try:
                importlib.import_module(module_name)
            except ImportError as exc:
                raise EntityDefinitionError(f"Cannot import model module '{module_name}': {exc}") from exc

        simple_types = [self.import_object(ref) for ref in options.simple_types]
        aliases = {self.import_object(ref): alias for ref, alias in options.type_aliases.items()}

        self._context = MappingContext.create(
            type_key=self.get_type_key(),
            naming=options.type_naming,
            separator=options.path_separator,
            simple_types=simple_types,
            aliases=aliases,
        )
        return self._context

    def resolve_entity(self, reference: str) -> EntityDescriptor:
        """Describe the class named by ``reference`` ('pkg.module:Class')."""
        entity_type = self.import_object(reference)
        if not isinstance(entity_type, type):
            raise EntityDefinitionError(f"'{reference}' is not a class")
        entity = self.build_context().metadata.get_entity(entity_type)
        if entity is None:
            raise EntityDefinitionError(f"'{reference}' is not a structured type")
        return entity

    @staticmethod
    def import_object(reference: str) -> Any:
        """Import an object from 'pkg.module:Name' (or 'pkg.module.Name')."""
        module_name, sep, attribute = reference.partition(':')
        if not sep:
            module_name, _, attribute = reference.rpartition('.')
        if not module_name or not attribute:
            raise EntityDefinitionError(f"Invalid object reference: '{reference}'")

        try:
            obj: Any = importlib.import_module(module_name)
        except ImportError as exc:
            raise EntityDefinitionError(f"Cannot import module '{module_name}': {exc}") from exc

        for part in attribute.split('.'):
            try:
                obj = getattr(obj, part)
            except AttributeError:
                raise EntityDefinitionError(
                    f"Module '{module_name}' has no attribute '{attribute}'"
                ) from None
        return obj
