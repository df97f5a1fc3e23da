"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration
from .runtime_settings import (
    CombinatorMode,
    InspectorConfiguration,
    OptionNameForIndex,
    ParserConfig,
    SchemaPartSettings,
    default_option_name,
)

__all__ = [
    "CombinatorMode",
    "InspectorConfiguration",
    "OptionNameForIndex",
    "ParserConfig",
    "SchemaPartSettings",
    "default_option_name",
    "ConfigurationError",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
