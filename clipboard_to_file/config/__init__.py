from .loader import (
    DEFAULT_CONFIG_TEMPLATE,
    LoadedConfig,
    load_config,
    load_config_report,
    parse_extensions,
    read_extensions_file,
    write_default_extensions,
)
from .models import (
    DEFAULT_EXTENSIONS,
    ClassifierConfig,
    ClipboardConfig,
    ClipToFileConfig,
    DestinationConfig,
    FeatureConfig,
    MaterializeConfig,
)
from .store import ConfigSnapshot, ConfigStore, ReloadResult
from .watcher import ConfigWatcher

__all__ = [
    "DEFAULT_CONFIG_TEMPLATE",
    "DEFAULT_EXTENSIONS",
    "ClassifierConfig",
    "ClipToFileConfig",
    "ClipboardConfig",
    "ConfigSnapshot",
    "ConfigStore",
    "ConfigWatcher",
    "DestinationConfig",
    "FeatureConfig",
    "LoadedConfig",
    "MaterializeConfig",
    "ReloadResult",
    "load_config",
    "load_config_report",
    "parse_extensions",
    "read_extensions_file",
    "write_default_extensions",
]
