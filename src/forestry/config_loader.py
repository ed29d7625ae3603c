"""
Configuration loader for the forestry simulation.
Provides access to YAML and JSON settings files.

Settings sections:
- random_tree: half-open ranges for randomly generated trees
- reap: default reap policy (in_place or legacy)
- storage: directories and file suffixes for CSV input and saved forests
- logging: package log level

Values missing from a settings file fall back to the packaged defaults in
cfg/forestry.yaml.
"""
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .exceptions import ConfigurationError, ForestFileNotFoundError, InvalidDataError
from .forest import ReapPolicy
from .tree import RandomTreeBounds

DEFAULT_CONFIG_FILE = Path(__file__).parent / 'cfg' / 'forestry.yaml'

SUPPORTED_SUFFIXES = ('.yaml', '.yml', '.json')


@dataclass
class StorageSettings:
    """Where forests are read from and saved to."""
    data_dir: Path = Path('.')
    save_dir: Path = Path('.')
    csv_suffix: str = '.csv'
    forest_suffix: str = '.db'


@dataclass
class ForestrySettings:
    """Resolved settings for one simulation run.

    Attributes:
        random_tree: Ranges for new random trees
        reap_policy: Default reap policy for forests
        storage: File locations and suffixes
        log_level: Package log level name
    """
    random_tree: RandomTreeBounds = field(default_factory=RandomTreeBounds)
    reap_policy: ReapPolicy = ReapPolicy.IN_PLACE
    storage: StorageSettings = field(default_factory=StorageSettings)
    log_level: str = 'WARNING'


class ConfigLoader:
    """Loads forestry settings from a YAML or JSON file.

    Attributes:
        config_file: Path of the user settings file, or None for defaults only
        raw_config: Packaged defaults merged with the user file
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        self.config_file = Path(config_file) if config_file is not None else None

        self.raw_config = self._load_config_file(DEFAULT_CONFIG_FILE)
        if self.config_file is not None:
            overrides = self._load_config_file(self.config_file)
            self.raw_config = _merge(self.raw_config, overrides)

    def _load_config_file(self, file_path: Path) -> Dict[str, Any]:
        """Load configuration from a YAML or JSON file.

        Raises:
            ForestFileNotFoundError: If the file doesn't exist
            ConfigurationError: If the format is unsupported or the file
                does not hold a mapping
            InvalidDataError: If the file cannot be parsed
        """
        if not file_path.exists():
            raise ForestFileNotFoundError(str(file_path), "configuration file")

        suffix = file_path.suffix.lower()
        if suffix not in SUPPORTED_SUFFIXES:
            raise ConfigurationError(f"Unsupported configuration file format: {suffix}. "
                                     f"Supported formats: {', '.join(SUPPORTED_SUFFIXES)}")

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                if suffix == '.json':
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidDataError("YAML configuration", f"parsing error: {str(e)}") from e
        except json.JSONDecodeError as e:
            raise InvalidDataError("JSON configuration", f"parsing error: {str(e)}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration in {file_path} must be a mapping")
        return data

    def section(self, name: str) -> Dict[str, Any]:
        """Return one top-level section, empty if absent."""
        value = self.raw_config.get(name) or {}
        if not isinstance(value, dict):
            raise ConfigurationError(f"Configuration section '{name}' must be a mapping")
        return value

    def load_settings(self) -> ForestrySettings:
        """Resolve the raw configuration into typed settings.

        Raises:
            ConfigurationError: If a value has the wrong type or is out of range
        """
        try:
            bounds = RandomTreeBounds(**self.section('random_tree'))
        except TypeError as e:
            raise ConfigurationError(f"Invalid random_tree settings: {e}") from e

        policy_name = self.section('reap').get('policy', ReapPolicy.IN_PLACE.value)
        try:
            policy = ReapPolicy.from_value(policy_name)
        except ValueError as e:
            raise ConfigurationError(
                f"Unknown reap policy '{policy_name}'. "
                f"Supported policies: {[p.value for p in ReapPolicy]}"
            ) from e

        storage_cfg = self.section('storage')
        storage = StorageSettings(
            data_dir=Path(storage_cfg.get('data_dir', '.')),
            save_dir=Path(storage_cfg.get('save_dir', '.')),
            csv_suffix=str(storage_cfg.get('csv_suffix', '.csv')),
            forest_suffix=str(storage_cfg.get('forest_suffix', '.db')),
        )

        log_level = str(self.section('logging').get('level', 'WARNING')).upper()

        return ForestrySettings(
            random_tree=bounds,
            reap_policy=policy,
            storage=storage,
            log_level=log_level,
        )


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Merge overrides into base one level deep, section by section."""
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


# Loader for the packaged defaults, created on first use
_default_loader: Optional[ConfigLoader] = None


def get_config_loader(config_file: Optional[Union[str, Path]] = None) -> ConfigLoader:
    """Return a config loader.

    Without a config file the packaged-defaults loader is cached and reused.
    """
    global _default_loader
    if config_file is not None:
        return ConfigLoader(config_file)
    if _default_loader is None:
        _default_loader = ConfigLoader()
    return _default_loader


def load_settings(config_file: Optional[Union[str, Path]] = None) -> ForestrySettings:
    """Load settings from a file merged over the packaged defaults."""
    return get_config_loader(config_file).load_settings()
