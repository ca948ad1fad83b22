"""Configuration loader module for UrbanSim.

The packaged ``default.yaml`` holds every weight and constant of the layout
synthesizer, the traffic router and the planning state. An optional user file
is merged over it, and values are read through dot-notation paths such as
``citygen.layout.cell_spacing``.
"""
import copy
from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent / 'default.yaml'

_MISSING = object()


def _read_yaml(path: Path) -> dict:
    """Read a YAML mapping; an empty file yields an empty dict.

    Raises:
        PermissionError: If the file cannot be opened.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except (PermissionError, IOError) as e:
        raise PermissionError(f'Cannot open config file: {path}') from e


def _merge(base: dict, updates: dict):
    """Recursively merge ``updates`` into ``base`` in place."""
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value


class Config:
    """Merged UrbanSim configuration with dot-path access."""

    def __init__(self, path: str = None):
        """Load the defaults and merge an optional user config over them.

        Args:
            path: Optional user YAML file; its values override the defaults.

        Raises:
            FileNotFoundError: If ``path`` is given but does not exist.
            PermissionError: If a config file cannot be opened.
        """
        self.config = _read_yaml(DEFAULT_CONFIG_PATH)
        if path:
            user_path = Path(path)
            if not user_path.exists():
                raise FileNotFoundError(f'Config file not found: {user_path}')
            _merge(self.config, _read_yaml(user_path))

    def get(self, key_path: str, default=_MISSING):
        """Get a value by dot-notation path, e.g. ``'traffic.num_vehicles'``.

        Raises:
            ValueError: If the key is missing and no default is given.
        """
        value = self.config
        for key in key_path.split('.'):
            if not isinstance(value, dict) or key not in value:
                if default is _MISSING:
                    raise ValueError(f'Key {key_path} not found in config')
                return default
            value = value[key]
        return value

    def __getitem__(self, key_path: str):
        """Dictionary-style access, equivalent to ``get`` without a default."""
        return self.get(key_path)

    def section(self, key_path: str) -> dict:
        """Return a deep copy of a nested section so callers cannot mutate the config."""
        value = self.get(key_path)
        if not isinstance(value, dict):
            raise ValueError(f'Key {key_path} is not a config section')
        return copy.deepcopy(value)
