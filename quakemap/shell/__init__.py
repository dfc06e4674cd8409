"""Imperative Shell - I/O and side effects.

This module contains all code that touches the outside world:
- Configuration loading (YAML files, environment)
- Country and city GeoJSON loading (files)

Keep this layer thin and simple. All logic should be in core.
"""

from quakemap.shell.config_loader import load_config, load_config_from_env
from quakemap.shell.geojson_loader import load_cities, load_regions

__all__ = [
    "load_config",
    "load_config_from_env",
    "load_cities",
    "load_regions",
]
