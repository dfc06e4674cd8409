"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, ShadeConfig) are defined in quakemap/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from quakemap.core.config import Config, ShadeConfig, validate_config


logger = logging.getLogger(__name__)


def _resolve_value(value: Any) -> Any:
    """Resolve a ``${VAR}`` placeholder from the environment.

    Non-string values and plain strings are returned unchanged. An unset
    variable leaves the placeholder in place (validation flags it).
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_shade(data: dict[str, Any]) -> ShadeConfig:
    """Parse choropleth shading settings from config data."""
    defaults = ShadeConfig()
    return ShadeConfig(
        min_count=int(data.get("min_count", defaults.min_count)),
        max_count=int(data.get("max_count", defaults.max_count)),
        min_level=int(data.get("min_level", defaults.min_level)),
        max_level=int(data.get("max_level", defaults.max_level)),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    defaults = Config()

    return Config(
        countries_path=_resolve_value(data.get("countries_path", defaults.countries_path)),
        cities_path=_resolve_value(data.get("cities_path", defaults.cities_path)),
        shade=_parse_shade(data.get("shade") or {}),
        log_level=str(data.get("log_level", defaults.log_level)).upper(),
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object. Shade settings that fail validation are
        replaced by the defaults.

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)

    result = validate_config(config)
    for error in result.errors:
        log = logger.error if error.severity == "error" else logger.warning
        log("Config %s: %s", error.field, error.message)

    if not result.valid:
        logger.error("Invalid shade settings, using default shading")
        config = replace(config, shade=ShadeConfig())

    logger.info(
        "Loaded config: countries=%s, cities=%s",
        config.countries_path,
        config.cities_path,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        COUNTRIES_FILE: GeoJSON file with country polygons
        CITIES_FILE: GeoJSON file with city points
        LOG_LEVEL: Logging level name

    Returns:
        Config object from environment
    """
    defaults = Config()

    return Config(
        countries_path=os.environ.get("COUNTRIES_FILE", defaults.countries_path),
        cities_path=os.environ.get("CITIES_FILE", defaults.cities_path),
        log_level=os.environ.get("LOG_LEVEL", defaults.log_level).upper(),
    )
