"""
Configuration loader with built-in defaults.

Every key has a default, so a config file only needs the values it
changes.
"""

import copy
import logging
import os
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Dict[str, Any]] = {
    'limits': {
        'max_input_bytes': 3_000_000,
    },
    'histogram': {
        'chart_size_cm': 6.0,
        'dpi': 100,
        'panel_separator': 5,
    },
    'compare': {
        'image_size': [500, 500],
        'histogram_size': [1500, 500],
        'horizontal_separator': 5,
        'vertical_separator': 15,
    },
    'logging': {
        'level': 'INFO',
    },
}

_POSITIVE_KEYS = {'histogram.dpi'}


def default_config() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULTS)


def _check_value(name: str, value: Any, default: Any) -> None:
    """Raise ValueError unless value has the same type and shape as default."""
    if isinstance(default, list):
        if not isinstance(value, list) or len(value) != len(default):
            raise ValueError(f"{name} must be a list of {len(default)} integers, got {value!r}")
        for item in value:
            if isinstance(item, bool) or not isinstance(item, int) or item <= 0:
                raise ValueError(f"{name} must hold positive integers, got {value!r}")
    elif isinstance(default, bool) or isinstance(default, str):
        if not isinstance(value, type(default)):
            raise ValueError(f"{name} must be a {type(default).__name__}, got {value!r}")
    elif isinstance(default, int):
        low = 1 if name in _POSITIVE_KEYS else 0
        if isinstance(value, bool) or not isinstance(value, int) or value < low:
            raise ValueError(f"{name} must be an integer >= {low}, got {value!r}")
    elif isinstance(default, float):
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"{name} must be a positive number, got {value!r}")


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file on top of the defaults

    Args:
        config_path: Path to YAML configuration file, or None for defaults only

    Returns:
        Dictionary containing configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ValueError: If a value does not match the type of its default
    """
    config = default_config()
    if config_path is None:
        return config

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.error(f"Error parsing YAML configuration: {e}")
        raise

    if not isinstance(loaded, dict):
        raise ValueError(f"Configuration root must be a mapping: {config_path}")

    for section, values in loaded.items():
        if section not in config:
            logger.warning(f"Unknown configuration section: {section}")
            continue
        if not isinstance(values, dict):
            logger.warning(f"Ignoring non-mapping configuration section: {section}")
            continue
        for key, value in values.items():
            if key not in config[section]:
                logger.warning(f"Unknown configuration key: {section}.{key}")
                continue
            _check_value(f"{section}.{key}", value, DEFAULTS[section][key])
            config[section][key] = value

    logger.info(f"Configuration loaded from {config_path}")
    return config
