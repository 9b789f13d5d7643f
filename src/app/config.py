"""Configuration loaded from YAML with environment variable overrides.

Only the signal engine and the CLI read this; the indicator functions take
every parameter explicitly.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

# Project root: two levels up from this file (src/app/config.py -> project root)
_PROJECT_ROOT = Path(__file__).resolve().parents[2]

_CONFIG_PATH = _PROJECT_ROOT / "config" / "config.yaml"
_CONFIG_EXAMPLE_PATH = _PROJECT_ROOT / "config" / "config.example.yaml"

# Environment variable -> (dot-separated config key, type)
_ENV_OVERRIDES: dict[str, tuple[str, type]] = {
    "INDIC_LOG_LEVEL": ("log_level", str),
    "INDIC_ATR_PERIOD": ("indicators.atr_period", int),
    "INDIC_ATR_MULTIPLIER": ("indicators.atr_multiplier", float),
    "INDIC_BB_PERIOD": ("indicators.bb_period", int),
    "INDIC_BB_WIDTH": ("indicators.bb_width", float),
    "INDIC_BB_MIDDLE": ("indicators.bb_middle", str),
    "INDIC_RSI_PERIOD": ("indicators.rsi_period", int),
    "INDIC_RSI_OVERSOLD": ("indicators.rsi_oversold", float),
    "INDIC_RSI_OVERBOUGHT": ("indicators.rsi_overbought", float),
    "INDIC_MACD_SHORT": ("indicators.macd_short", int),
    "INDIC_MACD_LONG": ("indicators.macd_long", int),
    "INDIC_MACD_SIGNAL": ("indicators.macd_signal", int),
    "INDIC_STOCH_PERIOD": ("indicators.stoch_period", int),
    "INDIC_STOCH_PERIOD_D": ("indicators.stoch_period_d", int),
    "INDIC_OBV_SHORT": ("indicators.obv_short", int),
    "INDIC_OBV_LONG": ("indicators.obv_long", int),
}

_instance: dict[str, Any] | None = None


def _set_nested(data: dict[str, Any], dotted_key: str, value: Any) -> None:
    """Set a value in a nested dict using a dot-separated key path."""
    keys = dotted_key.split(".")
    current = data
    for key in keys[:-1]:
        current = current.setdefault(key, {})
    current[keys[-1]] = value


def _cast(value: str, target_type: type) -> Any:
    """Cast a string environment variable to the target type."""
    if target_type is bool:
        return value.lower() in ("1", "true", "yes", "on")
    return target_type(value)


def _load_yaml(path: Path | None = None) -> dict[str, Any]:
    """Load YAML config, falling back to the example file."""
    if path is None:
        path = _CONFIG_PATH if _CONFIG_PATH.exists() else _CONFIG_EXAMPLE_PATH
    if not path.exists():
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def _apply_env_overrides(cfg: dict[str, Any]) -> None:
    """Override config values with environment variables when set."""
    for env_var, (dotted_key, target_type) in _ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value is not None:
            _set_nested(cfg, dotted_key, _cast(value, target_type))


def load_config(*, reload: bool = False, path: Path | None = None) -> dict[str, Any]:
    """Load and return the configuration (singleton).

    Args:
        reload: Force a fresh load, bypassing the cached instance.
        path:   Read this YAML file instead of ``config/config.yaml``.

    Returns:
        The merged configuration dictionary.
    """
    global _instance
    if _instance is not None and not reload and path is None:
        return _instance

    cfg = _load_yaml(path)
    _apply_env_overrides(cfg)
    _instance = cfg
    return _instance


def get_config(section: str | None = None) -> dict[str, Any]:
    """Get the full config or a specific top-level section.

    Args:
        section: Optional top-level key (e.g. ``"indicators"``).
                 Returns the full config dict when None.

    Raises:
        KeyError: If the requested section does not exist.
    """
    cfg = load_config()
    if section is None:
        return cfg
    if section not in cfg:
        raise KeyError(f"Config section '{section}' not found")
    return cfg[section]
