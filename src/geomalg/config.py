"""
===============================================================================
GEOMALG - Configuration
===============================================================================
Run-time settings for the command line tools, loaded from a YAML mapping.

Example ``geomalg.yaml``::

    slerp_epsilon: 1.0e-6
    tolerance: 1.0e-5
    angle_units: degrees
    sweep_start: 0
    sweep_stop: 720
    sweep_step: 10
    output_dir: output
    log_level: info

Every key is optional; unknown keys are rejected so that typos do not
silently fall back to defaults.
===============================================================================
"""

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

ANGLE_UNITS = ("degrees", "radians")
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass(frozen=True)
class GeomalgConfig:
    slerp_epsilon: float = 1e-6
    tolerance: float = 1e-5
    angle_units: str = "degrees"
    sweep_start: float = 0.0
    sweep_stop: float = 720.0
    sweep_step: float = 10.0
    output_dir: str = "output"
    log_level: str = "info"


_FIELD_TYPES = {
    "slerp_epsilon": float,
    "tolerance": float,
    "angle_units": str,
    "sweep_start": float,
    "sweep_stop": float,
    "sweep_step": float,
    "output_dir": str,
    "log_level": str,
}
_CONFIG_FIELDS = {f.name for f in fields(GeomalgConfig)}


def validate_config(cfg: GeomalgConfig) -> GeomalgConfig:
    """Raise ValueError naming the first invalid setting; return ``cfg``."""
    if not cfg.slerp_epsilon > 0.0:
        raise ValueError(f"slerp_epsilon must be positive, got {cfg.slerp_epsilon}")
    if not cfg.tolerance > 0.0:
        raise ValueError(f"tolerance must be positive, got {cfg.tolerance}")
    if cfg.angle_units not in ANGLE_UNITS:
        raise ValueError(f"angle_units must be one of {ANGLE_UNITS}, got {cfg.angle_units!r}")
    if not cfg.sweep_step > 0.0:
        raise ValueError(f"sweep_step must be positive, got {cfg.sweep_step}")
    if cfg.sweep_stop <= cfg.sweep_start:
        raise ValueError(
            f"sweep_stop ({cfg.sweep_stop}) must be greater than sweep_start ({cfg.sweep_start})"
        )
    if cfg.log_level.lower() not in LOG_LEVELS:
        raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {cfg.log_level!r}")
    return cfg


def config_from_mapping(data: Dict[str, Any],
                        base: Optional[GeomalgConfig] = None) -> GeomalgConfig:
    """Overlay a plain mapping onto ``base`` (defaults when omitted)."""
    unknown = sorted(set(data) - _CONFIG_FIELDS)
    if unknown:
        raise ValueError(f"Unknown configuration key(s): {', '.join(unknown)}")

    values = {}
    for key, raw in data.items():
        try:
            values[key] = _FIELD_TYPES[key](raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid value for {key}: {raw!r}") from exc

    return validate_config(replace(base or GeomalgConfig(), **values))


def load_config(path: Optional[Union[str, Path]] = None) -> GeomalgConfig:
    """
    Load configuration from a YAML file.

    Parameters
    ----------
    path : str or Path, optional
        YAML file containing a mapping. When omitted the defaults are used.

    Returns
    -------
    GeomalgConfig

    Raises
    ------
    ValueError
        If the document is not a mapping, contains unknown keys, or fails
        validation.
    """
    if path is None:
        return GeomalgConfig()

    logger.info("Loading configuration from: %s", path)
    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping")

    return config_from_mapping(data)
