"""Configuration loading (YAML or JSON) and conversion to ``CapacityParams``."""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

import yaml

from dc_capacity.models import CapacityParams, Reduction

DEFAULT_CONFIG_FILE = "config.yaml"


def load_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from a YAML or JSON file.

    With no path, ``config.yaml`` in the working directory is read when it
    exists, otherwise an empty config is returned.

    Raises:
        FileNotFoundError: An explicit ``config_file`` does not exist.
        ValueError: The file is not valid YAML/JSON or does not hold a mapping.
    """
    if config_file is None:
        if not os.path.isfile(DEFAULT_CONFIG_FILE):
            return {}
        config_file = DEFAULT_CONFIG_FILE
    if not os.path.isfile(config_file):
        raise FileNotFoundError(f"Config file not found: {config_file}")

    with open(config_file, "r", encoding="utf-8") as f:
        text = f.read()
    if config_file.endswith(".json"):
        cfg = json.loads(text)
    else:
        try:
            cfg = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid config file {config_file}: {e}") from e
    if not isinstance(cfg, dict):
        raise ValueError(f"Config file must contain a mapping: {config_file}")
    return cfg


def _positive(section: Dict[str, Any], key: str, default, whole: bool = False) -> float:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"capacity.{key} must be a number, got {value!r}")
    if whole and not float(value).is_integer():
        raise ValueError(f"capacity.{key} must be a whole number, got {value!r}")
    if value <= 0:
        raise ValueError(f"capacity.{key} must be > 0, got {value}")
    return value


def params_from_config(cfg: Dict[str, Any]) -> CapacityParams:
    section = cfg.get("capacity", {}) if isinstance(cfg.get("capacity"), dict) else {}
    defaults = CapacityParams()
    return CapacityParams(
        max_group_rps=_positive(section, "max_group_rps", defaults.max_group_rps),
        unit_weight=float(_positive(section, "unit_weight", defaults.unit_weight, whole=True)),
        presence_weight=_positive(section, "presence_weight", defaults.presence_weight),
        reduction=Reduction.parse(section.get("reduction", defaults.reduction)),
        max_dimension=int(_positive(section, "max_dimension", defaults.max_dimension, whole=True)),
    )
