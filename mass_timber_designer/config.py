"""
Calculator settings loaded from a dict or a YAML file.

Example settings.yaml:

    grade: ML38
    safety_factor: 1.5
    deflection_limit: 300
    joist_spacing_mm: 800
    max_bay_span: 9.0
    catalog_path: null        # null -> packaged masslam_sizes.csv
    rates:
      beam_rate: 3200
      column_rate: 3200
      joist_rates:
        "165x270": 390
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .costing import RateTable
from .material_data import STRUCTURAL_GRADE, TIMBER_GRADES

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "data" / "settings.yaml"

_POSITIVE_KEYS = ("safety_factor", "joist_spacing_mm", "max_bay_span")


@dataclass(frozen=True)
class CalculatorSettings:
    """Defaults applied to a structure calculation."""
    grade: str = STRUCTURAL_GRADE
    safety_factor: float = 1.5
    deflection_limit: float | None = 300
    joist_spacing_mm: float = 800.0
    max_bay_span: float = 9.0
    catalog_path: str | None = None
    rates: RateTable = field(default_factory=RateTable)


def load_settings(config_input=None) -> CalculatorSettings:
    """Load settings from a dict or a path to a YAML file.

    With no argument the packaged settings file is read.

    Raises:
        FileNotFoundError: If the YAML file is missing
        ValueError: If a key is unknown or a value invalid
    """
    if config_input is None:
        config_input = DEFAULT_SETTINGS_PATH

    if isinstance(config_input, dict):
        config = dict(config_input)
    elif isinstance(config_input, (str, os.PathLike)):
        config = _load_yaml(config_input)
    else:
        raise TypeError("config_input must be dict or file path")

    return _validate(config)


def _load_yaml(path) -> dict:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Settings file not found: {path}")
    with open(path, "r") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")
    return data


def _validate(config: dict) -> CalculatorSettings:
    known = set(CalculatorSettings.__dataclass_fields__)
    unknown = sorted(set(config) - known)
    if unknown:
        raise ValueError(f"Unknown setting(s): {', '.join(unknown)}")

    grade = config.get("grade", STRUCTURAL_GRADE)
    if grade not in TIMBER_GRADES:
        raise ValueError(
            f"Unknown grade '{grade}'. Available: {', '.join(TIMBER_GRADES.keys())}"
        )

    values = {}
    for key in _POSITIVE_KEYS:
        if key in config:
            value = float(config[key])
            if value <= 0:
                raise ValueError(f"Setting '{key}' must be positive, got {config[key]}")
            values[key] = value

    deflection_limit = config.get("deflection_limit", 300)
    if deflection_limit is not None:
        deflection_limit = float(deflection_limit)
        if deflection_limit <= 0:
            raise ValueError(f"Setting 'deflection_limit' must be positive, got {deflection_limit}")

    return CalculatorSettings(
        grade=grade,
        deflection_limit=deflection_limit,
        catalog_path=config.get("catalog_path"),
        rates=RateTable.from_dict(config.get("rates")),
        **values,
    )
