"""Load handicap range definitions from TOML files."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.config_base import BaseAnalysisConfig, load_analysis_configs, parse_config_metadata
from domain.handicap.range import (
    DEFAULT_MAX_HANDICAP,
    DEFAULT_STEP,
    HandicapRange,
    get_handicap_range,
    validate_range_parameters,
)

ROOT_DIR = Path(__file__).resolve().parents[3]
DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "handicap"
DEFAULT_CONFIG_NAME = "default"


@dataclass(frozen=True)
class HandicapParameters:
    max_handicap: float = DEFAULT_MAX_HANDICAP
    step: float = DEFAULT_STEP


@dataclass(frozen=True)
class HandicapSystemConfig(BaseAnalysisConfig):
    """One named handicap range configuration."""

    parameters: HandicapParameters

    def handicap_range(self) -> HandicapRange:
        return get_handicap_range(self.parameters.max_handicap, self.parameters.step)

    def as_config_json(self) -> dict[str, Any]:
        return {
            "max_handicap": self.parameters.max_handicap,
            "step": self.parameters.step,
        }


def load_handicap_configs(config_dir: Path = DEFAULT_CONFIG_DIR) -> list[HandicapSystemConfig]:
    """Load and validate all handicap TOML config files in a directory."""
    return load_analysis_configs(
        config_dir,
        _parse_handicap_config,
        duplicate_name_label="handicap",
    )


def select_handicap_config(
    configs: Sequence[HandicapSystemConfig],
    name: str = DEFAULT_CONFIG_NAME,
) -> HandicapSystemConfig:
    for config in configs:
        if config.name == name:
            return config
    available = ", ".join(sorted(config.name for config in configs))
    raise KeyError(f"No handicap config named {name!r}. Available: {available}")


def _parse_handicap_config(raw: dict[str, Any], file_path: Path) -> HandicapSystemConfig:
    name, description = parse_config_metadata(raw, file_path)
    handicap_raw = raw.get("handicap", {})

    parameters = HandicapParameters(
        max_handicap=float(handicap_raw.get("max_handicap", DEFAULT_MAX_HANDICAP)),
        step=float(handicap_raw.get("step", DEFAULT_STEP)),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    return HandicapSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
    )


def _validate_parameters(*, file_path: Path, parameters: HandicapParameters) -> None:
    try:
        validate_range_parameters(parameters.max_handicap, parameters.step)
    except ValueError as exc:
        raise ValueError(f"{file_path}: [handicap].{exc}") from exc


__all__ = [
    "DEFAULT_CONFIG_DIR",
    "DEFAULT_CONFIG_NAME",
    "HandicapParameters",
    "HandicapSystemConfig",
    "load_handicap_configs",
    "select_handicap_config",
]
