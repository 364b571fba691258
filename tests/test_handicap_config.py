"""Tests for TOML-based handicap range config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from domain.handicap.config import (
    DEFAULT_CONFIG_DIR,
    load_handicap_configs,
    select_handicap_config,
)
from domain.handicap.range import DEFAULT_HANDICAP_RANGE, validate_range_parameters


def test_load_handicap_configs_from_directory(tmp_path: Path) -> None:
    config_path = tmp_path / "narrow.toml"
    config_path.write_text(
        """
[system]
name = "narrow"
description = "A test range"

[handicap]
max_handicap = 5.5
step = 1.0
""".strip()
    )

    configs = load_handicap_configs(tmp_path)
    assert len(configs) == 1

    config = configs[0]
    assert config.name == "narrow"
    assert config.description == "A test range"
    assert config.file_path == config_path
    assert config.parameters.max_handicap == pytest.approx(5.5)
    assert config.parameters.step == pytest.approx(1.0)
    assert config.as_config_json() == {"max_handicap": 5.5, "step": 1.0}
    assert config.handicap_range().values[0] == pytest.approx(-5.5)
    assert len(config.handicap_range()) == 12


def test_missing_handicap_section_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / "default.toml").write_text('[system]\nname = "plain"\n')

    config = load_handicap_configs(tmp_path)[0]
    assert config.description is None
    assert config.handicap_range() is DEFAULT_HANDICAP_RANGE


def test_duplicate_names_raise_error(tmp_path: Path) -> None:
    template = '[system]\nname = "dup"\n\n[handicap]\nmax_handicap = 16.5\nstep = 2.0\n'
    (tmp_path / "a.toml").write_text(template)
    (tmp_path / "b.toml").write_text(template)

    with pytest.raises(ValueError, match="Duplicate handicap config names"):
        load_handicap_configs(tmp_path)


def test_missing_name_raises_error(tmp_path: Path) -> None:
    (tmp_path / "a.toml").write_text("[handicap]\nmax_handicap = 16.5\n")

    with pytest.raises(ValueError, match=r"\[system\].name is required"):
        load_handicap_configs(tmp_path)


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ("max_handicap = 16.0", "must not be a whole number"),
        ("max_handicap = -1.5", "max_handicap must be > 0"),
        ("step = 0.0", "step must be > 0"),
        ("step = 1.5", "step must be a whole number"),
    ],
)
def test_invalid_parameters_raise_error(tmp_path: Path, body: str, message: str) -> None:
    (tmp_path / "a.toml").write_text(f'[system]\nname = "bad"\n\n[handicap]\n{body}\n')

    with pytest.raises(ValueError, match=message):
        load_handicap_configs(tmp_path)


def test_invalid_parameters_share_range_messages(tmp_path: Path) -> None:
    file_path = tmp_path / "a.toml"
    file_path.write_text('[system]\nname = "bad"\n\n[handicap]\nstep = 1.5\n')

    with pytest.raises(ValueError) as config_error:
        load_handicap_configs(tmp_path)
    with pytest.raises(ValueError) as range_error:
        validate_range_parameters(16.5, 1.5)

    assert str(config_error.value) == f"{file_path}: [handicap].{range_error.value}"


def test_missing_directory_raises_error(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_handicap_configs(tmp_path / "missing")


def test_empty_directory_raises_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="No .toml config files"):
        load_handicap_configs(tmp_path)


def test_file_path_is_not_a_directory(tmp_path: Path) -> None:
    file_path = tmp_path / "file.toml"
    file_path.write_text('[system]\nname = "x"\n')

    with pytest.raises(NotADirectoryError):
        load_handicap_configs(file_path)


def test_repository_configs_load() -> None:
    configs = load_handicap_configs(DEFAULT_CONFIG_DIR)

    assert select_handicap_config(configs).handicap_range() is DEFAULT_HANDICAP_RANGE
    assert len(select_handicap_config(configs, "wide").handicap_range()) == 14
    with pytest.raises(KeyError, match="Available: default, wide"):
        select_handicap_config(configs, "missing")
