"""Tests for `routegen.config` focusing on behavior and correctness."""

import logging
from pathlib import Path

import pytest

from routegen.config import (
    LOGGING_CONFIG,
    SEARCH_CONFIG,
    LoggingConfig,
    SearchConfig,
    load_config,
    load_logging_config,
)


def test_defaults() -> None:
    config = SearchConfig()
    assert config.lookback == 100
    assert config.max_states == 2_000_000
    assert config.default_tolerance_m == 200.0
    assert config.time_budget_s is None
    assert SEARCH_CONFIG == config


@pytest.mark.parametrize(
    "kwargs",
    [
        {"lookback": 0},
        {"max_states": 0},
        {"default_tolerance_m": -1.0},
        {"time_budget_s": 0.0},
    ],
)
def test_invalid_values_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        SearchConfig(**kwargs)


def test_unbounded_states_allowed() -> None:
    assert SearchConfig(max_states=None).max_states is None


def test_from_dict_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError, match="lookbak"):
        SearchConfig.from_dict({"lookbak": 5})


def test_load_config_top_level(tmp_path: Path) -> None:
    path = tmp_path / "search.yaml"
    path.write_text("lookback: 20\ntime_budget_s: 1.5\n")
    config = load_config(path)
    assert config.lookback == 20
    assert config.time_budget_s == 1.5
    assert config.max_states == 2_000_000


def test_load_config_search_section(tmp_path: Path) -> None:
    path = tmp_path / "search.yaml"
    path.write_text("search:\n  max_states: 500\n  default_tolerance_m: 50\n")
    config = load_config(path)
    assert config.max_states == 500
    assert config.default_tolerance_m == 50


def test_load_config_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == SearchConfig()


def test_load_config_not_a_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError, match="mapping"):
        load_config(path)


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_load_config_skips_logging_section(tmp_path: Path) -> None:
    path = tmp_path / "search.yaml"
    path.write_text("lookback: 7\nlogging:\n  level: DEBUG\n")
    assert load_config(path).lookback == 7


def test_logging_defaults() -> None:
    config = LoggingConfig()
    assert config.logger_name == "routegen"
    assert config.level_value == logging.INFO
    assert config.stream == "stdout"
    assert LOGGING_CONFIG == config


def test_logging_level_names_normalised() -> None:
    config = LoggingConfig(level="debug")
    assert config.level == "DEBUG"
    assert config.level_value == logging.DEBUG


@pytest.mark.parametrize("kwargs", [{"level": "LOUD"}, {"stream": "file"}])
def test_logging_invalid_values(kwargs) -> None:
    with pytest.raises(ValueError):
        LoggingConfig(**kwargs)


def test_load_logging_config(tmp_path: Path) -> None:
    path = tmp_path / "search.yaml"
    path.write_text("search:\n  lookback: 5\nlogging:\n  level: WARNING\n  stream: stderr\n")
    config = load_logging_config(path)
    assert config.level_value == logging.WARNING
    assert config.stream == "stderr"


def test_load_logging_config_absent_section(tmp_path: Path) -> None:
    path = tmp_path / "search.yaml"
    path.write_text("lookback: 5\n")
    assert load_logging_config(path) == LoggingConfig()


def test_load_logging_config_unknown_key(tmp_path: Path) -> None:
    path = tmp_path / "search.yaml"
    path.write_text("logging:\n  colour: true\n")
    with pytest.raises(ValueError, match="colour"):
        load_logging_config(path)
