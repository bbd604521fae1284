"""Configuration for routegen searches and logging."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional, TextIO, Union

import yaml


@dataclass
class SearchConfig:
    """Tunables shared by every search the engine runs."""

    # Predecessor states inspected by the cycle check of the arena searches
    lookback: int = 100

    # Hard cap on stored search states; partial results once reached
    max_states: Optional[int] = 2_000_000

    # Tolerance used by the CLI when none is given
    default_tolerance_m: float = 200.0

    # Wall-clock budget per search in seconds, checked between frontier pops
    time_budget_s: Optional[float] = None

    def __post_init__(self) -> None:
        if self.lookback < 1:
            raise ValueError(f"lookback must be >= 1, got {self.lookback}")
        if self.max_states is not None and self.max_states < 1:
            raise ValueError(f"max_states must be >= 1, got {self.max_states}")
        if self.default_tolerance_m < 0:
            raise ValueError(
                f"default_tolerance_m must be >= 0, got {self.default_tolerance_m}"
            )
        if self.time_budget_s is not None and self.time_budget_s <= 0:
            raise ValueError(f"time_budget_s must be > 0, got {self.time_budget_s}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SearchConfig:
        """Create a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            raise ValueError(f"Unknown search config keys: {', '.join(unknown)}")
        return cls(**dict(data))


@dataclass
class LoggingConfig:
    """Settings for the handler on the package logger."""

    # Logger every routegen module logs under
    logger_name: str = "routegen"

    level: str = "INFO"

    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # "stdout" keeps logs next to CLI output; "stderr" keeps stdout pure JSON
    stream: str = "stdout"

    def __post_init__(self) -> None:
        self.level = str(self.level).upper()
        if not isinstance(logging.getLevelName(self.level), int):
            raise ValueError(f"Unknown log level '{self.level}'")
        if self.stream not in ("stdout", "stderr"):
            raise ValueError(f"stream must be 'stdout' or 'stderr', got '{self.stream}'")

    @property
    def level_value(self) -> int:
        return logging.getLevelName(self.level)

    def target_stream(self) -> TextIO:
        return sys.stderr if self.stream == "stderr" else sys.stdout

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LoggingConfig:
        """Create a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            raise ValueError(f"Unknown logging config keys: {', '.join(unknown)}")
        return cls(**dict(data))


def _read_yaml(path: Union[str, Path]) -> dict:
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def load_config(path: Union[str, Path]) -> SearchConfig:
    """Read a :class:`SearchConfig` from a YAML file.

    The file may hold the settings at top level or under a ``search`` key.
    A ``logging`` section is left to :func:`load_logging_config`. An empty
    file yields the defaults.
    """
    data = _read_yaml(path)
    if "search" in data:
        data = data["search"] or {}
    else:
        data = {key: value for key, value in data.items() if key != "logging"}
    return SearchConfig.from_dict(data)


def load_logging_config(path: Union[str, Path]) -> LoggingConfig:
    """Read the ``logging`` section of a YAML config file; defaults if absent."""
    return LoggingConfig.from_dict(_read_yaml(path).get("logging") or {})


# Global configuration instances
SEARCH_CONFIG = SearchConfig()
LOGGING_CONFIG = LoggingConfig()
