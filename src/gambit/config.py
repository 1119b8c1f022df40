"""Runtime settings read from a TOML file."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path

from gambit.core.notation.fen import STARTING_FEN

_LOGGER = logging.getLogger(__name__)

_SECTION = "gambit"
_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass
class Config:
    start_fen: str = STARTING_FEN
    openings_path: str | None = None  # None → bundled dataset
    log_level: str = "WARNING"
    search_limit: int = 10

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level!r}")
        if self.search_limit < 1:
            raise ValueError(f"search_limit must be positive, got {self.search_limit}")

    @staticmethod
    def load_from_toml(path: str | Path = "gambit.toml") -> Config:
        """Read the ``[gambit]`` table of *path*; defaults when the file is absent."""
        if not os.path.exists(path):
            return Config()
        with open(path, "rb") as f:
            try:
                raw = tomllib.load(f)
            except tomllib.TOMLDecodeError as exc:
                raise ValueError(f"Malformed config {path}: {exc}") from exc

        section = raw.get(_SECTION, {})
        if not isinstance(section, dict):
            raise ValueError(f"[{_SECTION}] must be a table")

        expected = {f.name: f for f in fields(Config)}
        values: dict[str, object] = {}
        for key, value in section.items():
            if key not in expected:
                _LOGGER.debug("Ignoring unknown config key %r", key)
                continue
            _check_type(key, value)
            values[key] = value
        return Config(**values)  # type: ignore[arg-type]


def _check_type(key: str, value: object) -> None:
    if key == "search_limit":
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, str)
    if not ok:
        raise ValueError(f"Config key {key!r} has wrong type: {type(value).__name__}")
