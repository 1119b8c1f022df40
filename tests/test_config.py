"""Tests for TOML configuration."""

from pathlib import Path

import pytest

from gambit.config import Config
from gambit.core.notation import STARTING_FEN


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "gambit.toml"
    path.write_text(text, encoding="utf-8")
    return path


class TestConfig:
    def test_defaults(self) -> None:
        config = Config()
        assert config.start_fen == STARTING_FEN
        assert config.openings_path is None
        assert config.log_level == "WARNING"
        assert config.search_limit == 10

    def test_missing_file(self, tmp_path: Path) -> None:
        assert Config.load_from_toml(tmp_path / "absent.toml") == Config()

    def test_reads_section(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            '[gambit]\nstart_fen = "8/8/8/8/8/8/8/8 w - -"\nlog_level = "debug"\nsearch_limit = 3\n',
        )
        config = Config.load_from_toml(path)
        assert config.start_fen == "8/8/8/8/8/8/8/8 w - -"
        assert config.log_level == "DEBUG"
        assert config.search_limit == 3

    def test_unknown_keys_are_ignored(self, tmp_path: Path) -> None:
        path = _write(tmp_path, '[gambit]\ntheme = "dark"\n\n[other]\nx = 1\n')
        assert Config.load_from_toml(path) == Config()

    @pytest.mark.parametrize(
        "body",
        [
            "search_limit = \"ten\"",
            "search_limit = true",
            "log_level = 10",
            "openings_path = 3",
        ],
    )
    def test_wrong_types(self, tmp_path: Path, body: str) -> None:
        path = _write(tmp_path, f"[gambit]\n{body}\n")
        with pytest.raises(ValueError, match="wrong type"):
            Config.load_from_toml(path)

    def test_invalid_values(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            Config.load_from_toml(_write(tmp_path, '[gambit]\nlog_level = "loud"\n'))
        with pytest.raises(ValueError):
            Config.load_from_toml(_write(tmp_path, "[gambit]\nsearch_limit = 0\n"))

    def test_malformed_toml(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Malformed"):
            Config.load_from_toml(_write(tmp_path, "[gambit\n"))

    def test_section_must_be_table(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="table"):
            Config.load_from_toml(_write(tmp_path, 'gambit = "yes"\n'))
