"""Opening record."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import Color


@dataclass(frozen=True, slots=True)
class Opening:
    """A named opening line with outcome counts from a reference corpus."""

    code: str
    name: str
    transcript: str
    white_wins: int = 0
    draws: int = 0
    black_wins: int = 0

    def __post_init__(self) -> None:
        for label, value in (
            ("white_wins", self.white_wins),
            ("draws", self.draws),
            ("black_wins", self.black_wins),
        ):
            if value < 0:
                raise ValueError(f"{label} must be non-negative, got {value} for {self.name!r}")

    @property
    def games(self) -> int:
        return self.white_wins + self.draws + self.black_wins

    def wins_for(self, color: Color) -> int:
        return self.white_wins if color == Color.WHITE else self.black_wins

    @classmethod
    def from_record(cls, record: dict[str, object]) -> Opening:
        """Build from a dataset row: ``{eco, name, pgn, white?, draws?, black?}``."""
        try:
            return cls(
                code=str(record["eco"]),
                name=str(record["name"]),
                transcript=str(record["pgn"]),
                white_wins=int(record.get("white", 0)),  # type: ignore[call-overload]
                draws=int(record.get("draws", 0)),  # type: ignore[call-overload]
                black_wins=int(record.get("black", 0)),  # type: ignore[call-overload]
            )
        except KeyError as exc:
            raise ValueError(f"Opening record missing field {exc}: {record!r}") from exc
