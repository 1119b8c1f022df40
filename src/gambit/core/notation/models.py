"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass, field

from gambit.core.enums import CastleSide, GameResult, PieceType
from gambit.core.types import Square


@dataclass(frozen=True, slots=True)
class MoveHint:
    """Partial origin square used by SAN to disambiguate (rank and/or file)."""

    row: int | None = None
    col: int | None = None

    def matches(self, sq: Square) -> bool:
        row, col = sq
        if self.row is not None and row != self.row:
            return False
        if self.col is not None and col != self.col:
            return False
        return True

    def __bool__(self) -> bool:
        return self.row is not None or self.col is not None


@dataclass(frozen=True, slots=True)
class ParsedMove:
    """Structured form of a single SAN token."""

    token: str
    piece_type: PieceType = PieceType.PAWN
    origin: MoveHint = field(default_factory=MoveHint)
    destination: Square | None = None
    is_capture: bool = False
    is_check: bool = False
    is_mate: bool = False
    promotion: PieceType | None = None
    castle: CastleSide | None = None
    result: GameResult | None = None

    @property
    def is_terminal(self) -> bool:
        """Result markers end a transcript and carry no board change."""
        return self.result is not None


@dataclass(slots=True)
class Transcript:
    """A parsed game transcript: tag pairs plus SAN tokens in lock-step."""

    headers: dict[str, str] = field(default_factory=dict)
    sans: list[str] = field(default_factory=list)
    moves: list[ParsedMove] = field(default_factory=list)

    @property
    def result(self) -> GameResult | None:
        for move in reversed(self.moves):
            if move.result is not None:
                return move.result
        return None

    def __len__(self) -> int:
        return len(self.moves)
