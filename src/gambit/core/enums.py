"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag, StrEnum, auto

Direction = tuple[int, int]  # (row step, col step)

ORTHOGONAL: tuple[Direction, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL: tuple[Direction, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
KNIGHT_JUMPS: tuple[Direction, ...] = (
    (2, 1),
    (2, -1),
    (1, 2),
    (-1, 2),
    (-1, -2),
    (1, -2),
    (-2, -1),
    (-2, 1),
)


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def fen_code(self) -> str:
        return "w" if self == Color.WHITE else "b"

    @property
    def forward(self) -> int:
        """Row step of a pawn push (row 0 is rank 8)."""
        return -1 if self == Color.WHITE else 1

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class MoveRule:
    """How a non-pawn piece moves: a set of steps, repeated if it slides."""

    directions: tuple[Direction, ...]
    slides: bool


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def letter(self) -> str:
        return _LETTERS[self]

    @property
    def san_letter(self) -> str:
        """Uppercase SAN letter; pawns have none."""
        return "" if self == PieceType.PAWN else self.letter.upper()

    @property
    def piece_name(self) -> str:
        return self.name.lower()

    @property
    def rule(self) -> MoveRule | None:
        """Movement table, ``None`` for pawns."""
        return _RULES[self]

    @property
    def is_slider(self) -> bool:
        rule = self.rule
        return rule is not None and rule.slides

    @classmethod
    def from_letter(cls, letter: str) -> PieceType:
        """Parse a case-insensitive piece letter, e.g. 'N' → KNIGHT."""
        try:
            return _FROM_LETTER[letter.lower()]
        except KeyError:
            raise ValueError(f"Invalid piece letter: {letter!r}") from None


_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_FROM_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}

# A match over every member: adding a PieceType without a rule fails at import.
_RULES: dict[PieceType, MoveRule | None] = {
    PieceType.PAWN: None,
    PieceType.KNIGHT: MoveRule(KNIGHT_JUMPS, slides=False),
    PieceType.BISHOP: MoveRule(DIAGONAL, slides=True),
    PieceType.ROOK: MoveRule(ORTHOGONAL, slides=True),
    PieceType.QUEEN: MoveRule(ORTHOGONAL + DIAGONAL, slides=True),
    PieceType.KING: MoveRule(ORTHOGONAL + DIAGONAL, slides=False),
}
assert set(_RULES) == set(PieceType)


class CastleSide(StrEnum):
    """Which rook the king castles with."""

    KING = "king"
    QUEEN = "queen"

    @property
    def san(self) -> str:
        return "O-O" if self == CastleSide.KING else "O-O-O"


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def for_side(cls, color: Color, side: CastleSide) -> CastlingRights:
        if color == Color.WHITE:
            return cls.WHITE_KINGSIDE if side == CastleSide.KING else cls.WHITE_QUEENSIDE
        return cls.BLACK_KINGSIDE if side == CastleSide.KING else cls.BLACK_QUEENSIDE

    @classmethod
    def for_color(cls, color: Color) -> CastlingRights:
        return cls.WHITE_BOTH if color == Color.WHITE else cls.BLACK_BOTH


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3

    @property
    def token(self) -> str:
        return _RESULT_TOKENS[self]


_RESULT_TOKENS: dict[GameResult, str] = {
    GameResult.IN_PROGRESS: "*",
    GameResult.WHITE_WINS: "1-0",
    GameResult.BLACK_WINS: "0-1",
    GameResult.DRAW: "1/2-1/2",
}
