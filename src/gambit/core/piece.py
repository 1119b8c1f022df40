"""Piece codes and the immutable piece descriptors decoded from them.

A piece code is a small integer: the :class:`PieceType` value in the low
bits and :data:`BLACK_BIT` for black pieces. ``0`` is an empty square.
"""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import Color, PieceType

EMPTY = 0
BLACK_BIT = 0b1000
_TYPE_MASK = 0b0111

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}


def make_code(color: Color, piece_type: PieceType) -> int:
    """Piece code for *color*'s *piece_type*."""
    return int(piece_type) | (BLACK_BIT if color == Color.BLACK else 0)


@dataclass(frozen=True, slots=True)
class PieceInfo:
    """Immutable description of a piece code."""

    code: int
    is_empty: bool
    is_black: bool
    piece_type: PieceType | None
    letter: str
    symbol: str
    symbol_white: str
    symbol_black: str
    fen_code: str
    name: str

    @property
    def color(self) -> Color:
        return Color.BLACK if self.is_black else Color.WHITE

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return self.fen_code


EMPTY_PIECE = PieceInfo(
    code=EMPTY,
    is_empty=True,
    is_black=False,
    piece_type=None,
    letter="",
    symbol="",
    symbol_white="",
    symbol_black="",
    fen_code="",
    name="",
)


def describe(code: int) -> PieceInfo:
    """Decode *code* into a fresh :class:`PieceInfo`."""
    if code == EMPTY:
        return EMPTY_PIECE

    is_black = bool(code & BLACK_BIT)
    try:
        piece_type = PieceType(code & _TYPE_MASK)
    except ValueError:
        raise ValueError(f"Invalid piece code: {code!r}") from None
    color = Color.BLACK if is_black else Color.WHITE
    letter = piece_type.letter
    return PieceInfo(
        code=code,
        is_empty=False,
        is_black=is_black,
        piece_type=piece_type,
        letter=letter,
        symbol=_UNICODE[(color, piece_type)],
        symbol_white=_UNICODE[(Color.WHITE, piece_type)],
        symbol_black=_UNICODE[(Color.BLACK, piece_type)],
        fen_code=letter if is_black else letter.upper(),
        name=piece_type.piece_name,
    )


class PieceRegistry:
    """Memo table of decoded piece codes.

    Owned by whoever composes the engine (usually a :class:`Board`), so
    separate boards never share hidden state.
    """

    __slots__ = ("_by_code", "_by_fen_code")

    def __init__(self) -> None:
        self._by_code: dict[int, PieceInfo] = {}
        self._by_fen_code: dict[str, int] = {}
        for color in Color:
            for piece_type in PieceType:
                letter = piece_type.letter if color == Color.BLACK else piece_type.letter.upper()
                self._by_fen_code[letter] = make_code(color, piece_type)

    def decode(self, code: int) -> PieceInfo:
        info = self._by_code.get(code)
        if info is None:
            info = describe(code)
            self._by_code[code] = info
        return info

    def from_fen_code(self, char: str) -> int:
        """Piece code for a FEN character, e.g. 'N' → white knight."""
        try:
            return self._by_fen_code[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None

    def __len__(self) -> int:
        return len(self._by_code)
