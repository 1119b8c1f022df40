"""Pseudo-legal destination generation per piece, with shadow filtering."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, NamedTuple

from gambit.core.enums import CastleSide, CastlingRights, Color, Direction, PieceType
from gambit.core.piece import make_code
from gambit.core.types import BOARD_SIZE, Square, in_bounds

if TYPE_CHECKING:
    from gambit.core.board import Board


class Destination(NamedTuple):
    """A reachable square; ``capture`` marks an enemy piece on it."""

    square: Square
    capture: bool = False


class SquareStatus(IntEnum):
    """What a moving piece of a given colour finds on a square."""

    OUT_OF_BOARD = 0
    POSSIBLE = 1
    OURS = 2
    CAPTURE = 3
    ENEMY_KING = 4


# King home square column and the castling geometry on its row.
_KING_COL = 4
_CASTLE_LANES: dict[CastleSide, tuple[int, int, tuple[int, ...]]] = {
    # side: (king destination col, rook corner col, cols that must be empty)
    CastleSide.KING: (6, 7, (5, 6)),
    CastleSide.QUEEN: (2, 0, (1, 2, 3)),
}


def home_row(color: Color) -> int:
    return BOARD_SIZE - 1 if color == Color.WHITE else 0


def en_passant_row(color: Color) -> int:
    """Row of an en-passant target that *color* may capture onto."""
    return 2 if color == Color.WHITE else 5


def castle_squares(color: Color, side: CastleSide) -> tuple[Square, Square, Square, Square]:
    """(king from, king to, rook from, rook to) for *color* castling on *side*."""
    row = home_row(color)
    king_to, rook_col, _ = _CASTLE_LANES[side]
    rook_to = 5 if side == CastleSide.KING else 3
    return (row, _KING_COL), (row, king_to), (row, rook_col), (row, rook_to)


class MoveGenerator:
    """Destination squares for the piece standing on a square.

    Generation is pseudo-legal: it never asks whether the move exposes the
    mover's own king. That question belongs to
    :class:`~gambit.core.rules.CheckDetector`.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def destinations(self, sq: Square) -> list[Destination]:
        """Every pseudo-legal destination of the piece on *sq*."""
        piece = self._board.piece_at(sq)
        if piece is None:
            return []
        piece_type = piece.piece_type
        color = piece.color

        if piece_type == PieceType.PAWN:
            return self._gen_pawn(sq, color)

        rule = piece_type.rule
        assert rule is not None
        if rule.slides:
            return self._gen_sliding(sq, color, rule.directions)

        moves = self._gen_steps(sq, color, rule.directions)
        if piece_type == PieceType.KING:
            moves.extend(self._gen_castling(sq, color))
        return moves

    def all_destinations(self, color: Color) -> dict[Square, list[Destination]]:
        """Destinations of every *color* piece, keyed by origin square."""
        return {sq: self.destinations(sq) for sq in self._board.pieces(color)}

    def can_reach(self, origin: Square, target: Square) -> bool:
        return any(dest.square == target for dest in self.destinations(origin))

    def status(self, sq: Square, color: Color) -> SquareStatus:
        """Classify *sq* for a piece of *color* moving onto it."""
        row, col = sq
        if not in_bounds(row, col):
            return SquareStatus.OUT_OF_BOARD
        piece = self._board.piece_at(sq)
        if piece is None:
            return SquareStatus.POSSIBLE
        if piece.color == color:
            return SquareStatus.OURS
        if piece.piece_type == PieceType.KING:
            return SquareStatus.ENEMY_KING
        return SquareStatus.CAPTURE

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color) -> list[Destination]:
        row, col = sq
        step = color.forward
        start_row = 6 if color == Color.WHITE else 1
        moves: list[Destination] = []

        one_step = (row + step, col)
        if self.status(one_step, color) == SquareStatus.POSSIBLE:
            moves.append(Destination(one_step))
            two_step = (row + 2 * step, col)
            if row == start_row and self.status(two_step, color) == SquareStatus.POSSIBLE:
                moves.append(Destination(two_step))

        for dc in (1, -1):
            target = (row + step, col + dc)
            if self.status(target, color) == SquareStatus.CAPTURE:
                moves.append(Destination(target, capture=True))

        ep = self._board.en_passant
        if (
            ep is not None
            and ep[0] == en_passant_row(color)
            and ep[0] == row + step
            and abs(ep[1] - col) == 1
        ):
            moves.append(Destination(ep, capture=True))
        return moves

    def _gen_steps(
        self, sq: Square, color: Color, offsets: tuple[Direction, ...]
    ) -> list[Destination]:
        row, col = sq
        moves: list[Destination] = []
        for dr, dc in offsets:
            target = (row + dr, col + dc)
            status = self.status(target, color)
            if status == SquareStatus.POSSIBLE:
                moves.append(Destination(target))
            elif status == SquareStatus.CAPTURE:
                moves.append(Destination(target, capture=True))
        return moves

    def _gen_sliding(
        self, sq: Square, color: Color, directions: tuple[Direction, ...]
    ) -> list[Destination]:
        """Ray squares filtered by the two-pass shadow algorithm.

        Pass 1 finds, per direction, the distance of the nearest obstruction.
        Pass 2 keeps squares at or before it; the boundary square survives
        only as a capture of an enemy piece.
        """
        row, col = sq
        candidates: list[tuple[Direction, int, Square]] = []
        for dr, dc in directions:
            for dist in range(1, BOARD_SIZE):
                target = (row + dr * dist, col + dc * dist)
                if not in_bounds(*target):
                    break
                candidates.append(((dr, dc), dist, target))

        nearest: dict[Direction, int] = {}
        for direction, dist, target in candidates:
            if self.status(target, color) != SquareStatus.POSSIBLE:
                nearest[direction] = min(dist, nearest.get(direction, BOARD_SIZE))

        moves: list[Destination] = []
        for direction, dist, target in candidates:
            if dist > nearest.get(direction, BOARD_SIZE):
                continue  # shadowed
            status = self.status(target, color)
            if status == SquareStatus.POSSIBLE:
                moves.append(Destination(target))
            elif status == SquareStatus.CAPTURE:
                moves.append(Destination(target, capture=True))
        return moves

    def _gen_castling(self, king_sq: Square, color: Color) -> list[Destination]:
        board = self._board
        if king_sq != (home_row(color), _KING_COL):
            return []

        rook_code = make_code(color, PieceType.ROOK)
        moves: list[Destination] = []
        for side, (king_to, rook_col, empty_cols) in _CASTLE_LANES.items():
            if not board.castling & CastlingRights.for_side(color, side):
                continue
            row = king_sq[0]
            if any(not board.is_empty((row, c)) for c in empty_cols):
                continue
            if board.get((row, rook_col)) != rook_code:
                continue
            moves.append(Destination((row, king_to)))
        return moves
