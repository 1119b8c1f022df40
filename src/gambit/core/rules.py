"""Attack, check, checkmate and pin detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gambit.core.enums import (
    DIAGONAL,
    KNIGHT_JUMPS,
    ORTHOGONAL,
    CastleSide,
    Color,
    Direction,
    PieceType,
)
from gambit.core.move_generator import MoveGenerator, castle_squares
from gambit.core.piece import PieceInfo
from gambit.core.types import BOARD_SIZE, Square, in_bounds

if TYPE_CHECKING:
    from gambit.core.board import Board

_ORTHOGONAL_ATTACKERS = (PieceType.ROOK, PieceType.QUEEN)
_DIAGONAL_ATTACKERS = (PieceType.BISHOP, PieceType.QUEEN)


@dataclass(frozen=True, slots=True)
class Attacker:
    """A piece attacking a square.

    ``direction`` points from the attacked square toward the attacker and is
    set for sliders and adjacent kings; it lets callers walk the ray.
    """

    square: Square
    piece_type: PieceType
    direction: Direction | None = None


@dataclass(frozen=True, slots=True)
class CheckState:
    """Check status of the side to move."""

    is_check: bool
    is_checkmate: bool
    king_square: Square | None


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class CheckDetector:
    """Read-only rule queries over a :class:`Board`. Never raises."""

    __slots__ = ("_board", "_gen")

    def __init__(self, board: Board, generator: MoveGenerator | None = None) -> None:
        self._board = board
        self._gen = generator or MoveGenerator(board)

    # ── Attacks ──────────────────────────────────────────────────────────

    def attackers_of(
        self, sq: Square, by_color: Color, ignore: Square | None = None
    ) -> list[Attacker]:
        """Every *by_color* piece attacking *sq*.

        *ignore* is treated as an empty square, e.g. the king's own square
        when testing where it could step to.
        """
        row, col = sq
        attackers: list[Attacker] = []

        for direction in ORTHOGONAL + DIAGONAL:
            dr, dc = direction
            sliders = _ORTHOGONAL_ATTACKERS if dr == 0 or dc == 0 else _DIAGONAL_ATTACKERS
            for step in range(1, BOARD_SIZE):
                target = (row + dr * step, col + dc * step)
                if not in_bounds(*target):
                    break
                piece = self._piece(target, ignore)
                if piece is None:
                    continue
                if piece.color != by_color:
                    break
                if piece.piece_type in sliders or (
                    step == 1 and piece.piece_type == PieceType.KING
                ):
                    attackers.append(Attacker(target, piece.piece_type, direction))
                break

        pawn_row = row - by_color.forward
        for dc in (1, -1):
            target = (pawn_row, col + dc)
            piece = self._piece(target, ignore) if in_bounds(*target) else None
            if piece is not None and piece.color == by_color and piece.piece_type == PieceType.PAWN:
                attackers.append(Attacker(target, PieceType.PAWN))

        for dr, dc in KNIGHT_JUMPS:
            target = (row + dr, col + dc)
            piece = self._piece(target, ignore) if in_bounds(*target) else None
            if (
                piece is not None
                and piece.color == by_color
                and piece.piece_type == PieceType.KNIGHT
            ):
                attackers.append(Attacker(target, PieceType.KNIGHT))

        return attackers

    def is_square_attacked_by(self, sq: Square, by_color: Color) -> bool:
        return bool(self.attackers_of(sq, by_color))

    def is_undefended(self, sq: Square) -> bool:
        """Whether the piece on *sq* is attacked and has no defender."""
        piece = self._board.piece_at(sq)
        if piece is None:
            return False
        attacked = self.attackers_of(sq, piece.color.opposite)
        return bool(attacked) and not self.attackers_of(sq, piece.color)

    # ── Check / mate ─────────────────────────────────────────────────────

    def check_state(self) -> CheckState:
        color = self._board.active_color
        king_sq = self._board.find_king(color)
        if king_sq is None:
            return CheckState(is_check=False, is_checkmate=False, king_square=None)

        attackers = self.attackers_of(king_sq, color.opposite)
        if not attackers:
            return CheckState(is_check=False, is_checkmate=False, king_square=king_sq)

        is_mate = not self.king_escapes(king_sq) and not self._can_resolve(
            king_sq, color, attackers
        )
        return CheckState(is_check=True, is_checkmate=is_mate, king_square=king_sq)

    def king_escapes(self, king_sq: Square) -> list[Square]:
        """Adjacent squares the king may step to without being attacked."""
        king = self._board.piece_at(king_sq)
        if king is None:
            return []
        rule = PieceType.KING.rule
        assert rule is not None

        escapes: list[Square] = []
        row, col = king_sq
        for dr, dc in rule.directions:
            target = (row + dr, col + dc)
            if not in_bounds(*target):
                continue
            occupant = self._board.piece_at(target)
            if occupant is not None and occupant.color == king.color:
                continue
            if not self.attackers_of(target, king.color.opposite, ignore=king_sq):
                escapes.append(target)
        return escapes

    def _can_resolve(
        self, king_sq: Square, color: Color, attackers: list[Attacker]
    ) -> bool:
        """Whether a non-king piece can capture or block the single checker."""
        if len(attackers) != 1:
            return False  # double check: only the king can answer
        attacker = attackers[0]

        targets: set[Square] = {attacker.square}
        if attacker.direction is not None and attacker.piece_type.is_slider:
            dr, dc = attacker.direction
            cursor = (king_sq[0] + dr, king_sq[1] + dc)
            while cursor != attacker.square:
                targets.add(cursor)
                cursor = (cursor[0] + dr, cursor[1] + dc)

        # A checking pawn that just double-pushed can also be taken en passant.
        ep = self._board.en_passant
        ep_resolves = (
            attacker.piece_type == PieceType.PAWN
            and ep is not None
            and attacker.square == (ep[0] + color.opposite.forward, ep[1])
        )

        for sq in self._board.pieces(color):
            piece = self._board.piece_at(sq)
            if piece is None or piece.piece_type == PieceType.KING:
                continue
            if self.is_pinned_piece(sq):
                continue
            for dest in self._gen.destinations(sq):
                if dest.square in targets:
                    return True
                if ep_resolves and piece.piece_type == PieceType.PAWN and dest.square == ep:
                    return True
        return False

    # ── Pins / castling ──────────────────────────────────────────────────

    def is_pinned_piece(self, sq: Square) -> bool:
        """Whether the piece on *sq* shields its king from an enemy slider."""
        piece = self._board.piece_at(sq)
        if piece is None or piece.piece_type == PieceType.KING:
            return False
        king_sq = self._board.find_king(piece.color)
        if king_sq is None:
            return False

        dr = sq[0] - king_sq[0]
        dc = sq[1] - king_sq[1]
        straight = (dr == 0) != (dc == 0)
        diagonal = dr != 0 and abs(dr) == abs(dc)
        if not (straight or diagonal):
            return False

        step = (_sign(dr), _sign(dc))
        cursor = (king_sq[0] + step[0], king_sq[1] + step[1])
        while cursor != sq:
            if not self._board.is_empty(cursor):
                return False
            cursor = (cursor[0] + step[0], cursor[1] + step[1])

        cursor = (sq[0] + step[0], sq[1] + step[1])
        while in_bounds(*cursor):
            beyond = self._board.piece_at(cursor)
            if beyond is None:
                cursor = (cursor[0] + step[0], cursor[1] + step[1])
                continue
            if beyond.color == piece.color:
                return False
            sliders = _ORTHOGONAL_ATTACKERS if straight else _DIAGONAL_ATTACKERS
            return beyond.piece_type in sliders
        return False

    def can_castle(self, color: Color, side: CastleSide) -> bool:
        """The king is not in check and neither crosses nor lands on an attacked square."""
        king_from, king_to, _, transit = castle_squares(color, side)
        opponent = color.opposite
        return not any(
            self.attackers_of(sq, opponent) for sq in (king_from, transit, king_to)
        )

    # ── Internal ─────────────────────────────────────────────────────────

    def _piece(self, sq: Square, ignore: Square | None) -> PieceInfo | None:
        if sq == ignore:
            return None
        return self._board.piece_at(sq)
