"""SAN (Standard Algebraic Notation) conversion and parsing."""

from __future__ import annotations

import re
from collections.abc import Iterable

from gambit.core.enums import CastleSide, GameResult, PieceType
from gambit.core.notation.models import MoveHint, ParsedMove
from gambit.core.types import FILES, RANKS, Square, parse_square, square_name

_RESULTS: dict[str, GameResult] = {
    "1-0": GameResult.WHITE_WINS,
    "0-1": GameResult.BLACK_WINS,
    "1/2-1/2": GameResult.DRAW,
    "½-½": GameResult.DRAW,
    "*": GameResult.IN_PROGRESS,
}
_CASTLES: dict[str, CastleSide] = {
    "O-O": CastleSide.KING,
    "0-0": CastleSide.KING,
    "O-O-O": CastleSide.QUEEN,
    "0-0-0": CastleSide.QUEEN,
}

_PIECE_MOVE_RE = re.compile(r"^([BKNQR])([a-h])?([1-8])?(x)?([a-h][1-8])$")
_PAWN_MOVE_RE = re.compile(r"^([a-h])?([1-8])?(x)?([a-h][1-8])(?:=?([BNQR]))?$")


class SanError(ValueError):
    """Raised for a token that is not valid SAN."""


def parse_hint(text: str) -> MoveHint:
    """Origin hint: a square, a bare file letter or a bare rank digit."""
    if len(text) == 1:
        if text.isdigit():
            return MoveHint(row=RANKS.index(text))
        return MoveHint(col=FILES.index(text))
    row, col = parse_square(text)
    return MoveHint(row=row, col=col)


def _hint(file_part: str | None, rank_part: str | None) -> MoveHint:
    return MoveHint(
        row=RANKS.index(rank_part) if rank_part else None,
        col=FILES.index(file_part) if file_part else None,
    )


def parse_san(token: str) -> ParsedMove:
    """Parse one SAN token (move, castle or result marker)."""
    if token in _RESULTS:
        return ParsedMove(token=token, result=_RESULTS[token])

    clean = token.rstrip("!?")
    is_mate = clean.endswith("#")
    if is_mate:
        clean = clean[:-1]
    is_check = clean.endswith("+")
    if is_check:
        clean = clean[:-1]
    is_check = is_check or is_mate

    if clean in _CASTLES:
        return ParsedMove(
            token=token,
            piece_type=PieceType.KING,
            castle=_CASTLES[clean],
            is_check=is_check,
            is_mate=is_mate,
        )

    if clean[:1] in ("B", "K", "N", "Q", "R"):
        match = _PIECE_MOVE_RE.match(clean)
        if match is None:
            raise SanError(f"Invalid SAN piece move: {token!r}")
        letter, from_file, from_rank, capture, dest = match.groups()
        return ParsedMove(
            token=token,
            piece_type=PieceType.from_letter(letter),
            origin=_hint(from_file, from_rank),
            destination=parse_square(dest),
            is_capture=capture is not None,
            is_check=is_check,
            is_mate=is_mate,
        )

    match = _PAWN_MOVE_RE.match(clean)
    if match is None:
        raise SanError(f"Invalid SAN pawn move: {token!r}")
    from_file, from_rank, capture, dest, promo = match.groups()
    return ParsedMove(
        token=token,
        piece_type=PieceType.PAWN,
        origin=_hint(from_file, from_rank),
        destination=parse_square(dest),
        is_capture=capture is not None,
        is_check=is_check,
        is_mate=is_mate,
        promotion=PieceType.from_letter(promo) if promo else None,
    )


def format_san(
    piece_type: PieceType,
    origin: Square,
    destination: Square,
    *,
    capture: bool = False,
    promotion: PieceType | None = None,
    castle: CastleSide | None = None,
    rivals: Iterable[Square] = (),
    check: bool = False,
    mate: bool = False,
) -> str:
    """Render a move as SAN.

    *rivals* are the origins of other same-type pieces that could also reach
    *destination*; they decide how much of the origin square is spelled out.
    """
    if castle is not None:
        san = castle.san
    elif piece_type == PieceType.PAWN:
        san = FILES[origin[1]] + "x" if capture else ""
        san += square_name(destination)
        if promotion is not None:
            san += "=" + promotion.san_letter
    else:
        san = piece_type.san_letter
        others = list(rivals)
        if others:
            same_file = any(sq[1] == origin[1] for sq in others)
            same_rank = any(sq[0] == origin[0] for sq in others)
            if not same_file:
                san += FILES[origin[1]]
            elif not same_rank:
                san += RANKS[origin[0]]
            else:
                san += square_name(origin)
        if capture:
            san += "x"
        san += square_name(destination)

    if mate:
        san += "#"
    elif check:
        san += "+"
    return san
