"""FEN parsing and serialization."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import CastlingRights, Color
from gambit.core.piece import EMPTY, PieceRegistry
from gambit.core.types import BOARD_SIZE, Square, parse_square, square_name

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
STARTING_FEN = f"{STARTING_PLACEMENT} w KQkq - 0 1"

_CASTLING_LETTERS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


class FenError(ValueError):
    """Raised for a malformed position string."""


@dataclass(slots=True)
class FenFields:
    """Decoded position string, before it is loaded into a board."""

    grid: list[list[int]]
    active_color: Color
    castling: CastlingRights
    en_passant: Square | None


def parse_placement(placement: str, registry: PieceRegistry) -> list[list[int]]:
    """Parse the piece-placement field into an 8×8 grid of piece codes."""
    rows = placement.split("/")
    if len(rows) != BOARD_SIZE:
        raise FenError(f"Invalid FEN board (must contain 8 ranks): {placement!r}")

    grid: list[list[int]] = []
    for row_text in rows:
        row: list[int] = []
        for ch in row_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= BOARD_SIZE):
                    raise FenError(f"Invalid FEN digit {ch!r}: {placement!r}")
                row.extend([EMPTY] * step)
            else:
                try:
                    row.append(registry.from_fen_code(ch))
                except ValueError as exc:
                    raise FenError(f"{exc}: {placement!r}") from exc
            if len(row) > BOARD_SIZE:
                raise FenError(f"Invalid FEN rank width: {placement!r}")
        if len(row) != BOARD_SIZE:
            raise FenError(f"Invalid FEN rank width: {placement!r}")
        grid.append(row)
    return grid


def serialize_placement(grid: list[list[int]], registry: PieceRegistry) -> str:
    """Serialise an 8×8 grid to the piece-placement field."""
    rows: list[str] = []
    for cells in grid:
        empty = 0
        row = ""
        for code in cells:
            if code == EMPTY:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += registry.decode(code).fen_code
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def castling_to_str(castling: CastlingRights) -> str:
    text = "".join(ch for ch, right in _CASTLING_LETTERS if castling & right)
    return text or "-"


def castling_from_str(text: str) -> CastlingRights:
    castling = CastlingRights.NONE
    if text == "-":
        return castling
    rights = dict(_CASTLING_LETTERS)
    seen: set[str] = set()
    for ch in text:
        right = rights.get(ch)
        if right is None or ch in seen:
            raise FenError(f"Invalid FEN castling field: {text!r}")
        seen.add(ch)
        castling |= right
    return castling


def parse_fen(fen: str, registry: PieceRegistry) -> FenFields:
    """Parse a (possibly abbreviated) FEN string.

    Only the placement field is mandatory; missing fields default to white to
    move, full castling rights and no en-passant target. The two counters are
    accepted but not tracked.
    """
    parts = fen.split()
    if not (1 <= len(parts) <= 6):
        raise FenError(f"Invalid FEN (need 1-6 fields): {fen!r}")

    grid = parse_placement(parts[0], registry)

    side_part = parts[1] if len(parts) > 1 else "w"
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise FenError(f"Invalid FEN side-to-move field: {side_part!r}")

    castling = castling_from_str(parts[2] if len(parts) > 2 else "KQkq")

    ep: Square | None = None
    ep_part = parts[3] if len(parts) > 3 else "-"
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError as exc:
            raise FenError(f"Invalid FEN en-passant square: {ep_part!r}") from exc
        if ep[0] not in (2, 5):
            raise FenError(f"Invalid FEN en-passant square: {ep_part!r}")

    for counter in parts[4:]:
        if not counter.isdigit():
            raise FenError(f"Invalid FEN move counter: {counter!r}")

    return FenFields(grid=grid, active_color=side, castling=castling, en_passant=ep)


def build_fen(
    grid: list[list[int]],
    registry: PieceRegistry,
    active_color: Color,
    castling: CastlingRights,
    en_passant: Square | None,
) -> str:
    """Full six-field FEN; the counters are always ``0 1``."""
    ep_str = square_name(en_passant) if en_passant is not None else "-"
    return (
        f"{serialize_placement(grid, registry)} {active_color.fen_code} "
        f"{castling_to_str(castling)} {ep_str} 0 1"
    )
