"""The 8×8 board with its position state and move log."""

from __future__ import annotations

import logging
from dataclasses import replace

from gambit.core.enums import CastleSide, CastlingRights, Color, PieceType
from gambit.core.history import EnPassantCapture, MoveEntry, MoveLog, RookMove
from gambit.core.move_generator import (
    Destination,
    MoveGenerator,
    castle_squares,
    en_passant_row,
)
from gambit.core.notation.fen import STARTING_FEN, build_fen, parse_fen
from gambit.core.notation.models import ParsedMove, Transcript
from gambit.core.notation.pgn import parse_transcript, sans_to_transcript
from gambit.core.notation.san import format_san, parse_san
from gambit.core.piece import EMPTY, PieceInfo, PieceRegistry, make_code
from gambit.core.rules import CheckDetector, CheckState
from gambit.core.types import BOARD_SIZE, Square, in_bounds, square_name

_LOGGER = logging.getLogger(__name__)

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    (7, 0): CastlingRights.WHITE_QUEENSIDE,
    (7, 7): CastlingRights.WHITE_KINGSIDE,
    (0, 0): CastlingRights.BLACK_QUEENSIDE,
    (0, 7): CastlingRights.BLACK_KINGSIDE,
}


class IllegalMoveError(ValueError):
    """Raised when a move cannot be applied to the current position."""


class UnresolvedMoveError(IllegalMoveError):
    """Raised when a parsed move matches no piece, or more than one."""


class Board:
    """Mutable chess position plus its navigable move history.

    Squares are ``(row, col)`` tuples with row 0 on rank 8. The board is a
    single-writer object: the move generator, check detector and move log all
    operate on it by reference.
    """

    __slots__ = (
        "grid",
        "active_color",
        "castling",
        "en_passant",
        "registry",
        "log",
        "generator",
        "detector",
    )

    def __init__(self, fen: str | None = None, *, registry: PieceRegistry | None = None) -> None:
        self.registry = registry if registry is not None else PieceRegistry()
        self.grid: list[list[int]] = [[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self.active_color = Color.WHITE
        self.castling = CastlingRights.ALL
        self.en_passant: Square | None = None
        self.log = MoveLog(self)
        self.generator = MoveGenerator(self)
        self.detector = CheckDetector(self, self.generator)
        self.load_fen(fen or STARTING_FEN)

    # ── Loading / serialisation ──────────────────────────────────────────

    def load_fen(self, fen: str) -> None:
        """Replace the position and clear history; raises ``FenError``."""
        fields = parse_fen(fen, self.registry)
        self.grid = fields.grid
        self.active_color = fields.active_color
        self.castling = fields.castling
        self.en_passant = fields.en_passant
        self.log.clear()

    def to_fen(self) -> str:
        return build_fen(
            self.grid, self.registry, self.active_color, self.castling, self.en_passant
        )

    def transcript(self) -> str:
        """Movetext of the moves played up to the history cursor."""
        return sans_to_transcript(self.log.played_sans)

    # ── Element access ───────────────────────────────────────────────────

    def get(self, sq: Square) -> int:
        row, col = self._checked(sq)
        return self.grid[row][col]

    def put(self, sq: Square, code: int) -> None:
        row, col = self._checked(sq)
        self.grid[row][col] = code

    def clear(self, sq: Square) -> None:
        self.put(sq, EMPTY)

    def is_empty(self, sq: Square) -> bool:
        return self.get(sq) == EMPTY

    def piece_at(self, sq: Square) -> PieceInfo | None:
        """Decoded piece on *sq*; ``None`` if empty or off the board."""
        if not in_bounds(*sq):
            return None
        code = self.get(sq)
        if code == EMPTY:
            return None
        return self.registry.decode(code)

    def pieces(self, color: Color, piece_type: PieceType | None = None) -> list[Square]:
        """Squares holding *color*'s pieces (optionally of one type), row-major."""
        squares: list[Square] = []
        for row, cells in enumerate(self.grid):
            for col, code in enumerate(cells):
                if code == EMPTY:
                    continue
                piece = self.registry.decode(code)
                if piece.color != color:
                    continue
                if piece_type is not None and piece.piece_type != piece_type:
                    continue
                squares.append((row, col))
        return squares

    def find_king(self, color: Color) -> Square | None:
        kings = self.pieces(color, PieceType.KING)
        return kings[0] if kings else None

    # ── Rule queries ─────────────────────────────────────────────────────

    def destinations(self, sq: Square) -> list[Destination]:
        """Pseudo-legal destinations straight from the move generator."""
        return self.generator.destinations(sq)

    def legal_destinations(self, sq: Square) -> list[Destination]:
        """Generator destinations minus castles through or out of check."""
        moves = self.generator.destinations(sq)
        piece = self.piece_at(sq)
        if piece is None or piece.piece_type != PieceType.KING:
            return moves
        return [
            dest
            for dest in moves
            if abs(dest.square[1] - sq[1]) != 2
            or self.detector.can_castle(piece.color, self._castle_side(sq, dest.square))
        ]

    def check_state(self) -> CheckState:
        return self.detector.check_state()

    def is_square_attacked_by(self, sq: Square, color: Color) -> bool:
        return self.detector.is_square_attacked_by(sq, color)

    def is_pinned_piece(self, sq: Square) -> bool:
        return self.detector.is_pinned_piece(sq)

    def is_undefended(self, sq: Square) -> bool:
        return self.detector.is_undefended(sq)

    # ── Applying moves ───────────────────────────────────────────────────

    def apply_move(
        self,
        origin: Square,
        destination: Square,
        san: str = "",
        promotion: PieceType | None = None,
    ) -> MoveEntry:
        """Move the piece on *origin* to *destination* and record it.

        Castling (king moving two files) also relocates the rook, and is
        refused if the king is in check or crosses an attacked square. When
        *san* is empty it is generated from the position.
        """
        moved = self.piece_at(origin)
        if moved is None:
            raise IllegalMoveError(f"No piece on {origin!r}")
        if not in_bounds(*destination):
            raise IllegalMoveError(f"Destination off the board: {destination!r}")
        assert moved.piece_type is not None

        captured = self.get(destination)
        rook_move: RookMove | None = None
        ep_capture: EnPassantCapture | None = None
        castle: CastleSide | None = None

        if moved.piece_type == PieceType.KING and abs(destination[1] - origin[1]) == 2:
            castle = self._castle_side(origin, destination)
            if not self.detector.can_castle(moved.color, castle):
                raise IllegalMoveError(
                    f"{moved.color} cannot castle {castle} through or out of check"
                )
            _, _, rook_from, rook_to = castle_squares(moved.color, castle)
            rook_move = RookMove(rook_from, rook_to, self.get(rook_from))

        if (
            moved.piece_type == PieceType.PAWN
            and destination == self.en_passant
            and destination[0] == en_passant_row(moved.color)
            and destination[1] != origin[1]
        ):
            victim = (destination[0] - moved.color.forward, destination[1])
            ep_capture = EnPassantCapture(victim, self.get(victim))

        placed = moved.code
        last_row = 0 if moved.color == Color.WHITE else BOARD_SIZE - 1
        if moved.piece_type == PieceType.PAWN and destination[0] == last_row:
            placed = make_code(moved.color, promotion or PieceType.QUEEN)

        next_ep: Square | None = None
        if moved.piece_type == PieceType.PAWN and abs(destination[0] - origin[0]) == 2:
            next_ep = ((origin[0] + destination[0]) // 2, origin[1])

        generated = not san
        if generated:
            san = self._base_san(
                moved, origin, destination, captured, ep_capture, placed, castle
            )

        entry = MoveEntry(
            origin=origin,
            destination=destination,
            piece=moved.code,
            placed=placed,
            captured=captured,
            san=san,
            prev_en_passant=self.en_passant,
            next_en_passant=next_ep,
            prev_castling=self.castling,
            next_castling=self._next_castling(moved, origin, destination, captured),
            rook_move=rook_move,
            en_passant_capture=ep_capture,
        )
        self.log.record(entry)

        if generated:
            state = self.check_state()
            if state.is_check:
                suffix = "#" if state.is_checkmate else "+"
                entry = self._replace_last_san(entry, san + suffix)

        _LOGGER.debug(
            "Applied %s (%s -> %s)", entry.san, square_name(origin), square_name(destination)
        )
        return entry

    def apply_parsed_move(self, parsed: ParsedMove) -> MoveEntry | None:
        """Resolve a parsed SAN move to squares and apply it.

        Returns ``None`` for result markers. Raises
        :class:`UnresolvedMoveError`, leaving the board unchanged, when no
        single piece matches.
        """
        if parsed.is_terminal:
            return None
        origin, destination = self.resolve(parsed)
        return self.apply_move(origin, destination, parsed.token, parsed.promotion)

    def apply_san(self, token: str) -> MoveEntry | None:
        return self.apply_parsed_move(parse_san(token))

    def load_transcript(self, text: str) -> Transcript:
        """Parse *text* and play every move onto the current position."""
        transcript = parse_transcript(text)
        for parsed in transcript.moves:
            self.apply_parsed_move(parsed)
        return transcript

    def resolve(self, parsed: ParsedMove) -> tuple[Square, Square]:
        """Concrete ``(origin, destination)`` for a parsed move."""
        color = self.active_color
        if parsed.castle is not None:
            king_from, king_to, _, _ = castle_squares(color, parsed.castle)
            if self.get(king_from) != make_code(color, PieceType.KING):
                raise UnresolvedMoveError(
                    f"Cannot castle ({parsed.token}): king not on {square_name(king_from)}"
                )
            return king_from, king_to

        destination = parsed.destination
        if destination is None:
            raise UnresolvedMoveError(f"Move has no destination: {parsed.token!r}")
        if parsed.piece_type == PieceType.PAWN:
            return self._resolve_pawn(parsed, destination), destination
        return self._resolve_piece(parsed, destination), destination

    # ── History navigation ───────────────────────────────────────────────

    def back(self) -> bool:
        moved = self.log.undo()
        if moved:
            _LOGGER.debug("Undo → ply %d", self.log.index)
        return moved

    def forward(self) -> bool:
        return self.log.redo()

    def start(self) -> None:
        self.log.start()

    def end(self) -> None:
        self.log.end()

    def go_to(self, index: int) -> None:
        self.log.go_to(index)

    @property
    def move_index(self) -> int:
        return self.log.index

    @property
    def move_count(self) -> int:
        return self.log.length

    @property
    def is_at_start(self) -> bool:
        return self.log.is_at_start

    @property
    def is_at_end(self) -> bool:
        return self.log.is_at_end

    @property
    def sans(self) -> list[str]:
        return self.log.sans

    # ── Internal ─────────────────────────────────────────────────────────

    @staticmethod
    def _checked(sq: Square) -> Square:
        if not in_bounds(*sq):
            raise IndexError(f"Square off the board: {sq!r}")
        return sq

    @staticmethod
    def _castle_side(king_from: Square, king_to: Square) -> CastleSide:
        return CastleSide.KING if king_to[1] > king_from[1] else CastleSide.QUEEN

    def _next_castling(
        self, moved: PieceInfo, origin: Square, destination: Square, captured: int
    ) -> CastlingRights:
        castling = self.castling
        if moved.piece_type == PieceType.KING:
            castling &= ~CastlingRights.for_color(moved.color)
        if moved.piece_type == PieceType.ROOK and origin in _ROOK_CORNERS:
            castling &= ~_ROOK_CORNERS[origin]
        if captured != EMPTY and destination in _ROOK_CORNERS:
            castling &= ~_ROOK_CORNERS[destination]
        return castling

    def _base_san(
        self,
        moved: PieceInfo,
        origin: Square,
        destination: Square,
        captured: int,
        ep_capture: EnPassantCapture | None,
        placed: int,
        castle: CastleSide | None,
    ) -> str:
        assert moved.piece_type is not None
        rivals: list[Square] = []
        if moved.piece_type not in (PieceType.PAWN, PieceType.KING):
            rivals = [
                sq
                for sq in self.pieces(moved.color, moved.piece_type)
                if sq != origin
                and self.generator.can_reach(sq, destination)
                and not self.detector.is_pinned_piece(sq)
            ]
        return format_san(
            moved.piece_type,
            origin,
            destination,
            capture=captured != EMPTY or ep_capture is not None,
            promotion=self.registry.decode(placed).piece_type if placed != moved.code else None,
            castle=castle,
            rivals=rivals,
        )

    def _replace_last_san(self, entry: MoveEntry, san: str) -> MoveEntry:
        updated = replace(entry, san=san)
        self.log.replace_last(updated)
        return updated

    def _resolve_pawn(self, parsed: ParsedMove, destination: Square) -> Square:
        """Scan back down the file from *destination* for the mover's pawn."""
        color = self.active_color
        col = parsed.origin.col if parsed.origin.col is not None else destination[1]
        pawn = make_code(color, PieceType.PAWN)
        step = -color.forward
        row = destination[0] + step
        while in_bounds(row, col):
            code = self.get((row, col))
            if code == pawn and self.generator.can_reach((row, col), destination):
                return (row, col)
            if code != EMPTY:
                break
            row += step
        raise UnresolvedMoveError(f"No {color} pawn can play {parsed.token!r}")

    def _resolve_piece(self, parsed: ParsedMove, destination: Square) -> Square:
        """Pick the one piece of the parsed type that can make the move.

        Candidates are narrowed by the origin hint, then by reachability of
        *destination*, then by excluding pinned pieces.
        """
        color = self.active_color
        candidates = [
            sq
            for sq in self.pieces(color, parsed.piece_type)
            if parsed.origin.matches(sq)
        ]
        candidates = [sq for sq in candidates if self.generator.can_reach(sq, destination)]
        if len(candidates) > 1:
            candidates = [sq for sq in candidates if not self.detector.is_pinned_piece(sq)]
        if len(candidates) == 1:
            return candidates[0]
        if not candidates:
            raise UnresolvedMoveError(f"No {color} piece can play {parsed.token!r}")
        names = ", ".join(square_name(sq) for sq in candidates)
        raise UnresolvedMoveError(f"Ambiguous move {parsed.token!r}: {names}")

    def __repr__(self) -> str:
        rows: list[str] = []
        for row, cells in enumerate(self.grid):
            text = " ".join(self.registry.decode(code).fen_code or "." for code in cells)
            rows.append(f"{BOARD_SIZE - row} {text}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
