"""Move log: a linear, branch-truncating undo/redo stack (Command pattern)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gambit.core.enums import CastlingRights
from gambit.core.piece import EMPTY
from gambit.core.types import Square

if TYPE_CHECKING:
    from gambit.core.board import Board

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RookMove:
    """The rook half of a castling move."""

    origin: Square
    destination: Square
    piece: int


@dataclass(frozen=True, slots=True)
class EnPassantCapture:
    """A pawn taken en passant; it sits beside, not on, the destination."""

    square: Square
    piece: int


@dataclass(frozen=True, slots=True)
class MoveEntry:
    """Everything needed to replay or exactly invert one move."""

    origin: Square
    destination: Square
    piece: int
    placed: int  # differs from ``piece`` on promotion
    captured: int
    san: str
    prev_en_passant: Square | None
    next_en_passant: Square | None
    prev_castling: CastlingRights
    next_castling: CastlingRights
    rook_move: RookMove | None = None
    en_passant_capture: EnPassantCapture | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured != EMPTY or self.en_passant_capture is not None


class MoveLog:
    """Played moves before :attr:`index`, redoable "future" moves after it.

    Recording a move while the cursor is mid-history first truncates the
    future (:meth:`truncate_from`); there is no variation tree.
    """

    __slots__ = ("_board", "_entries", "_index")

    def __init__(self, board: Board) -> None:
        self._board = board
        self._entries: list[MoveEntry] = []
        self._index = 0

    # ── Accessors ────────────────────────────────────────────────────────

    @property
    def index(self) -> int:
        return self._index

    @property
    def length(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def is_at_start(self) -> bool:
        return self._index == 0

    @property
    def is_at_end(self) -> bool:
        return self._index == len(self._entries)

    @property
    def entries(self) -> tuple[MoveEntry, ...]:
        return tuple(self._entries)

    @property
    def sans(self) -> list[str]:
        return [entry.san for entry in self._entries]

    @property
    def played_sans(self) -> list[str]:
        """SAN of the moves up to the cursor."""
        return [entry.san for entry in self._entries[: self._index]]

    @property
    def last(self) -> MoveEntry | None:
        return self._entries[self._index - 1] if self._index else None

    # ── Mutation ─────────────────────────────────────────────────────────

    def truncate_from(self, index: int) -> list[MoveEntry]:
        """Drop every entry at or after *index*; returns what was dropped."""
        if index < self._index or index > len(self._entries):
            raise IndexError(
                f"Truncation index {index} outside [{self._index}, {len(self._entries)}]"
            )
        dropped = self._entries[index:]
        del self._entries[index:]
        if dropped:
            _LOGGER.debug("Discarded %d future move(s)", len(dropped))
        return dropped

    def record(self, entry: MoveEntry) -> None:
        """Truncate the future, execute *entry* and append it."""
        self.truncate_from(self._index)
        self._execute(entry)
        self._entries.append(entry)
        self._index += 1

    def replace_last(self, entry: MoveEntry) -> None:
        """Swap the entry just before the cursor, e.g. to amend its SAN."""
        if self._index == 0:
            raise IndexError("No played move to replace")
        self._entries[self._index - 1] = entry

    def clear(self) -> None:
        self._entries.clear()
        self._index = 0

    # ── Navigation ───────────────────────────────────────────────────────

    def undo(self) -> bool:
        if self._index == 0:
            return False
        self._index -= 1
        self._revert(self._entries[self._index])
        return True

    def redo(self) -> bool:
        if self._index >= len(self._entries):
            return False
        self._execute(self._entries[self._index])
        self._index += 1
        return True

    def start(self) -> None:
        while self.undo():
            pass

    def end(self) -> None:
        while self.redo():
            pass

    def go_to(self, index: int) -> None:
        target = max(0, min(index, len(self._entries)))
        while self._index > target:
            self.undo()
        while self._index < target:
            self.redo()

    # ── Command execution ────────────────────────────────────────────────

    def _execute(self, entry: MoveEntry) -> None:
        board = self._board
        board.clear(entry.origin)
        board.put(entry.destination, entry.placed)
        if entry.rook_move is not None:
            board.clear(entry.rook_move.origin)
            board.put(entry.rook_move.destination, entry.rook_move.piece)
        if entry.en_passant_capture is not None:
            board.clear(entry.en_passant_capture.square)
        board.en_passant = entry.next_en_passant
        board.castling = entry.next_castling
        board.active_color = board.active_color.opposite

    def _revert(self, entry: MoveEntry) -> None:
        board = self._board
        board.put(entry.origin, entry.piece)
        board.put(entry.destination, entry.captured)
        if entry.rook_move is not None:
            board.put(entry.rook_move.origin, entry.rook_move.piece)
            board.clear(entry.rook_move.destination)
        if entry.en_passant_capture is not None:
            capture = entry.en_passant_capture
            board.put(capture.square, capture.piece)
        board.en_passant = entry.prev_en_passant
        board.castling = entry.prev_castling
        board.active_color = board.active_color.opposite
