"""Core domain layer: chess rules and notation with no third-party dependencies.

Quick start::

    from gambit.core import Board, parse_square

    board = Board()
    for dest in board.legal_destinations(parse_square("g1")):
        print(dest)
    board.apply_san("Nf3")
    print(board.to_fen())
"""

from gambit.core.board import Board, IllegalMoveError, UnresolvedMoveError
from gambit.core.enums import CastleSide, CastlingRights, Color, GameResult, PieceType
from gambit.core.history import MoveEntry, MoveLog
from gambit.core.move_generator import Destination, MoveGenerator
from gambit.core.notation import (
    STARTING_FEN,
    FenError,
    ParsedMove,
    SanError,
    Transcript,
    parse_san,
    parse_transcript,
    sans_to_transcript,
)
from gambit.core.piece import PieceInfo, PieceRegistry, describe, make_code
from gambit.core.rules import Attacker, CheckDetector, CheckState
from gambit.core.types import Square, in_bounds, parse_square, square_name

__all__ = [
    # Enums / flags
    "CastleSide",
    "CastlingRights",
    "Color",
    "GameResult",
    "PieceType",
    # Types / helpers
    "Square",
    "in_bounds",
    "parse_square",
    "square_name",
    # Pieces
    "PieceInfo",
    "PieceRegistry",
    "describe",
    "make_code",
    # Domain objects
    "Attacker",
    "Board",
    "CheckDetector",
    "CheckState",
    "Destination",
    "MoveEntry",
    "MoveGenerator",
    "MoveLog",
    # Errors
    "FenError",
    "IllegalMoveError",
    "SanError",
    "UnresolvedMoveError",
    # Notation
    "STARTING_FEN",
    "ParsedMove",
    "Transcript",
    "parse_san",
    "parse_transcript",
    "sans_to_transcript",
]
