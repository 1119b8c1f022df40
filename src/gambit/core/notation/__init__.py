"""Notation package: FEN / SAN / transcript parsing and serialization."""

from gambit.core.notation.fen import (
    STARTING_FEN,
    STARTING_PLACEMENT,
    FenError,
    FenFields,
    build_fen,
    castling_from_str,
    castling_to_str,
    parse_fen,
    parse_placement,
    serialize_placement,
)
from gambit.core.notation.models import MoveHint, ParsedMove, Transcript
from gambit.core.notation.pgn import parse_transcript, sans_to_transcript
from gambit.core.notation.san import SanError, format_san, parse_hint, parse_san

__all__ = [
    "STARTING_FEN",
    "STARTING_PLACEMENT",
    "FenError",
    "FenFields",
    "MoveHint",
    "ParsedMove",
    "SanError",
    "Transcript",
    "build_fen",
    "castling_from_str",
    "castling_to_str",
    "format_san",
    "parse_fen",
    "parse_hint",
    "parse_placement",
    "parse_san",
    "parse_transcript",
    "sans_to_transcript",
    "serialize_placement",
]
