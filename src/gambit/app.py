"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from gambit.config import Config
from gambit.core.board import Board
from gambit.core.notation.fen import STARTING_FEN, FenError
from gambit.openings import Opening, OpeningIndex, load_openings

_LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gambit",
        description="Inspect a chess position and look up matching openings.",
    )
    parser.add_argument("--fen", help="starting position (defaults to the config value)")
    parser.add_argument("--pgn", type=Path, metavar="FILE", help="movetext to play onto the position")
    parser.add_argument("--config", type=Path, metavar="FILE", default=Path("gambit.toml"))
    parser.add_argument("--query", metavar="TEXT", help="search openings by name or code")
    return parser


def load_board(fen: str) -> Board:
    """Board at *fen*, or the starting position when *fen* does not parse."""
    try:
        return Board(fen)
    except FenError as exc:
        _LOGGER.warning("Invalid FEN %r (%s); using the starting position", fen, exc)
        return Board(STARTING_FEN)


def _format_opening(opening: Opening) -> str:
    return (
        f"{opening.code}  {opening.name}  [{opening.transcript}]  "
        f"+{opening.white_wins} ={opening.draws} -{opening.black_wins}"
    )


def describe_position(board: Board, index: OpeningIndex, limit: int) -> list[str]:
    lines = [repr(board), "", f"FEN: {board.to_fen()}"]

    state = board.check_state()
    if state.is_checkmate:
        lines.append(f"{board.active_color.name.title()} is checkmated")
    elif state.is_check:
        lines.append(f"{board.active_color.name.title()} is in check")

    played = board.log.played_sans
    if played:
        lines.append(f"Moves: {board.transcript()}")
        current = index.current_opening(played)
        if current is not None:
            lines.append(f"Opening: {_format_opening(current)}")

    continuations = index.search_by_prefix(played, board.active_color)[:limit]
    if continuations:
        lines.append("")
        lines.append("Continuations:")
        lines.extend(f"  {_format_opening(o)}" for o in continuations)
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    """Run the ``gambit`` command."""
    args = build_parser().parse_args(argv)
    try:
        config = Config.load_from_toml(args.config)
    except ValueError as exc:
        print(f"gambit: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    board = load_board(args.fen if args.fen is not None else config.start_fen)
    index = load_openings(config.openings_path)

    if args.pgn is not None:
        try:
            board.load_transcript(args.pgn.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            print(f"gambit: cannot play {args.pgn}: {exc}", file=sys.stderr)
            return 1

    for line in describe_position(board, index, config.search_limit):
        print(line)

    if args.query:
        print()
        print(f"Search: {args.query}")
        for opening in index.search_by_query(args.query, limit=config.search_limit):
            print(f"  {_format_opening(opening)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
