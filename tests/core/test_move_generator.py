"""Tests for destination generation."""

import pytest

from gambit.core.board import Board
from gambit.core.enums import CastleSide, Color
from gambit.core.move_generator import (
    Destination,
    MoveGenerator,
    SquareStatus,
    castle_squares,
)
from gambit.core.types import (
    A1, A2, A3, A4, B1, C1, C7, D1, D3, D4, D5, D6,
    E1, E2, E3, E4, E5, E6, E7, E8, F1, F3, F4, G1, H1, H3,
)


def _squares(moves: list[Destination]) -> set[tuple[int, int]]:
    return {dest.square for dest in moves}


class TestSliding:
    def test_rook_on_empty_board(self) -> None:
        board = Board("8/8/8/8/3R4/8/8/8 w - -")
        assert len(board.destinations(D4)) == 14

    def test_queen_in_corner(self) -> None:
        board = Board("8/8/8/8/8/8/8/Q7 w - -")
        assert len(board.destinations(A1)) == 21

    def test_enemy_piece_caps_the_ray(self) -> None:
        board = Board("8/8/8/8/p7/8/8/R7 w - -")
        moves = board.destinations(A1)
        file_moves = {dest for dest in moves if dest.square[1] == 0}
        assert file_moves == {
            Destination(A2),
            Destination(A3),
            Destination(A4, capture=True),
        }
        assert len(moves) == 10

    def test_own_piece_shadows_beyond_it(self) -> None:
        board = Board("8/8/3P4/8/3R1p2/8/8/8 w - -")
        moves = board.destinations(D4)
        squares = _squares(moves)
        assert D5 in squares
        assert D6 not in squares
        assert Destination(F4, capture=True) in moves
        assert (4, 6) not in squares
        assert len(moves) == 9

    def test_bishop_hemmed_in_at_start(self, board: Board) -> None:
        assert board.destinations(C1) == []

    def test_enemy_king_is_not_a_destination(self) -> None:
        board = Board("8/8/8/8/8/8/8/R3k3 w - -")
        squares = _squares(board.destinations(A1))
        assert E1 not in squares
        assert {B1, C1, D1} <= squares


class TestSteppers:
    def test_knight_from_start(self, board: Board) -> None:
        assert _squares(board.destinations(G1)) == {F3, H3}

    def test_king_surrounded_by_own_pieces(self, board: Board) -> None:
        assert board.destinations(E1) == []

    def test_empty_square(self, board: Board) -> None:
        assert board.destinations(E4) == []


class TestPawns:
    def test_white_double_push(self, board: Board) -> None:
        assert _squares(board.destinations(E2)) == {E3, E4}

    def test_black_double_push(self, board: Board) -> None:
        assert _squares(board.destinations(E7)) == {E6, E5}

    def test_blocked(self) -> None:
        board = Board("4k3/8/8/8/8/4p3/4P3/4K3 w - -")
        assert board.destinations(E2) == []

    def test_double_push_blocked(self) -> None:
        board = Board("4k3/8/8/8/4p3/8/4P3/4K3 w - -")
        assert _squares(board.destinations(E2)) == {E3}

    def test_diagonal_capture(self) -> None:
        board = Board("4k3/8/8/8/8/3p4/4P3/4K3 w - -")
        assert Destination(D3, capture=True) in board.destinations(E2)

    def test_never_captures_king(self) -> None:
        board = Board("8/8/8/8/8/3k4/4P3/4K3 w - -")
        assert _squares(board.destinations(E2)) == {E3, E4}

    def test_en_passant(self) -> None:
        board = Board("4k3/8/8/3pP3/8/8/8/4K3 w - d6")
        moves = board.destinations(E5)
        assert Destination(D6, capture=True) in moves
        assert Destination(E6) in moves

    def test_no_en_passant_without_target(self) -> None:
        board = Board("4k3/8/8/3pP3/8/8/8/4K3 w - -")
        assert _squares(board.destinations(E5)) == {E6}

    def test_own_side_cannot_take_its_own_target(self, board: Board) -> None:
        board.load_transcript("1. e4 a6 2. e5 d5")
        assert board.en_passant == D6
        assert D6 not in _squares(board.destinations(C7))
        assert D6 not in _squares(board.destinations(E7))
        assert Destination(D6, capture=True) in board.destinations(E5)


class TestCastlingGeneration:
    def test_both_sides_available(self) -> None:
        board = Board("r3k2r/8/8/8/8/8/8/R3K2R w KQkq -")
        squares = _squares(board.destinations(E1))
        assert G1 in squares
        assert C1 in squares

    def test_no_rights(self) -> None:
        board = Board("r3k2r/8/8/8/8/8/8/R3K2R w - -")
        squares = _squares(board.destinations(E1))
        assert G1 not in squares
        assert C1 not in squares

    def test_blocked_lane(self) -> None:
        board = Board("r3k2r/8/8/8/8/8/8/RN2K2R w KQkq -")
        assert C1 not in _squares(board.destinations(E1))

    def test_missing_rook(self) -> None:
        board = Board("r3k2r/8/8/8/8/8/8/4K2R w KQkq -")
        assert C1 not in _squares(board.destinations(E1))

    def test_black_kingside(self) -> None:
        board = Board("r3k2r/8/8/8/8/8/8/R3K2R b KQkq -")
        assert (0, 6) in _squares(board.destinations(E8))

    def test_castle_squares(self) -> None:
        assert castle_squares(Color.WHITE, CastleSide.KING) == (E1, G1, H1, F1)
        assert castle_squares(Color.BLACK, CastleSide.QUEEN) == (E8, (0, 2), (0, 0), (0, 3))


class TestGeneratorQueries:
    def test_all_destinations_from_start(self, board: Board) -> None:
        moves = MoveGenerator(board).all_destinations(Color.WHITE)
        assert sum(len(dests) for dests in moves.values()) == 20

    def test_can_reach(self, board: Board) -> None:
        gen = MoveGenerator(board)
        assert gen.can_reach(G1, F3)
        assert not gen.can_reach(G1, E2)

    @pytest.mark.parametrize(
        ("square", "status"),
        [
            ((8, 0), SquareStatus.OUT_OF_BOARD),
            ((-1, 3), SquareStatus.OUT_OF_BOARD),
            (E4, SquareStatus.POSSIBLE),
            (E2, SquareStatus.OURS),
            (E7, SquareStatus.CAPTURE),
            (E8, SquareStatus.ENEMY_KING),
        ],
    )
    def test_status(self, board: Board, square: tuple[int, int], status: SquareStatus) -> None:
        assert MoveGenerator(board).status(square, Color.WHITE) == status
