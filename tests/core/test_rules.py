"""Tests for attack, check, mate and pin detection."""

from gambit.core.board import Board
from gambit.core.enums import CastleSide, Color, PieceType
from gambit.core.rules import CheckDetector
from gambit.core.types import D4, D5, D7, D8, E1, E2, E4, E6, F3, F6, F7, F8, G7

FOOLS_MATE_FEN = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w"


class TestCheckState:
    def test_start_is_quiet(self, board: Board) -> None:
        state = board.check_state()
        assert not state.is_check
        assert not state.is_checkmate
        assert state.king_square == E1

    def test_fools_mate(self) -> None:
        state = Board(FOOLS_MATE_FEN).check_state()
        assert state.is_check
        assert state.is_checkmate
        assert state.king_square == E1

    def test_no_king(self) -> None:
        state = Board("8/8/8/8/8/8/8/8 w").check_state()
        assert not state.is_check
        assert not state.is_checkmate
        assert state.king_square is None

    def test_check_with_escape(self) -> None:
        state = Board("4k3/8/8/8/8/8/8/4R1K1 b - -").check_state()
        assert state.is_check
        assert not state.is_checkmate

    def test_back_rank_mate(self) -> None:
        assert Board("R5k1/5ppp/8/8/8/8/8/6K1 b - -").check_state().is_checkmate

    def test_block_resolves_check(self) -> None:
        state = Board("R5k1/5ppp/8/8/8/8/8/2r3K1 b - -").check_state()
        assert state.is_check
        assert not state.is_checkmate

    def test_knight_checker_can_be_captured(self) -> None:
        state = Board("4b1rk/5Npp/8/8/8/8/8/6K1 b - -").check_state()
        assert state.is_check
        assert not state.is_checkmate

    def test_smothered_mate(self) -> None:
        assert Board("6rk/5Npp/8/8/8/8/8/6K1 b - -").check_state().is_checkmate

    def test_pinned_piece_cannot_block(self) -> None:
        assert not Board("R5k1/5pbp/8/8/8/8/8/7K b - -").check_state().is_checkmate
        assert Board("R5k1/5pbp/8/8/8/8/8/6RK b - -").check_state().is_checkmate

    def test_king_escapes_ignore_own_square(self) -> None:
        board = Board("4k3/8/8/8/8/8/8/4R1K1 b - -")
        escapes = board.detector.king_escapes((0, 4))
        assert set(escapes) == {D8, F8, D7, F7}


class TestAttacks:
    def test_start_position_attackers(self, board: Board) -> None:
        attackers = board.detector.attackers_of(F3, Color.WHITE)
        assert {a.piece_type for a in attackers} == {PieceType.PAWN, PieceType.KNIGHT}
        assert len(attackers) == 3

    def test_black_pawn_attacks_downward(self) -> None:
        board = Board("4k3/8/8/3p4/8/8/8/4K3 w - -")
        assert board.is_square_attacked_by(E4, Color.BLACK)
        assert not board.is_square_attacked_by(D4, Color.BLACK)
        assert not board.is_square_attacked_by(E6, Color.BLACK)

    def test_white_pawn_attacks_upward(self) -> None:
        board = Board("4k3/8/8/8/4P3/8/8/4K3 w - -")
        assert board.is_square_attacked_by(D5, Color.WHITE)
        assert not board.is_square_attacked_by((5, 3), Color.WHITE)

    def test_slider_direction_points_at_attacker(self) -> None:
        board = Board("4k3/8/8/8/8/8/8/4R1K1 b - -")
        (attacker,) = board.detector.attackers_of((0, 4), Color.WHITE)
        assert attacker.piece_type == PieceType.ROOK
        assert attacker.direction == (1, 0)

    def test_blocked_slider(self) -> None:
        board = Board("4k3/8/8/8/8/8/4P3/4R1K1 b - -")
        assert not board.is_square_attacked_by((0, 4), Color.WHITE)

    def test_black_attacks_at_start(self, board: Board) -> None:
        assert board.is_square_attacked_by(F6, Color.BLACK)
        assert not board.is_square_attacked_by(E4, Color.BLACK)

    def test_undefended(self) -> None:
        board = Board("4k3/8/8/3p4/4N3/8/8/4K3 w - -")
        assert board.is_undefended(E4)
        assert not board.is_undefended(D5)
        assert not board.is_undefended(F3)

    def test_defended(self) -> None:
        board = Board("4k3/8/8/3p4/4N3/5P2/8/4K3 w - -")
        assert not board.is_undefended(E4)


class TestPins:
    def test_file_pin(self) -> None:
        board = Board("4k3/4r3/8/8/8/8/4N3/4K3 w - -")
        assert board.is_pinned_piece(E2)

    def test_diagonal_pin(self) -> None:
        board = Board("4k3/8/8/b7/8/8/3N4/4K3 w - -")
        assert board.is_pinned_piece((6, 3))

    def test_wrong_slider_is_no_pin(self) -> None:
        board = Board("4k3/4b3/8/8/8/8/4N3/4K3 w - -")
        assert not board.is_pinned_piece(E2)

    def test_two_pieces_in_between(self) -> None:
        board = Board("4k3/4r3/8/8/8/4P3/4N3/4K3 w - -")
        assert not board.is_pinned_piece(E2)

    def test_king_is_never_pinned(self, board: Board) -> None:
        assert not board.is_pinned_piece(E1)

    def test_rank_pin(self) -> None:
        board = Board("4k3/8/8/8/8/8/8/4K1Nr w - -")
        assert not board.is_pinned_piece(G7)
        assert board.is_pinned_piece((7, 6))


class TestCanCastle:
    def test_transit_attacked(self) -> None:
        detector = CheckDetector(Board("5r1k/8/8/8/8/8/8/4K2R w K -"))
        assert not detector.can_castle(Color.WHITE, CastleSide.KING)
        assert detector.can_castle(Color.WHITE, CastleSide.QUEEN)

    def test_landing_attacked(self) -> None:
        detector = CheckDetector(Board("6rk/8/8/8/8/8/8/R3K2R w KQ -"))
        assert not detector.can_castle(Color.WHITE, CastleSide.KING)
        assert detector.can_castle(Color.WHITE, CastleSide.QUEEN)

    def test_in_check(self) -> None:
        detector = CheckDetector(Board("4r2k/8/8/8/8/8/8/R3K2R w KQ -"))
        assert not detector.can_castle(Color.WHITE, CastleSide.KING)
        assert not detector.can_castle(Color.WHITE, CastleSide.QUEEN)
