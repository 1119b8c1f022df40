"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from gambit.core.board import Board
from gambit.openings import Opening, OpeningIndex


@pytest.fixture
def board() -> Board:
    """A fresh board at the starting position."""
    return Board()


@pytest.fixture
def openings() -> list[Opening]:
    return [
        Opening("B00", "King's Pawn Game", "1. e4", 100, 40, 90),
        Opening("C20", "King's Pawn Game: Open", "1. e4 e5", 60, 20, 50),
        Opening("C40", "King's Knight Opening", "1. e4 e5 2. Nf3", 45, 15, 30),
        Opening("C50", "Italian Game", "1. e4 e5 2. Nf3 Nc6 3. Bc4", 30, 10, 25),
        Opening("C60", "Ruy Lopez", "1. e4 e5 2. Nf3 Nc6 3. Bb5", 35, 12, 20),
        Opening("B20", "Sicilian Defense", "1. e4 c5", 50, 20, 55),
        Opening("A40", "Queen's Pawn Game", "1. d4", 80, 30, 70),
        Opening("D06", "Queen's Gambit", "1. d4 d5 2. c4", 40, 20, 30),
        Opening("A00", "Polish Opening", "1. b4", 5, 1, 6),
    ]


@pytest.fixture
def index(openings: list[Opening]) -> OpeningIndex:
    return OpeningIndex(openings)
