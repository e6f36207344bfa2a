"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator

import pytest

from emychess.core.board import Board
from emychess.core.enums import PieceType
from emychess.core.piece import Piece
from emychess.core.rules import Rules
from emychess.core.types import parse_square

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for signal tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def make_board() -> Callable[..., Board]:
    """Build a board from entries such as ``"Ke1"`` (white king) or ``"pd7"``.

    Pawns off their starting rank count as having moved, as with
    :meth:`Board.load_placement`.
    """

    def _make(*entries: str) -> Board:
        board = Board()
        for entry in entries:
            coord = parse_square(entry[1:])
            piece = Piece.from_char(entry[0], coord.file, coord.rank)
            if piece.piece_type == PieceType.PAWN:
                piece.has_moved = piece.rank != piece.color.pawn_rank
            board.add_piece(piece)
        return board

    return _make


@pytest.fixture
def rules() -> Rules:
    return Rules()
