"""Core domain layer: chess rules with zero external dependencies.

Quick start::

    from emychess.core import Board, Rules
    from emychess.core.types import E2, E4

    board = Board.initial()
    rules = Rules()
    pawn = board[E2]
    print(rules.legal_moves(pawn, board))
    rules.attempt_move(pawn, E4, board)
"""

from emychess.core.board import STARTING_PLACEMENT, Board, BoardEvents
from emychess.core.enums import Color, MoveResult, PieceType
from emychess.core.interfaces import Grid, IBoard
from emychess.core.move_generator import MoveGenerator
from emychess.core.move_set import MAX_MOVES, MoveSet
from emychess.core.piece import Piece
from emychess.core.rules import Rules, RulesConfig, RulesEvents
from emychess.core.types import (
    Coord,
    is_valid_coordinate,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "MoveResult",
    "PieceType",
    # Types / helpers
    "Coord",
    "Grid",
    "is_valid_coordinate",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "BoardEvents",
    "IBoard",
    "MAX_MOVES",
    "MoveGenerator",
    "MoveSet",
    "Piece",
    "Rules",
    "RulesConfig",
    "RulesEvents",
    "STARTING_PLACEMENT",
]
