"""Move legality and execution: the rules a board is played under.

Moves are plain destination coordinates. What kind of move a destination
represents is re-derived from piece type and geometry whenever it matters:

* a king moving two files castles toward that side;
* a pawn moving diagonally onto an empty square captures en passant;
* a pawn moving two ranks becomes the next en passant target.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from emychess.core.enums import Color, MoveResult, PieceType
from emychess.core.move_generator import MoveGenerator
from emychess.core.move_set import MoveSet
from emychess.core.types import Coord, grid_index, square_name

if TYPE_CHECKING:
    from emychess.core.interfaces import Grid, IBoard
    from emychess.core.piece import Piece

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class RulesConfig:
    """Initial rule settings.

    ``strict_castling`` forbids castling out of or through check. Disabling it
    only tests the square the king lands on.
    """

    anarchy: bool = False
    strict_castling: bool = True


# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[["Piece", Coord, MoveResult], None]
AnarchyCallback = Callable[[bool], None]


@dataclass
class RulesEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_anarchy_changed: list[AnarchyCallback] = field(default_factory=list)


def is_castling(piece: Piece, destination: Coord) -> bool:
    return (
        piece.piece_type == PieceType.KING
        and abs(destination.file - piece.file) == 2
    )


def is_en_passant(piece: Piece, destination: Coord, occupant: Piece | None) -> bool:
    return (
        piece.piece_type == PieceType.PAWN
        and destination.file != piece.file
        and occupant is None
    )


def is_double_push(piece: Piece, destination: Coord) -> bool:
    return (
        piece.piece_type == PieceType.PAWN
        and abs(destination.rank - piece.rank) == 2
    )


def is_in_play(piece: Piece, board: IBoard) -> bool:
    """Is *piece* alive and standing on its own square of *board*?"""
    return piece.alive and board.piece_at(piece.coord) is piece


class Rules:
    """Legality filter and move executor.

    The instance holds configuration only; every operation takes the board
    it applies to, so one :class:`Rules` can serve several boards.
    """

    __slots__ = ("_anarchy", "_strict_castling", "events")

    def __init__(self, config: RulesConfig | None = None) -> None:
        config = config if config is not None else RulesConfig()
        self._anarchy = config.anarchy
        self._strict_castling = config.strict_castling
        self.events = RulesEvents()

    # ── Configuration ────────────────────────────────────────────────────

    @property
    def anarchy(self) -> bool:
        return self._anarchy

    @property
    def strict_castling(self) -> bool:
        return self._strict_castling

    def set_anarchy(self, enabled: bool) -> None:
        """Turn rule checking off (``True``) or back on."""
        if enabled == self._anarchy:
            return
        self._anarchy = enabled
        _LOGGER.debug("Anarchy mode %s", "enabled" if enabled else "disabled")
        for cb in self.events.on_anarchy_changed:
            cb(enabled)

    # ── Queries ──────────────────────────────────────────────────────────

    def pseudo_legal_moves(self, piece: Piece, board: IBoard) -> MoveSet:
        if not is_in_play(piece, board):
            return MoveSet()
        return MoveGenerator(board).pseudo_legal_moves(piece)

    def is_king_in_check(self, color: Color, board: IBoard) -> bool:
        return MoveGenerator(board).is_in_check(color)

    def legal_moves(self, piece: Piece, board: IBoard) -> MoveSet:
        """Pseudo-legal moves of *piece* that do not leave its own king attacked.

        Each candidate is played on a private copy of the grid; the live board
        is never modified.
        """
        if not is_in_play(piece, board):
            return MoveSet()
        gen = MoveGenerator(board)
        moves = gen.pseudo_legal_moves(piece)

        king = board.king_of(piece.color)
        if king is None:
            _LOGGER.warning(
                "No %s king on board, legal moves for %r left unfiltered",
                piece.color,
                piece,
            )
            return moves

        for destination in list(moves):
            scratch = board.grid_snapshot()
            double_push_pawn = self._simulate(piece, destination, board, scratch)
            is_king = piece.piece_type == PieceType.KING
            threatened = destination if is_king else king.coord
            if gen.is_square_attacked(
                threatened, scratch, double_push_pawn, piece.color
            ):
                moves.discard(destination)
            elif (
                self._strict_castling
                and is_castling(piece, destination)
                and self._castles_through_check(gen, piece, destination, board)
            ):
                moves.discard(destination)
        return moves

    # ── Execution ────────────────────────────────────────────────────────

    def attempt_move(
        self,
        piece: Piece,
        destination: Coord,
        board: IBoard,
        legal_moves: MoveSet | None = None,
    ) -> MoveResult:
        """Validate and commit a move of *piece* to *destination*.

        *legal_moves* may be passed when the caller already computed them
        (e.g. to highlight squares while dragging). Nothing is mutated before
        the destination has been validated; a rejected piece is re-placed on
        its own square so observers refresh. A captured piece is rejected
        without touching the board.
        """
        destination = Coord(destination[0], destination[1])

        if not is_in_play(piece, board):
            _LOGGER.debug("Rejected %r: not on the board", piece)
            result = MoveResult.REJECTED
        elif not board.is_valid_coordinate(destination.file, destination.rank):
            result = self._reject(piece, destination, board)
        elif self._anarchy:
            result = self._apply_anarchy(piece, destination, board)
        else:
            if legal_moves is None:
                legal_moves = self.legal_moves(piece, board)
            if destination in legal_moves:
                result = self._apply(piece, destination, board)
            else:
                result = self._reject(piece, destination, board)

        for cb in self.events.on_move:
            cb(piece, destination, result)
        return result

    def reset_board(self, board: IBoard) -> None:
        """Set up the standard starting position."""
        board.reset()
        _LOGGER.debug("Board reset to the standard starting position")

    # ── Internals ────────────────────────────────────────────────────────

    @staticmethod
    def _reject(piece: Piece, destination: Coord, board: IBoard) -> MoveResult:
        _LOGGER.debug("Rejected %r to %s", piece, square_name(destination))
        board.set_position(piece, piece.coord)
        return MoveResult.REJECTED

    @staticmethod
    def _apply_anarchy(piece: Piece, destination: Coord, board: IBoard) -> MoveResult:
        result = MoveResult.MOVED
        target = board.piece_at(destination)
        if target is not None and target is not piece:
            board.capture(target)
            result = MoveResult.CAPTURED
        board.double_push_pawn = None
        board.set_position(piece, destination)
        return result

    @staticmethod
    def _apply(piece: Piece, destination: Coord, board: IBoard) -> MoveResult:
        origin = piece.coord
        result = MoveResult.MOVED

        target = board.piece_at(destination)
        if target is not None and target is not piece:
            board.capture(target)
            result = MoveResult.CAPTURED
        elif is_en_passant(piece, destination, target):
            victim = board.double_push_pawn
            if victim is not None:
                _LOGGER.debug("En passant: %r takes %r", piece, victim)
                board.capture(victim)
                result = MoveResult.CAPTURED

        if is_castling(piece, destination):
            step = 1 if destination.file > origin.file else -1
            rook = board.piece_at(Coord(7 if step == 1 else 0, origin.rank))
            if rook is not None:
                _LOGGER.debug("Castling: %r with %r", piece, rook)
                rook.has_moved = True
                board.set_position(rook, Coord(destination.file - step, origin.rank))

        board.double_push_pawn = piece if is_double_push(piece, destination) else None
        piece.has_moved = True
        board.set_position(piece, destination)
        return result

    @staticmethod
    def _simulate(
        piece: Piece, destination: Coord, board: IBoard, grid: Grid
    ) -> Piece | None:
        """Play the move on *grid* only; return the resulting double-push pawn."""
        origin = piece.coord
        occupant = board.grid_piece(destination.file, destination.rank, grid)

        if is_en_passant(piece, destination, occupant):
            victim = board.double_push_pawn
            if victim is not None:
                idx = grid_index(victim.file, victim.rank)
                if grid[idx] is victim:
                    grid[idx] = None

        board.move_in_snapshot(origin, destination, grid)

        if is_castling(piece, destination):
            step = 1 if destination.file > origin.file else -1
            board.move_in_snapshot(
                Coord(7 if step == 1 else 0, origin.rank),
                Coord(destination.file - step, origin.rank),
                grid,
            )

        return piece if is_double_push(piece, destination) else None

    @staticmethod
    def _castles_through_check(
        gen: MoveGenerator, king: Piece, destination: Coord, board: IBoard
    ) -> bool:
        if gen.is_square_attacked(
            king.coord, board.grid_snapshot(), board.double_push_pawn, king.color
        ):
            return True
        step = 1 if destination.file > king.file else -1
        transit = Coord(king.file + step, king.rank)
        scratch = board.grid_snapshot()
        board.move_in_snapshot(king.coord, transit, scratch)
        return gen.is_square_attacked(transit, scratch, None, king.color)
