"""Qt bridge exposing a board and its rules to a Qt application."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from emychess.core.board import Board
from emychess.core.enums import MoveResult
from emychess.core.move_set import MoveSet
from emychess.core.piece import Piece
from emychess.core.rules import Rules
from emychess.core.types import Coord


class RulesBridge(QObject):
    """Re-emits board and rules callbacks as Qt signals.

    Views connect to the signals to redraw pieces; input handlers call the
    slots. A rejected move still emits ``piece_moved`` for the piece's own
    square so a dragged piece snaps back.
    """

    piece_moved = pyqtSignal(object, object)  # Piece, Coord
    piece_captured = pyqtSignal(object)  # Piece
    board_reset = pyqtSignal()
    move_attempted = pyqtSignal(object, object, int)  # Piece, Coord, MoveResult
    anarchy_changed = pyqtSignal(bool)

    def __init__(
        self, rules: Rules, board: Board, parent: QObject | None = None
    ) -> None:
        super().__init__(parent)
        self._rules = rules
        self._board = board
        self._board_callbacks = (
            (board.events.on_piece_moved, self._on_piece_moved),
            (board.events.on_piece_captured, self._on_piece_captured),
            (board.events.on_reset, self._on_reset),
        )
        self._rules_callbacks = (
            (rules.events.on_move, self._on_move),
            (rules.events.on_anarchy_changed, self._on_anarchy_changed),
        )
        for handlers, cb in self._board_callbacks + self._rules_callbacks:
            handlers.append(cb)

    @property
    def board(self) -> Board:
        return self._board

    @property
    def rules(self) -> Rules:
        return self._rules

    def detach(self) -> None:
        """Stop relaying callbacks from the board and rules."""
        for handlers, cb in self._board_callbacks + self._rules_callbacks:
            if cb in handlers:
                handlers.remove(cb)

    # ── Slots ────────────────────────────────────────────────────────────

    @pyqtSlot(object, object)
    def request_move(self, piece: Piece, destination: Coord) -> None:
        """Attempt to move *piece*; the outcome arrives via ``move_attempted``."""
        self._rules.attempt_move(piece, destination, self._board)

    @pyqtSlot(bool)
    def set_anarchy(self, enabled: bool) -> None:
        self._rules.set_anarchy(enabled)

    @pyqtSlot()
    def reset_board(self) -> None:
        self._rules.reset_board(self._board)

    def legal_moves(self, piece: Piece) -> MoveSet:
        return self._rules.legal_moves(piece, self._board)

    # ── Callback relays ──────────────────────────────────────────────────

    def _on_piece_moved(self, piece: Piece, coord: Coord) -> None:
        self.piece_moved.emit(piece, coord)

    def _on_piece_captured(self, piece: Piece) -> None:
        self.piece_captured.emit(piece)

    def _on_reset(self) -> None:
        self.board_reset.emit()

    def _on_move(self, piece: Piece, coord: Coord, result: MoveResult) -> None:
        self.move_attempted.emit(piece, coord, int(result))

    def _on_anarchy_changed(self, enabled: bool) -> None:
        self.anarchy_changed.emit(enabled)
