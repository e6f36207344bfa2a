"""Tests for the Qt rules bridge."""

from __future__ import annotations

from PyQt6.QtTest import QSignalSpy

from emychess.core.board import Board
from emychess.core.enums import MoveResult
from emychess.core.rules import Rules
from emychess.core.types import E2, E3, E4, E5, E7
from emychess.game.qt_bridge import RulesBridge


def _bridge() -> RulesBridge:
    return RulesBridge(Rules(), Board.initial())


class TestRulesBridge:
    def test_legal_move_emits_moved_and_result(self, qapp: object) -> None:
        bridge = _bridge()
        pawn = bridge.board[E2]
        moved = QSignalSpy(bridge.piece_moved)
        attempted = QSignalSpy(bridge.move_attempted)

        bridge.request_move(pawn, E4)

        assert len(moved) == 1
        assert moved[0][0] is pawn
        assert moved[0][1] == E4
        assert len(attempted) == 1
        assert attempted[0][2] == int(MoveResult.MOVED)

    def test_rejected_move_snaps_back(self, qapp: object) -> None:
        bridge = _bridge()
        pawn = bridge.board[E2]
        moved = QSignalSpy(bridge.piece_moved)
        attempted = QSignalSpy(bridge.move_attempted)

        bridge.request_move(pawn, E5)

        assert len(moved) == 1
        assert moved[0][1] == E2
        assert attempted[0][2] == int(MoveResult.REJECTED)

    def test_capture_signal(self, qapp: object) -> None:
        bridge = _bridge()
        bridge.set_anarchy(True)
        victim = bridge.board[E7]
        captured = QSignalSpy(bridge.piece_captured)

        bridge.request_move(bridge.board[E2], E7)

        assert len(captured) == 1
        assert captured[0][0] is victim

    def test_anarchy_and_reset_signals(self, qapp: object) -> None:
        bridge = _bridge()
        anarchy = QSignalSpy(bridge.anarchy_changed)
        reset = QSignalSpy(bridge.board_reset)

        bridge.set_anarchy(True)
        bridge.reset_board()

        assert len(anarchy) == 1
        assert anarchy[0][0] is True
        assert bridge.rules.anarchy
        assert len(reset) == 1

    def test_legal_moves(self, qapp: object) -> None:
        bridge = _bridge()
        assert set(bridge.legal_moves(bridge.board[E2])) == {E3, E4}

    def test_detach_stops_relaying(self, qapp: object) -> None:
        bridge = _bridge()
        moved = QSignalSpy(bridge.piece_moved)
        bridge.detach()
        bridge.request_move(bridge.board[E2], E4)
        assert len(moved) == 0
        assert bridge.board[E4] is not None
