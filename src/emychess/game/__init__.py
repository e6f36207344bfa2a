"""Application-facing adapters over the rules core.

Quick start::

    from emychess.core import Board, Rules
    from emychess.game import RulesBridge

    bridge = RulesBridge(Rules(), Board.initial())
    bridge.piece_moved.connect(view.place_piece)
"""

from emychess.game.qt_bridge import RulesBridge

__all__ = ["RulesBridge"]
