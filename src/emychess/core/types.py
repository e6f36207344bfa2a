"""Coordinate type and helpers.

Board layout (file, rank), both zero-based:
    a1=(0, 0), b1=(1, 0), ..., h1=(7, 0)
    ...
    a8=(0, 7), ..., h8=(7, 7)

Grid snapshots are flat lists indexed by ``rank * 8 + file``.
"""

from __future__ import annotations

from typing import NamedTuple

BOARD_SIZE = 8
GRID_LENGTH = BOARD_SIZE * BOARD_SIZE


class Coord(NamedTuple):
    """Board coordinate with value equality."""

    file: int
    rank: int

    def __str__(self) -> str:
        return square_name(self)


def is_valid_coordinate(file: int, rank: int) -> bool:
    """Whether (file, rank) lies on the board."""
    return 0 <= file < BOARD_SIZE and 0 <= rank < BOARD_SIZE


def grid_index(file: int, rank: int) -> int:
    """Index of (file, rank) inside a grid snapshot."""
    return rank * BOARD_SIZE + file


def square_name(coord: Coord) -> str:
    """Human-readable name, e.g. (4, 3) → 'e4'."""
    return chr(ord("a") + coord.file) + str(coord.rank + 1)


def parse_square(name: str) -> Coord:
    """Parse square name, e.g. 'e4' → Coord(4, 3)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Coord(ord(name[0]) - ord("a"), int(name[1]) - 1)


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Coord(f, 0) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Coord(f, 1) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Coord(f, 2) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Coord(f, 3) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Coord(f, 4) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Coord(f, 5) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Coord(f, 6) for f in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = (Coord(f, 7) for f in range(8))
