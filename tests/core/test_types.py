"""Tests for coordinates, pieces and move sets."""

import pytest

from emychess.core.enums import Color, MoveResult, PieceType
from emychess.core.move_set import MAX_MOVES, MoveSet
from emychess.core.piece import Piece
from emychess.core.types import (
    A1,
    E4,
    H8,
    Coord,
    is_valid_coordinate,
    parse_square,
    square_name,
)


class TestCoord:
    def test_value_equality(self) -> None:
        assert Coord(4, 3) == E4
        assert Coord(4, 3) == (4, 3)

    def test_square_names(self) -> None:
        assert square_name(A1) == "a1"
        assert square_name(H8) == "h8"
        assert parse_square("e4") == E4
        assert str(E4) == "e4"

    @pytest.mark.parametrize("name", ["", "e", "i1", "a9", "e44"])
    def test_parse_invalid(self, name: str) -> None:
        with pytest.raises(ValueError, match="Invalid square name"):
            parse_square(name)

    @pytest.mark.parametrize(
        ("file", "rank", "valid"),
        [(0, 0, True), (7, 7, True), (-1, 0, False), (0, 8, False), (8, 3, False)],
    )
    def test_is_valid_coordinate(self, file: int, rank: int, valid: bool) -> None:
        assert is_valid_coordinate(file, rank) is valid


class TestEnums:
    def test_color_helpers(self) -> None:
        assert Color.WHITE.opposite == Color.BLACK
        assert Color.WHITE.forward == 1
        assert Color.BLACK.forward == -1
        assert Color.BLACK.pawn_rank == 6
        assert Color.BLACK.home_rank == 7

    def test_move_result_values(self) -> None:
        assert int(MoveResult.REJECTED) == 0
        assert int(MoveResult.MOVED) == 1
        assert int(MoveResult.CAPTURED) == 2
        assert not MoveResult.REJECTED.accepted
        assert MoveResult.CAPTURED.accepted


class TestPiece:
    def test_identity_equality(self) -> None:
        a = Piece(Color.WHITE, PieceType.PAWN, 0, 1)
        b = Piece(Color.WHITE, PieceType.PAWN, 0, 1)
        assert a != b
        assert a == a

    def test_from_char(self) -> None:
        knight = Piece.from_char("n", 1, 7)
        assert knight.color == Color.BLACK
        assert knight.piece_type == PieceType.KNIGHT
        assert knight.coord == Coord(1, 7)
        assert str(knight) == "n"
        assert knight.symbol == "♞"

    def test_from_char_invalid(self) -> None:
        with pytest.raises(ValueError, match="Invalid piece character"):
            Piece.from_char("x")


class TestMoveSet:
    def test_off_board_is_ignored(self) -> None:
        moves = MoveSet()
        assert not moves.add(Coord(8, 0))
        assert not moves.add(Coord(0, -1))
        assert len(moves) == 0

    def test_duplicates_are_ignored(self) -> None:
        moves = MoveSet([E4, E4])
        assert len(moves) == 1

    def test_capacity_bound(self) -> None:
        moves = MoveSet(Coord(f, r) for r in range(8) for f in range(8))
        assert len(moves) == MAX_MOVES == 64

    def test_discard_keeps_order(self) -> None:
        moves = MoveSet([A1, E4, H8])
        moves.discard(E4)
        moves.discard(Coord(3, 3))
        assert list(moves) == [A1, H8]
        assert E4 not in moves

    def test_equality_ignores_order(self) -> None:
        assert MoveSet([A1, H8]) == MoveSet([H8, A1])
        assert MoveSet([A1]) != MoveSet([H8])

    def test_copy_is_independent(self) -> None:
        moves = MoveSet([A1, H8])
        clone = moves.copy()
        clone.discard(A1)
        assert A1 in moves
