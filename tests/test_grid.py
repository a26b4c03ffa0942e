import numpy as np
import pytest

from block_puzzle.game import SHAPE_CATALOG, Color, apply_placement, can_place, clear_completed_lines, new_board
from block_puzzle.game.grid import full_lines, preview_placement, valid_placements

from helpers import board_with_cols, board_with_rows, full_board, make_shape


@pytest.mark.parametrize("name", list(SHAPE_CATALOG))
def test_out_of_bounds_anchor_is_rejected(name):
    board = new_board()
    shape = make_shape(name)
    assert can_place(board, shape, 8 - shape.height, 8 - shape.width)
    assert not can_place(board, shape, 8 - shape.height + 1, 0)
    assert not can_place(board, shape, 0, 8 - shape.width + 1)
    assert not can_place(board, shape, -1, 0)
    assert not can_place(board, shape, 0, -1)


def test_overlap_is_rejected():
    board = new_board()
    board[3, 3] = int(Color.RED)
    assert not can_place(board, make_shape("dot"), 3, 3)
    assert not can_place(board, make_shape("square2"), 2, 2)
    assert can_place(board, make_shape("square2"), 4, 4)


def test_can_place_does_not_mutate_board():
    board = board_with_rows(2)
    before = board.copy()
    shape = make_shape("line3_v")
    first = can_place(board, shape, 1, 0)
    second = can_place(board, shape, 1, 0)
    assert first == second is False
    np.testing.assert_array_equal(board, before)


def test_apply_placement_returns_new_board():
    board = new_board()
    shape = make_shape("corner_tl", Color.ORANGE)
    placed = apply_placement(board, shape, 4, 5)
    assert placed is not board
    assert not board.any()
    assert placed[4, 5] == placed[4, 6] == placed[5, 5] == int(Color.ORANGE)
    assert np.count_nonzero(placed) == 3


def test_apply_illegal_placement_is_noop():
    board = full_board()
    before = board.copy()
    result = apply_placement(board, make_shape("dot"), 0, 0)
    assert result is board
    np.testing.assert_array_equal(result, before)


def test_single_row_clear():
    board = board_with_rows(0)
    board[5, 5] = int(Color.YELLOW)
    result = clear_completed_lines(board)
    assert result.cleared_lines == 1
    assert result.rows == (0,) and result.cols == ()
    assert not result.board[0].any()
    assert result.board[5, 5] == int(Color.YELLOW)
    assert np.count_nonzero(result.board) == 1
    assert result.cleared_positions == frozenset((0, c) for c in range(8))
    # input untouched
    assert board[0].all()


def test_row_and_column_intersection_counted_once():
    board = board_with_rows(0)
    board[:, 0] = int(Color.GREEN)
    result = clear_completed_lines(board)
    assert result.cleared_lines == 2
    assert len(result.cleared_positions) == 15
    assert (0, 0) in result.cleared_positions
    assert not result.board.any()


def test_no_complete_lines_gives_fresh_copy():
    board = new_board()
    board[1, 1:] = int(Color.RED)
    result = clear_completed_lines(board)
    assert result.cleared_lines == 0
    assert result.cleared_positions == frozenset()
    assert result.board is not board
    np.testing.assert_array_equal(result.board, board)


def test_full_board_clears_every_line():
    result = clear_completed_lines(full_board())
    assert result.cleared_lines == 16
    assert len(result.cleared_positions) == 64
    assert not result.board.any()


def test_full_lines_reports_columns():
    rows, cols = full_lines(board_with_cols(2, 6))
    assert rows == ()
    assert cols == (2, 6)


def test_valid_placements_on_empty_board():
    assert len(valid_placements(new_board(), make_shape("square2"))) == 49
    assert len(valid_placements(new_board(), make_shape("dot"))) == 64
    assert valid_placements(full_board(), make_shape("dot")) == []


def test_preview_keeps_only_in_bounds_cells():
    preview = preview_placement(new_board(), make_shape("line4_h"), 0, 6)
    assert preview.cells == ((0, 6), (0, 7))
    assert preview.valid is False

    preview = preview_placement(new_board(), make_shape("line4_h"), 0, 0)
    assert preview.valid is True
    assert len(preview.cells) == 4
