from block_puzzle.game import SHAPE_CATALOG, Color, Shape
from block_puzzle.game.grid import new_board


def make_shape(name, color=Color.RED):
    return Shape(name=name, blocks=SHAPE_CATALOG[name], color=color)


def full_board(value=int(Color.BLUE)):
    board = new_board()
    board.fill(value)
    return board


def board_with_rows(*rows, value=int(Color.GREEN)):
    board = new_board()
    for r in rows:
        board[r, :] = value
    return board


def board_with_cols(*cols, value=int(Color.GREEN)):
    board = new_board()
    for c in cols:
        board[:, c] = value
    return board


def checkerboard():
    """No two horizontally or vertically adjacent cells are empty."""
    board = new_board()
    for r in range(board.shape[0]):
        for c in range(board.shape[1]):
            if (r + c) % 2 == 0:
                board[r, c] = int(Color.PURPLE)
    return board
