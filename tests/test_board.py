import numpy as np

from tetrix.board import Board, HEIGHT, PIECE_VALUES, WIDTH
from tetrix.position import Position
from tetrix.tetromino import Tetromino, TetrominoType


def test_position_validity_matches_dimensions():
    board = Board()
    for x in range(-2, WIDTH + 2):
        for y in range(-2, HEIGHT + 2):
            expected = 0 <= x < WIDTH and 0 <= y < HEIGHT
            assert board.is_position_valid(Position(x, y)) == expected


def test_cells_off_board_are_not_empty():
    board = Board()
    assert board.is_cell_empty(Position(0, 0))
    assert not board.is_cell_empty(Position(-1, 0))
    assert not board.is_cell_empty(Position(0, HEIGHT))
    assert board.get_cell(Position(WIDTH, 0)) is None


def test_blocks_above_board_are_placeable_regardless_of_column():
    board = Board()
    far_left = Tetromino(TetrominoType.I, Position(-10, -1))
    assert all(b.y < 0 for b in far_left.absolute_blocks())
    assert board.can_place(far_left)


def test_can_place_rejects_walls_floor_and_occupied_cells():
    board = Board()
    assert not board.can_place(Tetromino(TetrominoType.I, Position(-1, 5)))
    assert not board.can_place(Tetromino(TetrominoType.I, Position(8, 5)))
    assert not board.can_place(Tetromino(TetrominoType.O, Position(4, 19)))
    board.grid[5, 4] = PIECE_VALUES[TetrominoType.S]
    assert not board.can_place(Tetromino(TetrominoType.O, Position(4, 4)))
    assert board.can_place(Tetromino(TetrominoType.O, Position(4, 6)))


def test_place_skips_blocks_above_board():
    board = Board()
    piece = Tetromino(TetrominoType.T, Position(4, 0))
    board.place(piece)
    assert int(np.count_nonzero(board.grid)) == 3
    for block in piece.absolute_blocks():
        if block.y >= 0:
            assert board.get_cell(block) is TetrominoType.T


def test_placed_piece_reads_back_its_type():
    board = Board()
    piece = Tetromino(TetrominoType.L, Position(2, 10), rotation=1)
    board.place(piece)
    assert [board.get_cell(b) for b in piece.absolute_blocks()] == [TetrominoType.L] * 4
    assert board.grid[10, 2] == PIECE_VALUES[TetrominoType.L]


def test_full_lines_are_reported_in_ascending_order():
    board = Board()
    board.grid[[17, 18, 19]] = PIECE_VALUES[TetrominoType.J]
    board.grid[18, 3] = 0
    assert board.full_lines() == [17, 19]


def test_clear_lines_keeps_row_order_and_height():
    board = Board()
    board.grid[[17, 19]] = PIECE_VALUES[TetrominoType.J]
    board.grid[18, 0] = PIECE_VALUES[TetrominoType.I]
    board.grid[16, 1] = PIECE_VALUES[TetrominoType.O]

    assert board.clear_lines() == 2
    assert board.grid.shape == (HEIGHT, WIDTH)
    assert board.get_cell(Position(0, 19)) is TetrominoType.I
    assert board.get_cell(Position(1, 18)) is TetrominoType.O
    assert int(np.count_nonzero(board.grid)) == 2
    assert not board.grid[:2].any()
    assert board.clear_lines() == 0


def test_clear_lines_without_full_rows_changes_nothing():
    board = Board()
    board.grid[19, :9] = PIECE_VALUES[TetrominoType.J]
    before = board.grid.copy()
    assert board.clear_lines() == 0
    assert np.array_equal(board.grid, before)


def test_all_cells_is_an_immutable_snapshot():
    board = Board()
    board.grid[19, 0] = PIECE_VALUES[TetrominoType.Z]
    cells = board.all_cells()
    assert len(cells) == HEIGHT
    assert all(len(row) == WIDTH for row in cells)
    assert cells[19][0] is TetrominoType.Z
    assert cells[0][0] is None
    board.grid[19, 0] = 0
    assert cells[19][0] is TetrominoType.Z


def test_place_ignores_blocks_past_the_walls():
    board = Board()
    board.place(Tetromino(TetrominoType.I, Position(8, 5)))
    assert [board.get_cell(Position(x, 5)) for x in (7, 8, 9)] == [TetrominoType.I] * 3
    assert int(np.count_nonzero(board.grid)) == 3
