import unittest

from solvers.cells import (
    Cell,
    cell_from_square,
    is_knight_move,
    new_board,
    square_of,
    tour_frames,
    visit_order_board,
)
from solvers.constants import BOARD_SIZE, KNIGHT_OFFSETS, UNVISITED


class TestSquareNames(unittest.TestCase):
    def test_corners_and_centre(self):
        self.assertEqual(cell_from_square("a8"), Cell(0, 0))
        self.assertEqual(cell_from_square("h8"), Cell(0, 7))
        self.assertEqual(cell_from_square("a1"), Cell(7, 0))
        self.assertEqual(cell_from_square("h1"), Cell(7, 7))
        self.assertEqual(cell_from_square("e4"), Cell(4, 4))

    def test_case_and_whitespace_ignored(self):
        self.assertEqual(cell_from_square(" E4 "), Cell(4, 4))

    def test_every_cell_has_a_unique_name(self):
        names = {square_of(Cell(r, c)) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)}
        self.assertEqual(len(names), BOARD_SIZE * BOARD_SIZE)
        for name in names:
            self.assertEqual(square_of(cell_from_square(name)), name)

    def test_invalid_names_rejected(self):
        for name in ("z9", "a0", "", "e44"):
            with self.subTest(name=name):
                with self.assertRaises(ValueError):
                    cell_from_square(name)

    def test_off_board_cell_rejected(self):
        with self.assertRaises(ValueError):
            square_of(Cell(8, 0))


class TestKnightMoves(unittest.TestCase):
    def test_matches_offsets_everywhere(self):
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                expected = {
                    Cell(r + dr, c + dc)
                    for dr, dc in KNIGHT_OFFSETS
                    if 0 <= r + dr < BOARD_SIZE and 0 <= c + dc < BOARD_SIZE
                }
                actual = {
                    Cell(r2, c2)
                    for r2 in range(BOARD_SIZE)
                    for c2 in range(BOARD_SIZE)
                    if is_knight_move(Cell(r, c), Cell(r2, c2))
                }
                self.assertEqual(actual, expected)

    def test_non_moves(self):
        self.assertFalse(is_knight_move(Cell(0, 0), Cell(1, 1)))
        self.assertFalse(is_knight_move(Cell(0, 0), Cell(0, 0)))
        self.assertFalse(is_knight_move(Cell(0, 0), Cell(2, 2)))


class TestVisitOrderBoard(unittest.TestCase):
    PATH = [Cell(0, 0), Cell(2, 1), Cell(4, 0)]

    def test_new_board_is_unvisited(self):
        board = new_board()
        self.assertEqual(len(board), BOARD_SIZE)
        self.assertTrue(all(v == UNVISITED for row in board for v in row))

    def test_partial_reveal(self):
        board = visit_order_board(self.PATH, steps=2)
        self.assertEqual(board[0][0], 0)
        self.assertEqual(board[2][1], 1)
        self.assertEqual(board[4][0], UNVISITED)

    def test_full_reveal(self):
        board = visit_order_board(self.PATH)
        self.assertEqual(board[4][0], 2)
        self.assertEqual(sum(1 for row in board for v in row if v != UNVISITED), 3)

    def test_frames_build_up_one_step_at_a_time(self):
        frames = list(tour_frames(self.PATH))
        self.assertEqual(len(frames), 3)
        self.assertEqual(frames[0][2][1], UNVISITED)
        self.assertEqual(frames[1][2][1], 1)
        self.assertEqual(frames[-1], visit_order_board(self.PATH))


if __name__ == "__main__":
    unittest.main()
