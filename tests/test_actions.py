import unittest

import numpy as np

from falling_tiles.game import Action, Float, apply_actions, new_board


class TestApplyActions(unittest.TestCase):
    def test_given_float_at_left_edge_when_moving_left_then_clamped_at_zero(self):
        board, float_, highlight = apply_actions(new_board(5, 5), Float(((0, 0),), x=0, y=0), [Action.LEFT])
        self.assertEqual(float_.x, 0)
        self.assertIsNone(highlight)

    def test_given_float_when_moving_right_then_spare_column_kept(self):
        float_ = Float(((0, 0), (1, 0)), x=2, y=0)
        _, moved, _ = apply_actions(new_board(5, 5), float_, [Action.RIGHT])
        self.assertEqual(moved.x, 3)
        _, moved, _ = apply_actions(new_board(5, 5), moved, [Action.RIGHT, Action.RIGHT])
        # width 5 - span 1 - 1
        self.assertEqual(moved.x, 3)

    def test_given_float_when_moving_then_board_unchanged(self):
        board = new_board(4, 4)
        next_board, _, highlight = apply_actions(board, Float(((0, 0),), x=1, y=0), [Action.LEFT, Action.RIGHT])
        np.testing.assert_array_equal(next_board, board)
        self.assertIsNone(highlight)

    def test_given_empty_board_when_dropping_then_cells_land_on_bottom_row(self):
        board = new_board(3, 3)
        next_board, float_, highlight = apply_actions(board, Float(((0, 0), (1, 0)), x=0, y=0), [Action.DROP])
        expected = np.zeros((3, 3), dtype=np.int8)
        expected[0][2] = 1
        expected[1][2] = 1
        np.testing.assert_array_equal(next_board, expected)
        np.testing.assert_array_equal(highlight, expected)
        self.assertIsNone(float_)
        self.assertEqual(int(board.sum()), 0)

    def test_given_drop_when_more_actions_follow_then_they_are_ignored(self):
        board = new_board(4, 4)
        next_board, float_, _ = apply_actions(
            board, Float(((0, 0),), x=2, y=0), [Action.DROP, Action.LEFT, Action.DROP]
        )
        self.assertIsNone(float_)
        self.assertEqual(int(next_board.sum()), 1)
        self.assertEqual(next_board[2, 3], 1)

    def test_given_actions_when_applied_then_fifo_order(self):
        board = new_board(4, 4)
        next_board, _, _ = apply_actions(board, Float(((0, 0),), x=2, y=0), [Action.LEFT, Action.DROP])
        self.assertEqual(next_board[1, 3], 1)
        self.assertEqual(next_board[2, 3], 0)

    def test_given_float_near_bottom_when_rotating_then_repositioned_inside_board(self):
        board = new_board(4, 8)
        float_ = Float(((0, 0), (1, 0), (2, 0)), x=1, y=7)
        _, rotated, _ = apply_actions(board, float_, [Action.ROTATE])
        self.assertEqual(set(rotated.group), {(0, 0), (0, 1), (0, 2)})
        self.assertEqual(rotated.x, 1)
        # height 8 - span 2 - 1
        self.assertEqual(rotated.y, 5)

    def test_given_float_near_right_edge_when_rotating_then_x_clamped(self):
        board = new_board(5, 8)
        float_ = Float(((0, 0), (0, 1), (0, 2)), x=3, y=0)
        _, rotated, _ = apply_actions(board, float_, [Action.ROTATE])
        self.assertEqual(rotated.width, 2)
        self.assertEqual(rotated.x, 2)

    def test_given_no_float_when_applying_then_nothing_changes(self):
        board = new_board(3, 3)
        next_board, float_, highlight = apply_actions(board, None, [Action.LEFT, Action.DROP])
        np.testing.assert_array_equal(next_board, board)
        self.assertIsNone(float_)
        self.assertIsNone(highlight)

    def test_given_game_over_board_when_applying_then_inputs_returned(self):
        board = new_board(3, 3, fill=lambda: 1)
        float_ = Float(((0, 0),), x=1, y=0)
        next_board, next_float, highlight = apply_actions(board, float_, [Action.DROP, Action.LEFT])
        self.assertIs(next_board, board)
        self.assertIs(next_float, float_)
        self.assertIsNone(highlight)

    def test_given_raw_int_action_when_applying_then_converted(self):
        _, float_, _ = apply_actions(new_board(5, 5), Float(((0, 0),), x=2, y=0), [0])
        self.assertEqual(float_.x, 1)

    def test_given_unknown_action_when_applying_then_value_error(self):
        with self.assertRaises(ValueError):
            apply_actions(new_board(5, 5), Float(((0, 0),), x=2, y=0), [9])


if __name__ == '__main__':
    unittest.main(verbosity=2)
