import unittest

import numpy as np

from tetris_dojo_bot.ai.features import (
    SCALAR_FEATURES,
    extract_features,
    occupancy_from_cells,
    well_sum,
)


def grid_from_rows(*rows):
    return np.array([[ch == "#" for ch in row] for row in rows], dtype=np.bool_)


class TestFeatureExtractor(unittest.TestCase):
    def test_empty_glass_is_flat(self):
        fv = extract_features(np.zeros((18, 18), dtype=bool))
        self.assertEqual(fv.holes, 0)
        self.assertEqual(fv.wells, 0)
        self.assertEqual(fv.bumpiness, 0)
        self.assertEqual(fv.row_transitions, 0)
        self.assertEqual(fv.column_transitions, 0)
        self.assertEqual(fv.sum_height, 0)
        self.assertEqual(fv.max_height, 0)
        self.assertEqual(fv.relative_height, 0)
        self.assertEqual(fv.column_heights, (0,) * 18)

    def test_drop_metrics_pass_through(self):
        fv = extract_features(np.zeros((4, 4), dtype=bool), landing_height=3, eroded_cells=2, lines_removed=1)
        self.assertEqual((fv.landing_height, fv.eroded_cells, fv.lines_removed), (3, 2, 1))

    def test_single_cell_transitions_skip_edges(self):
        occ = grid_from_rows(
            "...",
            ".#.",
            "...",
        )
        fv = extract_features(occ)
        self.assertEqual(fv.row_transitions, 2)
        self.assertEqual(fv.column_transitions, 2)

    def test_heights_bumpiness_and_relative_height(self):
        occ = grid_from_rows(
            ".....",
            ".....",
            "#....",
            "#..#.",
            "##.#.",
        )
        fv = extract_features(occ)
        self.assertEqual(fv.column_heights, (3, 1, 0, 2, 0))
        self.assertEqual(fv.bumpiness, 2 + 1 + 2 + 2)
        self.assertEqual(fv.sum_height, 6)
        self.assertEqual(fv.max_height, 3)
        self.assertEqual(fv.relative_height, 3)

    def test_holes_and_hole_depth(self):
        occ = grid_from_rows(
            "....",
            "..#.",
            "....",
            "....",
            "..#.",
        )
        fv = extract_features(occ)
        self.assertEqual(fv.holes, 2)
        # holes at rows 2 and 3, top at row 1
        self.assertEqual(fv.hole_depth, 1 + 2)
        self.assertEqual(fv.rows_with_holes, 1)

    def test_rows_with_holes_counts_columns(self):
        occ = grid_from_rows(
            "#.#.",
            "....",
            "....",
            "#.#.",
        )
        fv = extract_features(occ)
        self.assertEqual(fv.holes, 4)
        self.assertEqual(fv.rows_with_holes, 2)

        # one column with holes on two rows counts once

        occ = grid_from_rows(
            "#...",
            "....",
            "....",
            "#...",
        )
        self.assertEqual(extract_features(occ).rows_with_holes, 1)

    def test_well_open_at_the_floor_is_not_counted(self):
        occ = grid_from_rows(
            ".....",
            ".....",
            "#.#..",
            "#.#..",
            "#.#..",
        )
        self.assertEqual(well_sum(occ), 0)
        self.assertEqual(extract_features(occ).wells, 0)

    def test_closed_well(self):
        occ = grid_from_rows(
            ".....",
            "#.#..",
            "#.#..",
            "#.#..",
            "###..",
        )
        self.assertEqual(well_sum(occ), 6)
        self.assertEqual(extract_features(occ).wells, 6)

    def test_only_closed_runs_add_up(self):
        occ = grid_from_rows(
            "#.#",
            "###",
            "#.#",
            "###",
            "#.#",
        )
        self.assertEqual(well_sum(occ), 1 + 1)

    def test_edge_columns_are_never_wells(self):
        occ = grid_from_rows(
            ".#",
            ".#",
        )
        self.assertEqual(well_sum(occ), 0)
        occ = grid_from_rows(
            ".#.",
            ".#.",
        )
        self.assertEqual(well_sum(occ), 0)

    def test_cell_above_column_top_raises_height_by_distance(self):
        occ = grid_from_rows(
            "......",
            "......",
            "......",
            "...#..",
            "......",
            ".#.#..",
        )
        before = extract_features(occ)
        occ[2, 1] = True
        after = extract_features(occ)
        self.assertEqual(after.column_heights[1] - before.column_heights[1], 5 - 2)
        for col in (0, 2, 3, 4, 5):
            self.assertEqual(after.column_heights[col], before.column_heights[col])
        self.assertGreaterEqual(after.holes, before.holes)
        # column 3 still has its hole
        self.assertEqual(before.holes, 1)

    def test_occupancy_from_cells(self):
        occ = occupancy_from_cells({(0, 2), (1, 1)}, 3)
        self.assertTrue(occ[2, 0])
        self.assertTrue(occ[1, 1])
        self.assertEqual(int(occ.sum()), 2)

    def test_scalar_features_exclude_height_map(self):
        self.assertNotIn("column_heights", SCALAR_FEATURES)
        self.assertIn("rows_with_holes", SCALAR_FEATURES)


if __name__ == "__main__":
    unittest.main()
