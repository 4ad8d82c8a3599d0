#!/usr/bin/env python3
"""
Tests for cosine similarity and haversine distance.
"""

import unittest

from core.matching.vector_math import cosine_similarity, haversine_km, NEUTRAL_SIMILARITY


class TestCosineSimilarity(unittest.TestCase):

    def test_identical_direction_is_100(self):
        self.assertAlmostEqual(cosine_similarity([1, 2, 3], [2, 4, 6]), 100.0)

    def test_opposite_direction_is_0(self):
        self.assertAlmostEqual(cosine_similarity([1, 0], [-1, 0]), 0.0)

    def test_orthogonal_is_50(self):
        self.assertAlmostEqual(cosine_similarity([1, 0], [0, 1]), 50.0)

    def test_zero_vector_is_neutral(self):
        self.assertEqual(cosine_similarity([0, 0, 0], [1, 2, 3]), NEUTRAL_SIMILARITY)
        self.assertEqual(cosine_similarity([1, 2, 3], [0, 0, 0]), NEUTRAL_SIMILARITY)

    def test_mismatched_length_is_neutral(self):
        self.assertEqual(cosine_similarity([1, 2], [1, 2, 3]), 50.0)

    def test_empty_is_neutral(self):
        self.assertEqual(cosine_similarity([], []), 50.0)

    def test_commutative(self):
        pairs = [
            ([5, 4, 2, 2, 3, 3], [3, 3, 3, 3, 3, 3]),
            ([1, 5, 1, 5, 1, 5], [4, 2, 5, 1, 3, 2]),
            ([0.5, -2.0, 3.25], [7.0, 1.0, -1.0]),
        ]
        for a, b in pairs:
            self.assertEqual(cosine_similarity(a, b), cosine_similarity(b, a))

    def test_result_is_within_bounds(self):
        self.assertTrue(0.0 <= cosine_similarity([3, -1, 2], [-2, 4, 1]) <= 100.0)


class TestHaversine(unittest.TestCase):

    def test_same_point_is_zero(self):
        self.assertAlmostEqual(haversine_km(52.37, 4.89, 52.37, 4.89), 0.0)

    def test_amsterdam_to_utrecht(self):
        # ~35 km as the crow flies
        km = haversine_km(52.3676, 4.9041, 52.0907, 5.1214)
        self.assertGreater(km, 33)
        self.assertLess(km, 37)

    def test_symmetric(self):
        self.assertAlmostEqual(
            haversine_km(52.0, 4.0, 51.0, 5.0),
            haversine_km(51.0, 5.0, 52.0, 4.0)
        )


if __name__ == '__main__':
    unittest.main()
