#!/usr/bin/env python3
"""
Tests for scoring weights validation and the TTL-cached store.
"""

import threading
import unittest
from unittest.mock import Mock

from core.exceptions import InvalidWeightsException
from core.scorer.weights import ScoringWeights, ScoringWeightsStore, validate_weights


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class InMemoryBackend:
    def __init__(self, data=None):
        self.data = data
        self.loads = 0
        self.saves = []

    def load(self):
        self.loads += 1
        return self.data

    def save(self, data):
        self.saves.append(data)
        self.data = data


class TestValidateWeights(unittest.TestCase):

    def test_defaults_are_valid(self):
        weights = ScoringWeights()
        self.assertEqual(
            (weights.motivation, weights.distance, weights.skill, weights.freshness),
            (0.40, 0.30, 0.20, 0.10)
        )
        self.assertEqual(weights.freshness_window_days, 60)

    def test_sum_within_tolerance_is_accepted(self):
        weights = validate_weights({'motivation': 0.404, 'distance': 0.3, 'skill': 0.2, 'freshness': 0.1})
        self.assertAlmostEqual(weights.motivation, 0.404)

    def test_sum_on_tolerance_boundary_is_accepted(self):
        high = validate_weights({'motivation': 0.405, 'distance': 0.3, 'skill': 0.2, 'freshness': 0.1})
        low = validate_weights({'motivation': 0.395, 'distance': 0.3, 'skill': 0.2, 'freshness': 0.1})
        self.assertAlmostEqual(high.motivation, 0.405)
        self.assertAlmostEqual(low.motivation, 0.395)

    def test_sum_just_past_tolerance_is_rejected(self):
        for motivation in (0.406, 0.394):
            with self.subTest(motivation=motivation):
                with self.assertRaises(InvalidWeightsException):
                    validate_weights({'motivation': motivation, 'distance': 0.3, 'skill': 0.2, 'freshness': 0.1})

    def test_sum_outside_tolerance_is_rejected(self):
        with self.assertRaises(InvalidWeightsException) as ctx:
            validate_weights({'motivation': 0.5, 'distance': 0.3, 'skill': 0.2, 'freshness': 0.1})
        self.assertIn("sum to 1.0", str(ctx.exception))

    def test_negative_weight_is_rejected(self):
        with self.assertRaises(InvalidWeightsException):
            validate_weights({'motivation': 0.8, 'distance': -0.1, 'skill': 0.2, 'freshness': 0.1})

    def test_thresholds_must_be_ordered(self):
        with self.assertRaises(InvalidWeightsException):
            validate_weights({'small_org_threshold': 50, 'large_org_threshold': 40})

    def test_unknown_field_is_rejected(self):
        with self.assertRaises(InvalidWeightsException):
            validate_weights({'popularity': 0.1})


class TestScoringWeightsStore(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.backend = InMemoryBackend({'motivation': 0.5, 'distance': 0.2, 'skill': 0.2, 'freshness': 0.1})
        self.store = ScoringWeightsStore(self.backend, ttl_seconds=60, clock=self.clock)

    def test_reads_are_cached_within_ttl(self):
        self.assertEqual(self.store.get().motivation, 0.5)
        self.clock.now += 59
        self.store.get()
        self.assertEqual(self.backend.loads, 1)

    def test_reload_after_ttl(self):
        self.store.get()
        self.backend.data = {'motivation': 0.4, 'distance': 0.3, 'skill': 0.2, 'freshness': 0.1}
        self.clock.now += 61
        self.assertEqual(self.store.get().motivation, 0.4)
        self.assertEqual(self.backend.loads, 2)

    def test_invalidate_forces_reload(self):
        self.store.get()
        self.store.invalidate()
        self.store.get()
        self.assertEqual(self.backend.loads, 2)

    def test_update_merges_persists_and_invalidates(self):
        self.store.get()
        weights = self.store.update(motivation=0.4, distance=0.3)
        self.assertEqual((weights.motivation, weights.distance, weights.skill), (0.4, 0.3, 0.2))
        self.assertEqual(self.backend.saves[-1]['motivation'], 0.4)
        self.assertEqual(self.store.get().distance, 0.3)

    def test_rejected_update_leaves_stored_weights_unchanged(self):
        before = self.store.get()
        with self.assertRaises(InvalidWeightsException):
            self.store.update(motivation=0.9)
        self.assertEqual(self.backend.saves, [])
        self.assertEqual(self.store.get(), before)

    def test_backend_failure_falls_back_to_defaults(self):
        backend = Mock()
        backend.load.side_effect = RuntimeError("db down")
        store = ScoringWeightsStore(backend, clock=self.clock)
        self.assertEqual(store.get(), ScoringWeights())

    def test_empty_backend_uses_configured_defaults(self):
        defaults = ScoringWeights(motivation=0.25, distance=0.25, skill=0.25, freshness=0.25)
        store = ScoringWeightsStore(InMemoryBackend(None), defaults=defaults, clock=self.clock)
        self.assertEqual(store.get(), defaults)

    def test_corrupt_stored_weights_fall_back_to_defaults(self):
        store = ScoringWeightsStore(InMemoryBackend({'motivation': "lots"}), clock=self.clock)
        self.assertEqual(store.get(), ScoringWeights())

    def test_concurrent_readers_see_a_valid_snapshot(self):
        seen = []

        def reader():
            for _ in range(200):
                w = self.store.get()
                seen.append(round(w.motivation + w.distance + w.skill + w.freshness, 3))

        def writer():
            for i in range(20):
                if i % 2:
                    self.store.update(motivation=0.5, distance=0.2)
                else:
                    self.store.update(motivation=0.4, distance=0.3)

        threads = [threading.Thread(target=reader) for _ in range(4)] + [threading.Thread(target=writer)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertTrue(all(total == 1.0 for total in seen))


if __name__ == '__main__':
    unittest.main()
