from __future__ import annotations

import unittest

from DPAlign.seq_alignment.costs import CalculationMode, CostModel
from DPAlign.seq_alignment.normalized import compute_normalized, shifted_costs
from DPAlign.seq_alignment.substitution import blosum62

COSTS = CostModel.linear(match=1.0, mismatch=-1.0, gap=-2.0)


class NormalizedLocalTests(unittest.TestCase):
    def test_identical_sequences_converge_in_two_rounds(self):
        result = compute_normalized("ACGT", "ACGT", COSTS, length=5.0)
        self.assertAlmostEqual(result.score, 4.0 / 13.0)
        self.assertEqual(result.raw_score, 4.0)
        self.assertEqual(result.alignment.aligned_a, "ACGT")
        self.assertEqual(result.alignment.aligned_b, "ACGT")
        self.assertEqual(len(result.iterations), 2)
        self.assertTrue(result.converged)
        self.assertAlmostEqual(result.iterations[0].shifted_score, 4.0)
        self.assertAlmostEqual(result.iterations[1].shifted_score, 20.0 / 13.0)

    def test_ratio_never_decreases(self):
        result = compute_normalized("GATTACAGATTACA", "TTTTACATTTTT", COSTS)
        self.assertTrue(result.iterations)
        ratios = [it.next_ratio for it in result.iterations]
        for earlier, later in zip(ratios, ratios[1:]):
            self.assertGreaterEqual(later, earlier - 1e-9)
        characters = len(result.alignment.ungapped_a) + len(result.alignment.ungapped_b)
        self.assertAlmostEqual(result.score, result.raw_score / (characters + 5.0))

    def test_no_alignment(self):
        result = compute_normalized("AAA", "CCC", COSTS)
        self.assertEqual(result.score, 0.0)
        self.assertIsNone(result.alignment)
        self.assertEqual(result.iterations, [])
        self.assertFalse(result.converged)

    def test_iteration_cap(self):
        result = compute_normalized("GATTACAGATTACA", "TTTTACATTTTT", COSTS, max_iterations=1)
        self.assertEqual(len(result.iterations), 1)

    def test_rejects_distance_mode_and_bad_length(self):
        with self.assertRaises(ValueError):
            compute_normalized("AC", "AC", COSTS.with_changes(mode=CalculationMode.DISTANCE))
        with self.assertRaises(ValueError):
            compute_normalized("AC", "AC", COSTS, length=0.0)

    def test_shifted_costs(self):
        shifted = shifted_costs(COSTS, 0.5)
        self.assertEqual(shifted.match, 0.0)
        self.assertEqual(shifted.mismatch, -2.0)
        self.assertEqual(shifted.deletion, -2.5)
        self.assertEqual(shifted.insertion, -2.5)
        self.assertIsNone(shifted.substitution)
        blosum = shifted_costs(COSTS.with_changes(substitution=blosum62), 0.5)
        self.assertEqual(blosum.score("W", "W"), 10.0)


if __name__ == "__main__":
    unittest.main()
