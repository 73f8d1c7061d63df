from __future__ import annotations

import math
import unittest

from DPAlign.seq_alignment.costs import CalculationMode, CostModel
from DPAlign.seq_alignment.hirschberg import compute_hirschberg
from DPAlign.seq_alignment.linear import LinearGap
from DPAlign.seq_alignment.matrices import AlignmentContext, Cell
from DPAlign.seq_alignment.reconstruct import reconstruct_alignments, score_alignment
from DPAlign.seq_alignment.traceback import enumerate_tracebacks

DISTANCE = CostModel.linear(match=-1.0, mismatch=1.0, gap=2.0, mode=CalculationMode.DISTANCE)
SIMILARITY = CostModel.linear(match=1.0, mismatch=-1.0, gap=-2.0)


def needleman_wunsch(a, b, costs):
    strategy = LinearGap(local=False)
    ctx = AlignmentContext(a, b, costs)
    matrices = strategy.build(ctx)
    paths = enumerate_tracebacks(strategy, ctx, matrices).paths
    return strategy.score(ctx, matrices), reconstruct_alignments(ctx, paths)


class HirschbergTests(unittest.TestCase):
    def test_matches_first_full_matrix_alignment(self):
        result = compute_hirschberg("AATCG", "ACG", DISTANCE)
        score, alignments = needleman_wunsch("AATCG", "ACG", DISTANCE)
        self.assertEqual(result.alignment.aligned_a, "AATCG")
        self.assertEqual(result.alignment.aligned_b, "_A_CG")
        self.assertEqual(result.alignment.aligned_b, alignments[0].aligned_b)
        self.assertEqual(result.score, score)
        self.assertEqual(result.score, 1.0)
        self.assertFalse(result.truncated)

    def test_first_round(self):
        result = compute_hirschberg("AATCG", "ACG", DISTANCE)
        first = result.rounds[0]
        self.assertEqual((first.seq_a, first.seq_b, first.middle), ("AATCG", "ACG", 2))
        self.assertEqual(first.forward_row, [4.0, 1.0, 0.0, 2.0])
        self.assertEqual(first.mirrored_backward_row, [-1.0, 0.0, 3.0, 6.0])
        self.assertEqual(first.sum_row, [3.0, 1.0, 3.0, 8.0])
        self.assertEqual(first.split, 1)
        self.assertEqual(first.cell, Cell(1, 2))
        self.assertIn(Cell(1, 2), result.trace_cells)

    def test_similarity_mode(self):
        result = compute_hirschberg("AGTC", "ATC", SIMILARITY)
        self.assertEqual(result.alignment.aligned_b, "A_TC")
        self.assertEqual(result.alignment.markers, "* **")
        self.assertEqual(result.score, 1.0)

    def test_optimal_for_many_inputs(self):
        pairs = [
            ("GATTACA", "GCATGCU"),
            ("ACGTACGT", "TACGTA"),
            ("A", "CCCC"),
            ("AAAA", "A"),
            ("ACG", ""),
            ("", "ACG"),
            ("", ""),
        ]
        for costs in (SIMILARITY, DISTANCE):
            for a, b in pairs:
                result = compute_hirschberg(a, b, costs)
                score, _ = needleman_wunsch(a, b, costs)
                self.assertEqual(result.score, score)
                self.assertEqual(score_alignment(result.alignment, costs), score)
                self.assertEqual(result.alignment.ungapped_a, a)
                self.assertEqual(result.alignment.ungapped_b, b)

    def test_asymmetric_gap_costs(self):
        costs = CostModel(match=1.0, mismatch=-1.0, deletion=-1.0, insertion=-3.0)
        for a, b in [("AGTTC", "ATC"), ("ACG", "AACCGG")]:
            result = compute_hirschberg(a, b, costs)
            score, _ = needleman_wunsch(a, b, costs)
            self.assertEqual(result.score, score)
            self.assertEqual(score_alignment(result.alignment, costs), score)

    def test_trivial_inputs_have_no_rounds(self):
        self.assertEqual(compute_hirschberg("A", "ACG", SIMILARITY).rounds, [])
        empty = compute_hirschberg("", "", SIMILARITY)
        self.assertEqual(empty.alignment.length, 0)
        self.assertEqual(empty.score, 0.0)
        self.assertEqual(math.copysign(1.0, empty.score), 1.0)

    def test_rows_run_along_the_shorter_sequence(self):
        for a, b in [("AATCG", "ACG"), ("ACG", "AACCGG"), ("GATTACA", "GCATGCU")]:
            result = compute_hirschberg(a, b, SIMILARITY)
            self.assertTrue(result.rounds)
            for round_ in result.rounds:
                shorter = min(len(round_.seq_a), len(round_.seq_b))
                self.assertEqual(len(round_.forward_row), shorter + 1)
                self.assertEqual(len(round_.sum_row), shorter + 1)

    def test_longer_second_sequence_is_halved(self):
        result = compute_hirschberg("ACG", "AACCGG", SIMILARITY)
        first = result.rounds[0]
        self.assertEqual(first.halved, "B")
        self.assertEqual(first.middle, 3)
        self.assertEqual(first.cell, Cell(3, first.split))
        score, _ = needleman_wunsch("ACG", "AACCGG", SIMILARITY)
        self.assertEqual(result.score, score)
        self.assertEqual(score_alignment(result.alignment, SIMILARITY), score)
        self.assertEqual(compute_hirschberg("AATCG", "ACG", DISTANCE).rounds[0].halved, "A")


if __name__ == "__main__":
    unittest.main()
