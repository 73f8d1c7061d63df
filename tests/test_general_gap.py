from __future__ import annotations

import unittest

from DPAlign.seq_alignment.affine import AffineGap
from DPAlign.seq_alignment.costs import CostModel
from DPAlign.seq_alignment.general_gap import GeneralGap
from DPAlign.seq_alignment.matrices import AlignmentContext, Cell
from DPAlign.seq_alignment.reconstruct import reconstruct_alignments, score_alignment
from DPAlign.seq_alignment.traceback import enumerate_tracebacks


class WatermanSmithBeyerTests(unittest.TestCase):
    def setUp(self):
        self.strategy = GeneralGap()

    def run_alignment(self, a, b, costs):
        ctx = AlignmentContext(a, b, costs)
        matrices = self.strategy.build(ctx)
        result = enumerate_tracebacks(self.strategy, ctx, matrices)
        return self.strategy.score(ctx, matrices), reconstruct_alignments(ctx, result.paths)

    def test_long_gap_placements(self):
        costs = CostModel.general(match=1.0, mismatch=0.0, base_cost=-4.0, enlargement=-1.0)
        score, alignments = self.run_alignment("TACGCAGA", "TCCGA", costs)
        self.assertEqual(score, -3.0)
        self.assertEqual(
            sorted(a.aligned_b for a in alignments),
            ["TCCG___A", "TCC___GA", "T___CCGA"],
        )
        for alignment in alignments:
            self.assertEqual(alignment.aligned_a, "TACGCAGA")
            self.assertEqual(score_alignment(alignment, costs, gap_model="general"), -3.0)

    def test_free_opening(self):
        costs = CostModel.general(match=1.0, mismatch=-1.0, base_cost=0.0, enlargement=-2.0)
        score, alignments = self.run_alignment("AATCG", "AACG", costs)
        self.assertEqual(score, 2.0)
        self.assertEqual([a.aligned_b for a in alignments], ["AA_CG"])

    def test_gap_at_either_end(self):
        costs = CostModel.general(match=1.0, mismatch=-1.0, base_cost=-3.0, enlargement=-1.0)
        score, alignments = self.run_alignment("CCGA", "CG", costs)
        self.assertEqual(score, -5.0)
        self.assertEqual(sorted(a.aligned_b for a in alignments), ["CG__", "C__G"])

        costs = CostModel.general(match=0.0, mismatch=-1.0, base_cost=-4.0, enlargement=-1.0)
        score, alignments = self.run_alignment("ACCT", "CC", costs)
        self.assertEqual(score, -7.0)
        self.assertEqual(sorted(a.aligned_b for a in alignments), ["CC__", "__CC"])

    def test_gap_runs_are_single_jumps(self):
        costs = CostModel.general(match=1.0, mismatch=-1.0, base_cost=-3.0, enlargement=-1.0)
        ctx = AlignmentContext("CCGA", "CG", costs)
        matrices = self.strategy.build(ctx)
        paths = enumerate_tracebacks(self.strategy, ctx, matrices).paths
        self.assertIn([Cell(2, 4), Cell(2, 2), Cell(1, 1), Cell(0, 0)], paths)

    def test_boundaries_follow_gap_function(self):
        costs = CostModel.general(base_cost=-3.0, enlargement=-1.0, gap_shape="quadratic")
        ctx = AlignmentContext("ACGT", "AC", costs)
        matrices = self.strategy.build(ctx)
        self.assertEqual(matrices.default.row(0), [0.0, -4.0, -7.0, -12.0, -19.0])
        self.assertEqual(matrices.default[2, 0], -7.0)

    def test_empty_inputs(self):
        costs = CostModel.general(base_cost=-3.0, enlargement=-1.0)
        score, alignments = self.run_alignment("", "", costs)
        self.assertEqual(score, 0.0)
        self.assertEqual(len(alignments), 1)
        self.assertEqual(alignments[0].length, 0)

        score, alignments = self.run_alignment("", "ACG", costs)
        self.assertEqual(score, costs.gap(3))
        self.assertEqual(score, -6.0)
        self.assertEqual([(a.aligned_a, a.aligned_b) for a in alignments], [("___", "ACG")])

        score, alignments = self.run_alignment("ACG", "", costs)
        self.assertEqual(score, -6.0)
        self.assertEqual([(a.aligned_a, a.aligned_b) for a in alignments], [("ACG", "___")])

    def test_affine_gap_function_agrees_with_gotoh(self):
        general = CostModel.general(match=0.0, mismatch=-1.0, base_cost=-3.0, enlargement=-1.0)
        gotoh = AffineGap(local=False)
        for a, b in [("TGGA", "GG"), ("TACGCAGA", "TCCGA"), ("GATTACA", "GCATGCU")]:
            ctx = AlignmentContext(a, b, general)
            self.assertEqual(
                self.strategy.score(ctx, self.strategy.build(ctx)),
                gotoh.score(ctx, gotoh.build(ctx)),
            )


if __name__ == "__main__":
    unittest.main()
