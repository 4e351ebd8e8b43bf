import unittest
from .. import config, utils
from ..io import iobase, coverage
from ..classes import segment
from . import fixtures

# Cumulative feature counts at the start of each summary bin
cumulative_counts = [0, 5, 5, 12, 20, 20, 21, 30, 34, 40, 41]


def interval_stats(counts: list, missing=()):
    """Answers interval statistics queries with the cumulative count of the requested bin"""
    def respond(statement):
        summary_bin = statement._bindparams["bin"].value
        if summary_bin in missing or summary_bin >= len(counts):
            return []
        return [utils.EmptyObject(bin=summary_bin, cum_count=counts[summary_bin])]
    return respond


class TestTypePattern(unittest.TestCase):

    def test_type_pattern(self):
        self.assertEqual(coverage.type_pattern("gene"), "gene:%")
        self.assertEqual(coverage.type_pattern("gene:EuPathDB"), "gene:EuPathDB")
        self.assertEqual(coverage.type_pattern(":EuPathDB"), "%:EuPathDB")


class TestCoverageDensityEstimator(unittest.TestCase):
    """Tests the estimation of feature densities from cumulative interval statistics"""

    def setUp(self):
        self.context = fixtures.create_context(adaptor_config=config.AdaptorConfig(summary_bin_size=1000,
                                                                                   default_bins=10))
        self.client = self.context.client
        self.responder = self.client.responder
        self.responder.responses["execute_query"] = interval_stats(cumulative_counts)
        self.estimator = coverage.CoverageDensityEstimator(self.context)
        self.landmark = segment.Segment("chr1", 10, 1, 10000)

    def test_summary_bins(self):
        self.assertEqual(self.estimator.summary_bins(1, 10000, 10), list(range(11)))
        self.assertEqual(self.estimator.summary_bins(1, 10000, 20), [index // 2 for index in range(21)])
        self.assertEqual(self.estimator.summary_bins(5001, 6000, 2), [5, 5, 6])

    def test_estimate(self):
        # Tests that the counts are the differences of cumulative counts and add up to the total
        counts, label = self.estimator.estimate(self.landmark, ["gene"])
        self.assertEqual(label, "gene")
        self.assertEqual(len(counts), 10)
        self.assertEqual(counts, [5, 0, 7, 8, 0, 1, 9, 4, 6, 1])
        self.assertEqual(sum(counts), cumulative_counts[10] - cumulative_counts[0])
        statement = self.client.execute_query.call_args[0][0]
        self.assertEqual(statement._bindparams["typeid"].value, "gene:%")
        self.assertEqual(statement._bindparams["srcfeature_id"].value, 10)

    def test_several_types(self):
        # Tests that the counts of several types are added up
        counts, label = self.estimator.estimate(self.landmark, ["gene", "pseudogene:EuPathDB"], bins=10)
        self.assertEqual(label, "gene,pseudogene:EuPathDB")
        self.assertEqual(sum(counts), 2 * 41)

    def test_cached_bins(self):
        # Tests that each summary bin is looked up once
        counts, _ = self.estimator.estimate(self.landmark, ["gene"], bins=20)
        self.assertEqual(len(counts), 20)
        self.assertEqual(self.client.execute_query.call_count, 11)
        self.assertEqual(sum(counts), 41)

    def test_missing_and_decreasing_counts(self):
        # Tests that missing rows and decreasing counts never yield negative densities
        self.responder.responses["execute_query"] = interval_stats([0, 5, 3, 12, 20, 20, 21, 30, 34, 40, 41],
                                                                   missing=[4])
        counts, _ = self.estimator.estimate(self.landmark, ["gene"])
        self.assertTrue(all(count >= 0 for count in counts))
        self.assertEqual(counts, [5, 0, 7, 0, 8, 1, 9, 4, 6, 1])
        self.assertEqual(sum(counts), 41)

    def test_invalid_bins(self):
        # Tests that the number of bins must be a positive integer
        for bins in [0, -3, 2.5, "10"]:
            with self.assertRaises(iobase.ConfigurationError):
                self.estimator.estimate(self.landmark, ["gene"], bins=bins)
        self.client.execute_query.assert_not_called()

    def test_range(self):
        # Tests that a segment is mapped to summary bins via its position on the reference frame
        contig = segment.Segment("contig1", 20, 1, 2000, srcfeature_id=10, offset=3000)
        counts, _ = self.estimator.estimate(contig, ["gene"], bins=2)
        self.assertEqual(counts, [cumulative_counts[4] - cumulative_counts[3],
                                  cumulative_counts[5] - cumulative_counts[4]])


if __name__ == '__main__':
    unittest.main(verbosity=2, buffer=True)
