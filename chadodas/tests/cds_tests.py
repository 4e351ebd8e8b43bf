import unittest
from .. import config, utils
from ..io import cds
from ..classes import segment
from . import fixtures


def exon_row(feature_id: int, fmin: int, fmax: int, srcfeature_id=10, is_obsolete=False) -> utils.EmptyObject:
    """Creates a row as returned by ChadoClient.query_child_locations"""
    return utils.EmptyObject(feature_id=feature_id, is_obsolete=is_obsolete, fmin=fmin, fmax=fmax, strand=1,
                             phase=None, srcfeature_id=srcfeature_id)


class TestClipIntervals(unittest.TestCase):
    """Tests the clipping of exons to the extent of a polypeptide"""

    def test_clip(self):
        intervals = [(300, 450), (50, 150), (150, 300)]
        self.assertEqual(cds.clip_intervals(intervals, 100, 400), [(100, 150), (150, 300), (300, 400)])

    def test_outside(self):
        # Intervals that only touch the polypeptide are dropped
        self.assertEqual(cds.clip_intervals([(0, 100), (400, 500)], 100, 400), [])
        self.assertEqual(cds.clip_intervals([(0, 101)], 100, 400), [(100, 101)])
        self.assertEqual(cds.clip_intervals([], 100, 400), [])


class TestCDSInferenceEngine(unittest.TestCase):
    """Tests the inference of CDS features from exons and polypeptides"""

    def setUp(self):
        self.context = fixtures.create_context(adaptor_config=config.AdaptorConfig(infer_cds=True))
        self.client = self.context.client
        self.responder = self.client.responder
        self.engine = cds.CDSInferenceEngine(self.context)
        self.frame = segment.Segment("chr1", 10, 1, 5000)
        self.polypeptide = fixtures.location_row(4, "PF3D7_0100100.1:pep", 15, 100, 400, strand=-1, phase=0,
                                                 score=0.5)
        self.responder.responses["query_parent_features"] = fixtures.rows_by_key({
            4: [utils.EmptyObject(feature_id=2, type_id=13)]})
        self.responder.responses["query_child_locations"] = fixtures.rows_by_key({
            2: [exon_row(7, 300, 450), exon_row(5, 50, 150), exon_row(6, 150, 300), exon_row(8, 310, 320, 11),
                exon_row(9, 120, 130, is_obsolete=True)]})

    def test_infer(self):
        features = self.engine.infer(self.polypeptide, self.frame)
        self.assertEqual([(feature.start, feature.end) for feature in features], [(101, 150), (151, 300), (301, 400)])
        for feature in features:
            self.assertEqual(feature.feature_id, 4)
            self.assertEqual(feature.uniquename, "PF3D7_0100100.1:pep")
            self.assertEqual(feature.type, segment.Typename("CDS"))
            self.assertEqual(feature.strand, -1)
            self.assertEqual(feature.phase, 0)
            self.assertEqual(feature.score, 0.5)
            self.assertEqual(feature.ref, "chr1")
            self.assertIs(feature.parent_segment, self.frame)
        self.client.query_parent_features.assert_called_with(4, [21])
        self.client.query_child_locations.assert_called_with(2, [20], [14])

    def test_known_transcript(self):
        # Tests that a supplied transcript is not looked up again
        features = self.engine.infer(self.polypeptide, self.frame, transcript_id=2)
        self.assertEqual(len(features), 3)
        self.client.query_parent_features.assert_not_called()

    def test_obsolete_exons(self):
        # Tests that obsolete exons contribute if obsolete features are allowed
        self.context.config = config.AdaptorConfig(infer_cds=True, allow_obsolete=True)
        features = self.engine.infer(self.polypeptide, self.frame)
        self.assertEqual([(feature.start, feature.end) for feature in features],
                         [(101, 150), (121, 130), (151, 300), (301, 400)])

    def test_no_transcript(self):
        # Tests that a polypeptide without transcript yields no CDS
        self.responder.responses["query_parent_features"] = []
        self.assertEqual(self.engine.infer(self.polypeptide, self.frame), [])
        self.client.query_child_locations.assert_not_called()


if __name__ == '__main__':
    unittest.main(verbosity=2, buffer=True)
