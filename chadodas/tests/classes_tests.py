import gc
import unittest
from ..classes import segment


class TestTypename(unittest.TestCase):
    """Tests the combination of feature type and GFF source"""

    def test_from_string(self):
        typename = segment.Typename.from_string("gene:EuPathDB")
        self.assertEqual(typename.method, "gene")
        self.assertEqual(typename.source, "EuPathDB")
        self.assertEqual(str(typename), "gene:EuPathDB")
        typename = segment.Typename.from_string("exon")
        self.assertEqual(typename.method, "exon")
        self.assertIsNone(typename.source)
        self.assertEqual(str(typename), "exon")

    def test_equality(self):
        self.assertEqual(segment.Typename("gene", "src"), segment.Typename.from_string("gene:src"))
        self.assertNotEqual(segment.Typename("gene"), segment.Typename("gene", "src"))
        self.assertEqual(len({segment.Typename("gene"), segment.Typename("gene")}), 1)


class TestFeature(unittest.TestCase):
    """Tests the coordinate conversions of features and segments"""

    def test_interbase_coordinates(self):
        # Zero-based half-open locations become one-based inclusive coordinates
        feature = segment.Feature.from_location(99, 200, feature_id=5, name="gene1", uniquename="PF3D7_0100100",
                                                type=segment.Typename("gene"))
        self.assertEqual(feature.start, 100)
        self.assertEqual(feature.end, 200)
        self.assertEqual(feature.fmin, 99)
        self.assertEqual(feature.fmax, 200)
        self.assertEqual(feature.length, 101)
        self.assertEqual(feature.method, "gene")
        self.assertIsNone(feature.source)
        self.assertEqual(feature.strand, 0)
        self.assertEqual(feature.display_name, "gene1")

    def test_display_name(self):
        feature = segment.Feature(1, None, "PF3D7_0100100", None, 1, 10)
        self.assertEqual(feature.display_name, "PF3D7_0100100")
        self.assertIsNone(feature.method)

    def test_segment_frame_coordinates(self):
        # A located landmark is expressed on its reference frame with an offset
        frame = segment.Segment("chr1", 10, 1, 5000)
        self.assertEqual(frame.srcfeature_id, 10)
        self.assertEqual(frame.frame_fmin, 0)
        self.assertEqual(frame.frame_fmax, 5000)
        self.assertEqual(frame.landmark_length, 5000)
        contig = segment.Segment("contig1", 20, 1, 300, srcfeature_id=10, offset=1000)
        self.assertEqual(contig.ref, "contig1")
        self.assertEqual(contig.frame_fmin, 1000)
        self.assertEqual(contig.frame_fmax, 1300)
        sub = contig.subsegment(11, 20)
        self.assertEqual(sub.frame_fmin, 1010)
        self.assertEqual(sub.frame_fmax, 1020)

    def test_subsegment_clamping(self):
        # Ranges are clamped to the bounds of the landmark
        frame = segment.Segment("chr1", 10, 1, 5000)
        sub = frame.subsegment(-20, 8000)
        self.assertEqual(sub.start, 1)
        self.assertEqual(sub.end, 5000)
        sub = frame.subsegment(100, None)
        self.assertEqual(sub.start, 100)
        self.assertEqual(sub.end, 5000)
        self.assertEqual(sub.srcfeature_id, 10)
        sub = frame.subsegment(6000, 7000)
        self.assertGreater(sub.start, sub.end)


class TestFeatureList(unittest.TestCase):
    """Tests the lifetime of segments referenced by features"""

    def test_parent_segment_is_weak(self):
        frame = segment.Segment("chr1", 10, 1, 5000)
        feature = segment.Feature.from_location(0, 10, feature_id=1, name="a", uniquename="a", type=None,
                                                parent_segment=frame)
        self.assertIs(feature.parent_segment, frame)
        del frame
        gc.collect()
        self.assertIsNone(feature.parent_segment)

    def test_feature_list_keeps_segments(self):
        features = segment.FeatureList()
        frame = segment.Segment("chr1", 10, 1, 5000)
        features.append(segment.Feature.from_location(0, 10, feature_id=1, name="a", uniquename="a", type=None,
                                                      parent_segment=frame))
        features.add_segment(frame)
        features.add_segment(frame)
        self.assertEqual(len(features.segments), 1)
        del frame
        gc.collect()
        self.assertIsNotNone(features[0].parent_segment)
        self.assertEqual(features[0].parent_segment.name, "chr1")

    def test_extend_from(self):
        first = segment.FeatureList(segments=[segment.Segment("chr1", 10, 1, 100)])
        second = segment.FeatureList([segment.Feature(1, "a", "a", None, 1, 5)],
                                     segments=[segment.Segment("chr2", 11, 1, 100)])
        first.extend_from(second)
        self.assertEqual(len(first), 1)
        self.assertEqual([landmark.name for landmark in first.segments], ["chr1", "chr2"])

    def test_feature_summary(self):
        frame = segment.Segment("chr1", 10, 1, 5000)
        summary = segment.FeatureSummary(frame, [1, 2, 3, 6], "gene")
        self.assertEqual(summary.score, 3)
        self.assertEqual(summary.bins, 4)
        self.assertEqual(summary.name, "gene")
        self.assertEqual(summary.method, "summary")
        self.assertEqual(summary.ref, "chr1")
        self.assertIs(summary.parent_segment, frame)


if __name__ == '__main__':
    unittest.main(verbosity=2, buffer=True)
