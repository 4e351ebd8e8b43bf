from typing import List, Union
import gffutils
from ..classes import segment


class GFFWriter(object):
    """Writes assembled features as GFF3 records"""

    def __init__(self, file_handle):
        self.file_handle = file_handle

    @staticmethod
    def back_convert_strand(strand: Union[None, int]) -> str:
        """Converts the strand from integer notation to string notation"""
        if strand is None:
            return "."
        elif strand > 0:
            return "+"
        elif strand < 0:
            return "-"
        else:
            return "."

    @staticmethod
    def back_convert_frame(phase: Union[None, int]) -> str:
        """Converts the frame from integer notation to string notation"""
        if phase is None:
            return "."
        else:
            return str(phase)

    @staticmethod
    def back_convert_score(score) -> str:
        if score is None:
            return "."
        return str(score)

    def write_header(self, segments: List[segment.Segment]) -> None:
        """Prints the header of a GFF file"""
        self.file_handle.write("##gff-version 3\n")
        for landmark in segments:
            self.file_handle.write("\t".join(["##sequence-region", landmark.name, str(landmark.start),
                                              str(landmark.end)]) + "\n")

    def create_gff_record(self, feature: segment.Feature, parent_id=None) -> gffutils.Feature:
        """Creates a GFF record from an assembled feature"""
        attributes = {}
        if feature.uniquename:
            attributes["ID"] = [feature.uniquename]
        if feature.name:
            attributes["Name"] = [feature.name]
        if parent_id:
            attributes["Parent"] = [parent_id]
        if feature.is_obsolete:
            attributes["isObsolete"] = ["true"]
        return gffutils.Feature(seqid=feature.ref or ".", source=feature.source or ".",
                                featuretype=feature.method or ".", start=feature.start, end=feature.end,
                                score=self.back_convert_score(feature.score),
                                strand=self.back_convert_strand(feature.strand),
                                frame=self.back_convert_frame(feature.phase), attributes=attributes)

    def write_feature(self, feature: segment.Feature, parent_id=None) -> None:
        """Prints the GFF record of a feature, followed by those of its sub-features"""
        self.file_handle.write(str(self.create_gff_record(feature, parent_id)) + "\n")
        for sub_feature in feature.sub_features:
            if sub_feature is not feature:
                self.write_feature(sub_feature, feature.uniquename)

    def write_features(self, features: segment.FeatureList) -> None:
        """Prints a header followed by the GFF records of all features"""
        self.write_header(features.segments)
        for feature in features:
            self.write_feature(feature)

    def write_summary(self, summary: segment.FeatureSummary) -> None:
        """Prints a density summary as GFF record, with the bin counts as 'coverage' attribute"""
        record = gffutils.Feature(seqid=summary.ref, source=".", featuretype="summary", start=summary.start,
                                  end=summary.end, score=self.back_convert_score(summary.score), strand=".",
                                  frame=".", attributes={"type": [summary.name],
                                                         "coverage": [str(count) for count in summary.coverage]})
        self.file_handle.write(str(record) + "\n")
