from typing import List, Tuple, Union
from . import context, ontology
from ..classes import segment


class CDSInferenceEngine:
    """Derives CDS features from the exons of a transcript and the extent of its polypeptide"""

    def __init__(self, session_context: context.SessionContext):
        self.context = session_context
        self.client = session_context.client
        self.printer = session_context.printer

    def infer(self, polypeptide, parent_segment: segment.Segment, transcript_id=None) -> List[segment.Feature]:
        """Creates one CDS feature per exon overlapping the polypeptide, clipped to the polypeptide bounds"""
        if transcript_id is None:
            transcript_id = self.find_transcript(polypeptide.feature_id)
        if transcript_id is None:
            self.printer.print("No transcript found for polypeptide " + str(polypeptide.feature_id))
            return []

        exons = self.find_exons(transcript_id)
        locations = [(exon.fmin, exon.fmax) for exon in exons
                     if exon.srcfeature_id == polypeptide.srcfeature_id
                     and (self.context.config.allow_obsolete or not exon.is_obsolete)]
        intervals = clip_intervals(locations, polypeptide.fmin, polypeptide.fmax)

        typename = segment.Typename("CDS", self.context.dbxref2source(polypeptide.dbxref_id))
        frame_name = parent_segment.name if parent_segment is not None else None
        features = []
        for fmin, fmax in intervals:
            features.append(segment.Feature.from_location(
                fmin, fmax, feature_id=polypeptide.feature_id, name=polypeptide.name,
                uniquename=polypeptide.uniquename, type=typename, strand=polypeptide.strand,
                phase=polypeptide.phase, score=polypeptide.score, ref=frame_name,
                srcfeature_id=polypeptide.srcfeature_id, parent_segment=parent_segment))
        return features

    def find_transcript(self, polypeptide_id: int) -> Union[None, int]:
        """Finds the transcript a polypeptide derives from"""
        relationship_ids = self.context.ontology.term_ids("derives_from", ontology.TermPolicy.ANY)
        if not relationship_ids:
            return None
        transcripts = self.client.fetch_all(self.client.query_parent_features(polypeptide_id, relationship_ids))
        if not transcripts:
            return None
        return transcripts[0].feature_id

    def find_exons(self, transcript_id: int) -> list:
        """Fetches the canonical locations of the exons of a transcript"""
        relationship_ids = self.context.ontology.term_ids("part_of", ontology.TermPolicy.ANY)
        exon_ids = self.context.ontology.term_ids("exon", ontology.TermPolicy.PREFER_PRIMARY)
        if not relationship_ids or not exon_ids:
            return []
        return self.client.fetch_all(self.client.query_child_locations(transcript_id, relationship_ids, exon_ids))


def clip_intervals(intervals: List[Tuple[int, int]], poly_min: int, poly_max: int) -> List[Tuple[int, int]]:
    """Clips half-open intervals to [poly_min, poly_max), dropping those outside; sorted by start"""
    clipped = []
    for fmin, fmax in sorted(intervals):
        if fmax <= poly_min or fmin >= poly_max:
            continue
        clipped.append((max(fmin, poly_min), min(fmax, poly_max)))
    return clipped
