from typing import List, Union
import sqlalchemy.sql.expression
from . import iobase, context
from .. import queries
from ..classes import segment


class ReferenceResolver:
    """Resolves landmark names to segments and builds the overlap queries on them"""

    def __init__(self, session_context: context.SessionContext):
        self.context = session_context
        self.client = session_context.client
        self.printer = session_context.printer

    def resolve(self, name: str, start=None, end=None) -> segment.Segment:
        """Finds the landmark with a given name and returns the requested range on it"""
        candidates = self.client.fetch_all(self.client.query_landmarks(name, self.context.organism_id))
        candidates.sort(key=lambda feature: (not self.context.is_refclass(feature.type_id),
                                             feature.uniquename != name, feature.feature_id))
        for candidate in candidates:
            landmark = self.landmark_segment(candidate, name)
            if landmark is not None:
                return self.restrict(landmark, start, end)
        raise iobase.UnknownLandmark("Landmark '" + name + "' not found")

    def resolve_feature(self, feature) -> Union[None, segment.Segment]:
        """Returns the full-length segment of a feature if it can serve as landmark"""
        return self.landmark_segment(feature, feature.name or feature.uniquename)

    def landmark_segment(self, feature, name: str) -> Union[None, segment.Segment]:
        """Creates the full-length segment of a landmark feature; a landmark without location is its own
        reference frame, a located landmark is expressed on the frame it is located on"""
        typename = segment.Typename(self.context.ontology.name_of(feature.type_id))
        location = self.client.fetch_first(self.client.query_primary_location(feature.feature_id))
        if location is None:
            length = feature.seqlen or self.client.fetch_scalar(self.client.query_frame_extent(feature.feature_id))
            if not length:
                self.printer.print("Feature " + str(feature.feature_id) + " has neither location nor length")
                return None
            return segment.Segment(name, feature.feature_id, 1, length, srcfeature_id=feature.feature_id, offset=0,
                                   length=length, type=typename, uniquename=feature.uniquename)
        if location.fmin is None or location.fmax is None or location.srcfeature_id is None:
            self.printer.print("Feature " + str(feature.feature_id) + " has an incomplete location")
            return None
        length = location.fmax - location.fmin
        return segment.Segment(name, feature.feature_id, 1, length, srcfeature_id=location.srcfeature_id,
                               offset=location.fmin, length=length, type=typename, uniquename=feature.uniquename,
                               strand=location.strand)

    @staticmethod
    def restrict(landmark: segment.Segment, start=None, end=None) -> segment.Segment:
        """Restricts a landmark to a range, clamped to its bounds"""
        restricted = landmark.subsegment(start, end)
        if restricted.start > restricted.end:
            raise iobase.UnknownLandmark("Range " + str(start) + ".." + str(end) + " lies outside landmark '"
                                         + landmark.name + "'")
        return restricted

    def frame_segment(self, srcfeature_id: int) -> Union[None, segment.Segment]:
        """Creates the full-length segment of a reference frame, or None if the frame does not exist"""
        frame = self.context.frame_info(srcfeature_id)
        if frame is None:
            return None
        length = frame.seqlen or self.client.fetch_scalar(self.client.query_frame_extent(srcfeature_id)) or 0
        return segment.Segment(frame.name or frame.uniquename, srcfeature_id, 1, length, srcfeature_id=srcfeature_id,
                               offset=0, length=length, uniquename=frame.uniquename)

    def is_reference_frame(self, feature_id: int) -> bool:
        """Checks whether any feature is located on a given feature"""
        return self.client.fetch_first(self.client.query_located_features(feature_id)) is not None

    def overlap_statement(self, landmark: segment.Segment, type_ids=None, attributes=None,
                          allow_obsolete=None) -> sqlalchemy.sql.expression.TextClause:
        """Builds the statement selecting features whose canonical location overlaps a segment"""
        if allow_obsolete is None:
            allow_obsolete = self.context.config.allow_obsolete
        organism_id = self.context.organism_id
        query = queries.load_query("overlapping_features")
        query = queries.set_location_source(query, self.context.config.srcfeatureslice)
        query = queries.set_organism_condition(query, "f.organism_id", organism_id)
        query = queries.set_type_condition(query, type_ids)
        query = queries.set_obsolete_condition(query, allow_obsolete)
        query, attribute_parameters = queries.set_attribute_condition(query, attributes or {})
        return queries.bind_parameters(query, srcfeature_id=landmark.srcfeature_id, fmin=landmark.frame_fmin,
                                       fmax=landmark.frame_fmax, organism_id=organism_id,
                                       type_ids=type_ids or None, **attribute_parameters)

    def overlapping_feature_ids(self, landmark: segment.Segment, type_ids=None, attributes=None) -> List[int]:
        """Returns the IDs of features overlapping a segment, ordered by start"""
        rows = self.client.execute_query(self.overlap_statement(landmark, type_ids, attributes))
        return [row.feature_id for row in rows]
