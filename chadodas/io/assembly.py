from typing import List, Set, Union
from . import context, ontology, reference, cds
from .. import queries, config
from ..orm import sequence
from ..classes import segment


class HierarchicalFeatureAssembler:
    """Turns candidate feature IDs into features on their reference frames"""

    def __init__(self, session_context: context.SessionContext, resolver=None, cds_engine=None):
        self.context = session_context
        self.client = session_context.client
        self.printer = session_context.printer
        self.resolver = resolver or reference.ReferenceResolver(session_context)
        self.cds_engine = cds_engine or cds.CDSInferenceEngine(session_context)

    @property
    def mode(self) -> config.AssemblyMode:
        return self.context.config.assembly_mode

    def assemble(self, candidate_ids: List[int], class_name=None, hierarchy=False) -> segment.FeatureList:
        """Creates the features for a list of candidate IDs

        Candidates without location become segments if other features are located on them. Located
        candidates are grouped by reference frame; the segment of each frame is created once."""
        features = segment.FeatureList()
        if not candidate_ids:
            return features
        rows = self.fetch_locations(candidate_ids)

        # Candidates without canonical location
        located_ids = set(row.feature_id for row in rows)
        for feature_id in candidate_ids:
            if feature_id not in located_ids:
                landmark = self.unlocated_candidate(feature_id)
                if landmark is not None:
                    features.append(landmark)
                    features.add_segment(landmark)

        current_frame = None
        parent = None
        for row in rows:
            if row.is_obsolete and not self.context.config.allow_obsolete:
                continue

            if self.context.is_refclass(row.type_id):
                landmark = self.reference_feature(row)
                features.append(landmark)
                features.add_segment(landmark)
                continue

            if row.srcfeature_id != current_frame:
                current_frame = row.srcfeature_id
                parent = self.resolver.frame_segment(row.srcfeature_id)
                if parent is not None:
                    features.add_segment(parent)
            if parent is None or row.fmin is None or row.fmax is None:
                self.printer.print("Skipping feature " + str(row.feature_id) + ": reference frame "
                                   + str(row.srcfeature_id) + " missing")
                continue

            self.compose(row, parent, class_name, hierarchy, features)
        return features

    def fetch_locations(self, feature_ids: List[int]) -> list:
        """Fetches the canonical locations of features, one row per feature and location, ordered by reference frame"""
        rows = self.client.fetch_all(self.client.query_feature_locations(
            feature_ids, self.context.source_db_id, self.context.config.tripal))
        unique_rows = []
        seen = set()
        for row in rows:
            key = (row.feature_id, row.srcfeature_id, row.fmin, row.fmax)
            if key not in seen:
                seen.add(key)
                unique_rows.append(row)
        return unique_rows

    def unlocated_candidate(self, feature_id: int) -> Union[None, segment.Segment]:
        """Returns a candidate without location as segment if it is a reference frame"""
        entry = self.client.query_first(sequence.Feature, feature_id=feature_id)
        if entry is None:
            return None
        if entry.is_obsolete and not self.context.config.allow_obsolete:
            return None
        if not self.resolver.is_reference_frame(feature_id) and not self.context.is_refclass(entry.type_id):
            return None
        return self.resolver.resolve_feature(entry)

    def reference_feature(self, row) -> segment.Segment:
        """Creates the segment of a feature of the reference class"""
        length = row.seqlen
        if not length and row.fmin is not None and row.fmax is not None:
            length = row.fmax - row.fmin
        length = length or 0
        return segment.Segment(row.name or row.uniquename, row.feature_id, 1, length, srcfeature_id=row.feature_id,
                               offset=0, length=length, type=self.context.typename(row.type_id, row.dbxref_id),
                               uniquename=row.uniquename, score=row.score)

    def compose(self, row, parent: segment.Segment, class_name: Union[None, str], hierarchy: bool,
                features: segment.FeatureList) -> None:
        """Creates the feature(s) for a located row and appends them to a list"""
        if self.mode == config.AssemblyMode.INFER_CDS and class_name == "CDS" and self.is_polypeptide(row.type_id):
            features.extend(self.cds_engine.infer(row, parent))
            return
        feature = self.located_feature(row, parent, features)
        if hierarchy:
            self.add_sub_features(feature, parent, features, 1, {row.feature_id})
        features.append(feature)

    def located_feature(self, row, parent: segment.Segment, features: segment.FeatureList) -> segment.Feature:
        """Creates a feature from its location row; in recursive mapping mode, the location is replaced by the
        one on the top-most reference frame if there is one"""
        if self.mode == config.AssemblyMode.RECURSIVE_MAPPING:
            remapped = self.remap(row.feature_id)
            if remapped is not None:
                frame = parent
                if remapped.srcfeature_id is not None and remapped.srcfeature_id != parent.srcfeature_id:
                    frame = self.resolver.frame_segment(remapped.srcfeature_id) or parent
                    features.add_segment(frame)
                return self.feature_from_row(row, frame, remapped)
            self.printer.print("No remapped location for feature " + str(row.feature_id)
                               + "; keeping its canonical location")
        return self.feature_from_row(row, parent, row)

    def remap(self, feature_id: int):
        """Fetches the location of a feature on the top-most reference frame"""
        statement = queries.bind_parameters(queries.load_query("feature_remapping"), feature_id=feature_id)
        rows = self.client.execute_query(statement)
        if not rows:
            return None
        return rows[0]

    def feature_from_row(self, row, parent: segment.Segment, location) -> segment.Feature:
        return segment.Feature.from_location(
            location.fmin, location.fmax, feature_id=row.feature_id, name=row.name, uniquename=row.uniquename,
            type=self.context.typename(row.type_id, row.dbxref_id), strand=location.strand,
            phase=location.phase, score=row.score, ref=parent.name, srcfeature_id=parent.srcfeature_id,
            parent_segment=parent, is_obsolete=row.is_obsolete)

    def is_polypeptide(self, type_id: int) -> bool:
        return self.context.ontology.name_of(type_id) == "polypeptide"

    def max_depth(self) -> Union[None, int]:
        """Number of child levels fetched below a feature; None for no limit"""
        if self.mode == config.AssemblyMode.TWO_LEVEL:
            return 1
        return None

    def add_sub_features(self, feature: segment.Feature, parent: segment.Segment, features: segment.FeatureList,
                         depth: int, visited: Set[int]) -> None:
        """Attaches the features related to a feature by 'part_of' or 'derives_from', level by level"""
        limit = self.max_depth()
        if limit is not None and depth > limit:
            return
        relationship_ids = self.context.ontology.term_ids("part_of", ontology.TermPolicy.ANY) \
            + self.context.ontology.term_ids("derives_from", ontology.TermPolicy.ANY)
        if not relationship_ids:
            return
        children = self.client.fetch_all(self.client.query_child_features(feature.feature_id, relationship_ids))
        child_ids = [child.feature_id for child in children if child.feature_id not in visited]
        if not child_ids:
            return
        visited.update(child_ids)

        for row in self.fetch_locations(child_ids):
            if row.is_obsolete and not self.context.config.allow_obsolete:
                continue
            if row.srcfeature_id != parent.srcfeature_id or row.fmin is None or row.fmax is None:
                self.printer.print("Skipping sub-feature " + str(row.feature_id) + " on another reference frame")
                continue
            child = self.located_feature(row, parent, features)
            self.add_sub_features(child, parent, features, depth + 1, visited)
            feature.add_sub_feature(child)
            if self.mode == config.AssemblyMode.INFER_CDS and self.is_polypeptide(row.type_id):
                for cds_feature in self.cds_engine.infer(row, parent, transcript_id=feature.feature_id):
                    feature.add_sub_feature(cds_feature)
