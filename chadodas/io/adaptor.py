from typing import Dict, List, Tuple, Union
from . import iobase, context, ontology, reference, search, assembly, cds, coverage
from .. import config
from ..classes.segment import Typename, Segment, Feature, FeatureList, FeatureSummary

# Types whose residues are reported as 'translation' attribute
protein_types = ["polypeptide", "protein"]


class ChadoAdaptor(iobase.ChadoClient):
    """Landmark/interval access to the sequence features of a Chado database"""

    def __init__(self, uri: str, adaptor_config=None, verbose=False, test_environment=False):
        """Constructor - connect to database and load the session context"""
        super().__init__(uri, verbose, test_environment)
        self.config = adaptor_config or config.AdaptorConfig()                     # type: config.AdaptorConfig
        for notice in self.config.notices:
            self.printer.print(notice)

        # Set up components
        self.context = context.SessionContext(self, self.config, self.printer)
        self.resolver = reference.ReferenceResolver(self.context)
        self.search_builder = search.FeatureSearchQueryBuilder(self.context)
        self.cds_engine = cds.CDSInferenceEngine(self.context)
        self.assembler = assembly.HierarchicalFeatureAssembler(self.context, self.resolver, self.cds_engine)
        self.estimator = coverage.CoverageDensityEstimator(self.context)

        # Load essentials
        if not self.test_environment:
            self.context.load()

    def segment(self, name: str, start=None, end=None) -> Union[None, Segment]:
        """Returns the segment of a landmark, or None if there is no such landmark"""
        try:
            return self.resolver.resolve(name, start, end)
        except iobase.UnknownLandmark as error:
            self.printer.print(str(error))
            return None

    def get_features_by_name(self, name: str, class_name=None, hierarchy=False) -> FeatureList:
        """Finds features by name"""
        return self._search(name, class_name, search.SearchOperation.BY_NAME, hierarchy)

    def get_features_by_alias(self, name: str, class_name=None, hierarchy=False) -> FeatureList:
        """Finds features by name or synonym"""
        return self._search(name, class_name, search.SearchOperation.BY_ALIAS, hierarchy)

    def _search(self, name: str, class_name: Union[None, str], operation: search.SearchOperation,
                hierarchy: bool) -> FeatureList:
        search_query = self.search_builder.build(name, class_name, operation)
        if search_query.direct:
            return self.get_features_by_feature_id(search_query.feature_id, hierarchy)
        if search_query.unknown_class:
            return FeatureList()
        rows = self.execute_query(search_query.statement())
        feature_ids = [row.feature_id for row in rows]
        self.printer.print("Search for '" + name + "' found " + str(len(feature_ids)) + " candidate(s)")
        if search_query.wildcard:
            class_name = None
        return self.assembler.assemble(feature_ids, class_name, hierarchy)

    def get_features_by_feature_id(self, feature_id: int, hierarchy=False) -> FeatureList:
        """Returns the feature(s) with a given ID; a feature located on several frames yields one per frame"""
        features = self.assembler.assemble([feature_id], hierarchy=hierarchy)
        if not features:
            self.printer.print("No feature with ID " + str(feature_id))
        return features

    def get_feature_by_id(self, feature_id: int) -> Union[None, Feature]:
        """Returns the first feature with a given ID"""
        features = self.get_features_by_feature_id(feature_id)
        if not features:
            return None
        return features[0]

    def features(self, types=None, feature_id=None, seq_id=None, start=None, end=None, attributes=None,
                 hierarchy=False) -> FeatureList:
        """Returns features by ID, by location on a landmark, or all features of given types"""
        if feature_id is not None:
            return self.get_features_by_feature_id(feature_id, hierarchy)
        if seq_id:
            landmark = self.segment(seq_id, start, end)
            if landmark is None:
                return FeatureList()
            return self.features_overlapping(landmark, types, attributes, hierarchy)
        if not types:
            self.printer.print("Neither types nor a landmark given; no features returned")
            return FeatureList()
        type_ids, class_name = self.type_filter(types)
        if not type_ids:
            return FeatureList()
        rows = self.fetch_all(self.query_features_by_type(type_ids, self.context.organism_id))
        features = self.assembler.assemble([row.feature_id for row in rows], class_name, hierarchy)
        return filter_by_source(features, types)

    def get_seq_stream(self, **kwargs):
        """Returns an iterator over the features selected as in 'features'"""
        return iter(self.features(**kwargs))

    def features_overlapping(self, landmark: Segment, types=None, attributes=None,
                             hierarchy=False) -> FeatureList:
        """Returns the features whose canonical location overlaps a segment, optionally restricted to types
        ('method' or 'method:source') and property values"""
        type_ids, class_name = None, None
        if types:
            type_ids, class_name = self.type_filter(types)
            if not type_ids:
                return FeatureList(segments=[landmark])
        feature_ids = self.resolver.overlapping_feature_ids(landmark, type_ids, attributes)
        features = self.assembler.assemble(feature_ids, class_name, hierarchy)
        features.add_segment(landmark)
        if types:
            features = filter_by_source(features, types)
        return features

    def type_filter(self, types: List[str]) -> Tuple[List[int], Union[None, str]]:
        """Resolves type names to IDs; CDS are found through their polypeptides if CDS are inferred"""
        type_ids = []
        class_name = None
        for typename in types:
            method = Typename.from_string(typename).method
            if method == "CDS" and self.config.infer_cds:
                method = "polypeptide"
                class_name = "CDS"
            for type_id in self.context.ontology.term_ids(method, ontology.TermPolicy.ANY):
                if type_id not in type_ids:
                    type_ids.append(type_id)
        return type_ids, class_name

    def coverage_array(self, seq_id: str, start=None, end=None, types=None, bins=None) -> Tuple[List[int], str]:
        """Returns the feature density over a landmark range in bins, and a label naming the types"""
        landmark = self.segment(seq_id, start, end)
        if landmark is None or not types:
            return [], ",".join(types or [])
        return self.estimator.estimate(landmark, types, bins)

    def feature_summary(self, seq_id: str, start=None, end=None, types=None,
                        bins=None) -> Union[None, FeatureSummary]:
        """Returns a feature summarising the density of features over a landmark range"""
        landmark = self.segment(seq_id, start, end)
        if landmark is None or not types:
            return None
        counts, label = self.estimator.estimate(landmark, types, bins)
        return FeatureSummary(landmark, counts, label)

    def attributes(self, uniquename: str, tag=None) -> Union[Dict[str, List[str]], List[str]]:
        """Returns the attributes of a feature: properties, synonyms ('Alias'), cross references ('Dbxref') and
        the translation of proteins. With a tag, returns the values of that attribute only."""
        try:
            attributes = self.feature_attributes(uniquename)
        except iobase.UnknownFeature as error:
            self.printer.print(str(error))
            attributes = {}
        if tag is not None:
            return attributes.get(tag, [])
        return attributes

    def feature_attributes(self, uniquename: str) -> Dict[str, List[str]]:
        entry = self.fetch_first(self.query_feature_by_uniquename(uniquename, self.context.organism_id))
        if entry is None:
            raise iobase.UnknownFeature("Feature '" + uniquename + "' not found")
        attributes = {}
        for row in self.fetch_all(self.query_feature_properties(entry.feature_id)):
            attributes.setdefault(row.name, []).append(row.value)
        synonyms = [row.name for row in self.fetch_all(self.query_feature_synonyms(entry.feature_id))]
        if synonyms:
            attributes["Alias"] = synonyms
        cross_references = [row.name + ":" + row.accession
                            for row in self.fetch_all(self.query_feature_cross_references(entry.feature_id))]
        if cross_references:
            attributes["Dbxref"] = cross_references
        if entry.residues and self.context.ontology.name_of(entry.type_id) in protein_types:
            attributes["translation"] = [entry.residues]
        return attributes

    def srcfeature2name(self, srcfeature_id: int) -> Union[None, str]:
        return self.context.srcfeature2name(srcfeature_id)


def filter_by_source(features: FeatureList, types: List[str]) -> FeatureList:
    """Removes features whose GFF source differs from the sources of all requested types"""
    typenames = [Typename.from_string(typename) for typename in types]
    if not any(typename.source for typename in typenames):
        return features
    filtered = FeatureList(segments=features.segments)
    for feature in features:
        for typename in typenames:
            if typename.source and feature.source != typename.source:
                continue
            if typename.method and typename.method != feature.method:
                continue
            filtered.append(feature)
            break
    return filtered
