from typing import Dict, Union
from . import iobase, ontology
from .. import utils, queries, config
from ..classes import segment

# Name of the database holding the GFF 'source' column values as cross references
gff_source_db = "GFF_source"

# Value of the term property marking the default reference class
map_reference_type = "MapReferenceType"


class SessionContext:
    """Session-wide state shared by all components: ontology index, organism, reference class and the
    lazily loaded source tables"""

    def __init__(self, client: iobase.ChadoClient, adaptor_config: config.AdaptorConfig, printer=None):
        self.client = client
        self.config = adaptor_config
        self.printer = printer or utils.VerbosePrinter(False)
        self.ontology = ontology.OntologyTermIndex(client, self.printer)
        self._organism_id = None                                                    # type: Union[None, int]
        self._refclass_id = None                                                    # type: Union[None, int]
        self._loaded = False

        # Lazily populated
        self._source_db_id = None                                                   # type: Union[None, int]
        self._dbxref_to_source = None                                               # type: Union[None, Dict]
        self._source_to_dbxref = None                                               # type: Union[None, Dict]
        self._all_feature_names = None                                              # type: Union[None, bool]
        self._frames = {}                                                           # type: Dict[int, object]

    def load(self) -> 'SessionContext':
        """Loads the ontology index and resolves organism and reference class"""
        self.ontology.load()
        self._organism_id = self.resolve_organism(self.config.organism)
        self._refclass_id = self.resolve_reference_class(self.config.reference_class)
        self._loaded = True
        return self

    def _check_loaded(self) -> None:
        if not self._loaded:
            raise iobase.AdaptorError("Session context used before it was loaded")

    @property
    def organism_id(self) -> Union[None, int]:
        self._check_loaded()
        return self._organism_id

    @property
    def refclass_id(self) -> Union[None, int]:
        self._check_loaded()
        return self._refclass_id

    def resolve_organism(self, organism_name: Union[None, str]) -> Union[None, int]:
        """Finds the organism from a 'Genus species' string, a common name or an abbreviation"""
        if not organism_name:
            return None
        parts = organism_name.split(None, 1)
        if len(parts) == 2:
            rows = self.client.fetch_all(self.client.query_organisms(genus=parts[0], species=parts[1]))
            if len(rows) == 1:
                self.printer.print("Organism '" + organism_name + "' resolved by genus and species")
                return rows[0].organism_id
        for column in ["common_name", "abbreviation"]:
            rows = self.client.fetch_all(self.client.query_organisms(**{column: organism_name}))
            if len(rows) > 1:
                raise iobase.AmbiguousOrganism("Organism '" + organism_name + "' matches " + str(len(rows))
                                               + " organisms by " + column)
            if len(rows) == 1:
                self.printer.print("Organism '" + organism_name + "' resolved by " + column)
                return rows[0].organism_id
        raise iobase.UnknownOrganism("Organism '" + organism_name + "' not found")

    def resolve_reference_class(self, reference_class: Union[None, str]) -> Union[None, int]:
        """Finds the ID of the term typing top-level reference sequences"""
        if not reference_class:
            statement = queries.bind_parameters(queries.load_query("reference_type"), value=map_reference_type)
            rows = self.client.execute_query(statement)
            if not rows:
                return None
            self.printer.print("Default reference class is '" + str(self.ontology.name_of(rows[0].cvterm_id)) + "'")
            return rows[0].cvterm_id
        lookup = self.ontology.lookup(reference_class)
        if not lookup.found:
            raise iobase.ReferenceClassError("Reference class '" + reference_class + "' is not an ontology term")
        for type_id in lookup.ids(ontology.TermPolicy.PREFER_PRIMARY):
            if self.client.fetch_first(self.client.query_features_by_type([type_id], self._organism_id)):
                return type_id
        raise iobase.ReferenceClassError("No feature of reference class '" + reference_class + "' found")

    def _load_sources(self) -> None:
        """Loads the cross references into the GFF source database"""
        rows = self.client.fetch_all(self.client.query_source_dbxrefs(gff_source_db))
        self._dbxref_to_source = {}
        self._source_to_dbxref = {}
        for row in rows:
            self._source_db_id = row.db_id
            self._dbxref_to_source[row.dbxref_id] = row.accession
            self._source_to_dbxref.setdefault(row.accession, row.dbxref_id)

    @property
    def source_db_id(self) -> Union[None, int]:
        if self._dbxref_to_source is None:
            self._load_sources()
        return self._source_db_id

    def dbxref2source(self, dbxref_id: Union[None, int]) -> Union[None, str]:
        """Returns the GFF source encoded by a cross reference"""
        if dbxref_id is None:
            return None
        if self._dbxref_to_source is None:
            self._load_sources()
        return self._dbxref_to_source.get(dbxref_id)

    def source2dbxref(self, source: str) -> Union[None, int]:
        """Returns the ID of the cross reference encoding a GFF source"""
        if self._source_to_dbxref is None:
            self._load_sources()
        return self._source_to_dbxref.get(source)

    @property
    def use_all_feature_names(self) -> bool:
        """Whether the denormalised 'all_feature_names' table or view exists"""
        if self._all_feature_names is None:
            statement = queries.bind_parameters(queries.load_query("relation_kind"), relname="all_feature_names")
            rows = self.client.execute_query(statement)
            self._all_feature_names = bool(rows) and rows[0].relkind in ["r", "v", "m"]
            self.printer.print("Alias search uses all_feature_names: " + str(self._all_feature_names))
        return self._all_feature_names

    def frame_info(self, srcfeature_id: int):
        """Returns name, uniquename and length of a reference frame, or None if there is no such feature"""
        if srcfeature_id not in self._frames:
            self._frames[srcfeature_id] = self.client.fetch_first(self.client.query_feature_name(srcfeature_id))
        return self._frames[srcfeature_id]

    def srcfeature2name(self, srcfeature_id: int) -> Union[None, str]:
        """Returns the name of a reference frame"""
        row = self.frame_info(srcfeature_id)
        if row is None:
            return None
        return row.name or row.uniquename

    def typename(self, type_id: int, dbxref_id=None) -> segment.Typename:
        """Combines a type name and a GFF source"""
        return segment.Typename(self.ontology.name_of(type_id), self.dbxref2source(dbxref_id))

    def is_refclass(self, type_id: int) -> bool:
        return self.refclass_id is not None and type_id == self.refclass_id
