import enum
from typing import List, Dict, Union
from . import iobase
from .. import utils

# Vocabularies whose terms are indexed next to the primary sequence ontology
relationship_vocabularies = ["relationship", "relationship type", "Relationship Ontology", "autocreated"]

# Accepted names of the primary sequence ontology, in order of preference
primary_vocabularies = [
    ["SOFA", "Sequence Ontology Feature Annotation", "sofa.ontology"],
    ["Sequence Ontology", "sequence", "SO"],
]


class TermPolicy(enum.Enum):
    """How a caller picks among the IDs of homonymous terms"""
    PREFER_PRIMARY = "prefer_primary"
    ANY = "any"


class TermLookup:
    """Result of looking up a term name; one of SingleTerm, HomonymTerms or MissingTerm"""

    def __init__(self, name: str, term_ids=(), primary_ids=()):
        self.name = name
        self.term_ids = sorted(term_ids)
        self.primary_ids = sorted(primary_ids)

    def __repr__(self):
        return "<ontology.{0}(name='{1}', term_ids={2})>".format(type(self).__name__, self.name, self.term_ids)

    @property
    def found(self) -> bool:
        return bool(self.term_ids)

    def ids(self, policy: TermPolicy) -> List[int]:
        """Returns the IDs a caller following the given policy should use"""
        if policy == TermPolicy.PREFER_PRIMARY and self.primary_ids:
            return list(self.primary_ids)
        return list(self.term_ids)

    def first(self, policy: TermPolicy) -> Union[None, int]:
        """Returns a single ID, chosen deterministically as the smallest ID admitted by the policy"""
        ids = self.ids(policy)
        return ids[0] if ids else None


class SingleTerm(TermLookup):
    pass


class HomonymTerms(TermLookup):
    pass


class MissingTerm(TermLookup):
    pass


class OntologyTermIndex:
    """Bidirectional mapping between term names and IDs of the relationship vocabularies and the primary
    sequence ontology, loaded once per session"""

    def __init__(self, client: iobase.ChadoClient, printer=None):
        self.client = client
        self.printer = printer or utils.VerbosePrinter(False)
        self.primary_cv_id = None                                                   # type: Union[None, int]
        self._name_to_terms = {}                                                    # type: Dict[str, List]
        self._id_to_name = {}                                                       # type: Dict[int, str]
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self) -> None:
        """Loads all terms of the indexed vocabularies"""
        self.primary_cv_id = self._find_primary_vocabulary()
        rows = self.client.fetch_all(self.client.query_cvterms_by_vocabulary(relationship_vocabularies,
                                                                             self.primary_cv_id))
        self.add_terms(rows)
        self._loaded = True
        self.printer.print("Loaded " + str(len(self._id_to_name)) + " ontology terms")

    def add_terms(self, rows) -> None:
        """Adds (cvterm_id, name, cv_id) rows to the index"""
        for row in rows:
            self._id_to_name[row.cvterm_id] = row.name
            entries = self._name_to_terms.setdefault(row.name, [])
            if all(term_id != row.cvterm_id for term_id, _ in entries):
                entries.append((row.cvterm_id, row.cv_id))

    def _find_primary_vocabulary(self) -> int:
        """Returns the ID of the first accepted sequence ontology present in the database"""
        for names in primary_vocabularies:
            vocabularies = self.client.fetch_all(self.client.query_cvs_by_name(names))
            by_name = {vocabulary.name: vocabulary.cv_id for vocabulary in vocabularies}
            for name in names:
                if name in by_name:
                    self.printer.print("Using sequence ontology '" + name + "'")
                    return by_name[name]
        raise iobase.OntologyNotFound("No sequence ontology found; expected one of "
                                      + ", ".join(name for names in primary_vocabularies for name in names))

    def lookup(self, name: str) -> TermLookup:
        """Looks up the IDs of all terms with a given name"""
        entries = self._name_to_terms.get(name, [])
        term_ids = [term_id for term_id, _ in entries]
        primary_ids = [term_id for term_id, cv_id in entries if cv_id == self.primary_cv_id]
        if not entries:
            return MissingTerm(name)
        if len(entries) == 1:
            return SingleTerm(name, term_ids, primary_ids)
        return HomonymTerms(name, term_ids, primary_ids)

    def term_ids(self, name: str, policy: TermPolicy) -> List[int]:
        return self.lookup(name).ids(policy)

    def term_id(self, name: str, policy: TermPolicy) -> Union[None, int]:
        return self.lookup(name).first(policy)

    def name_of(self, cvterm_id: int) -> Union[None, str]:
        """Returns the name of a term; terms outside the indexed vocabularies are fetched and memoised"""
        if cvterm_id is None:
            return None
        if cvterm_id not in self._id_to_name:
            row = self.client.fetch_first(self.client.query_cvterm_name(cvterm_id))
            self._id_to_name[cvterm_id] = row.name if row else None
        return self._id_to_name[cvterm_id]
