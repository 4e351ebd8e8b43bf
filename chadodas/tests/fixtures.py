import unittest.mock
from .. import config, utils
from ..io import iobase, context

# (cvterm_id, name, cv_id); cv 1 is the sequence ontology, cv 2 the relationship vocabulary
ontology_terms = [
    (10, "chromosome", 1), (11, "contig", 1), (12, "gene", 1), (13, "mRNA", 1), (14, "exon", 1),
    (15, "polypeptide", 1), (16, "CDS", 1), (20, "part_of", 2), (21, "derives_from", 2), (30, "exon", 3)
]


def term_rows(terms=None) -> list:
    return [utils.EmptyObject(cvterm_id=cvterm_id, name=name, cv_id=cv_id)
            for cvterm_id, name, cv_id in (terms or ontology_terms)]


def location_row(feature_id: int, name: str, type_id: int, fmin, fmax, srcfeature_id=10, strand=1, phase=None,
                 score=None, is_obsolete=False, seqlen=None, dbxref_id=None, uniquename=None, organism_id=1):
    """Creates a row as returned by ChadoClient.query_feature_locations"""
    return utils.EmptyObject(feature_id=feature_id, name=name, uniquename=uniquename or name, type_id=type_id,
                             organism_id=organism_id, is_obsolete=is_obsolete, seqlen=seqlen, score=score,
                             fmin=fmin, fmax=fmax, strand=strand, phase=phase, srcfeature_id=srcfeature_id,
                             dbxref_id=dbxref_id)


def frame_row(name: str, seqlen=None) -> utils.EmptyObject:
    """Creates a row as returned by ChadoClient.query_feature_name"""
    return utils.EmptyObject(name=name, uniquename=name, seqlen=seqlen)


def locations_by_id(rows: list):
    """Answers location queries with the rows of the requested features"""
    def respond(feature_ids, *args):
        return [row for row in rows if row.feature_id in feature_ids]
    return respond


def rows_by_key(rows: dict):
    """Answers queries taking a single ID with the rows registered for that ID"""
    def respond(key, *args):
        return rows.get(key, [])
    return respond


class QueryResponder:
    """Answers the fetch functions of a mocked client with canned rows, chosen by the name of the query
    builder. A canned response is either a list of rows or a function computing them from the query arguments."""

    def __init__(self, responses=None):
        self.responses = responses or {}

    def rows(self, name: str, *args, **kwargs) -> list:
        response = self.responses.get(name, [])
        if callable(response):
            response = response(*args, **kwargs)
        return list(response or [])

    def first(self, name: str, *args, **kwargs):
        rows = self.rows(name, *args, **kwargs)
        return rows[0] if rows else None


def wire_client(client, responses=None) -> QueryResponder:
    """Replaces the query builders and fetch functions of a client; query builders return their name and
    arguments, which the fetch functions pass on to the responder"""
    responder = QueryResponder(responses)
    for name in dir(iobase.ChadoClient):
        if name.startswith("query_") and name not in ["query_table", "query_all", "query_first"]:
            setattr(client, name, unittest.mock.Mock(
                side_effect=lambda *args, query_name=name, **kwargs: (query_name, args, kwargs)))
    client.fetch_all = unittest.mock.Mock(side_effect=lambda query: responder.rows(query[0], *query[1], **query[2]))
    client.fetch_first = unittest.mock.Mock(
        side_effect=lambda query: responder.first(query[0], *query[1], **query[2]))
    client.fetch_scalar = unittest.mock.Mock(
        side_effect=lambda query: responder.first(query[0], *query[1], **query[2]))
    client.execute_query = unittest.mock.Mock(side_effect=lambda statement: responder.rows("execute_query",
                                                                                           statement))
    client.query_first = unittest.mock.Mock(side_effect=lambda table, **kwargs: responder.first("query_first",
                                                                                                table, **kwargs))
    return responder


def prepare_context(session_context: context.SessionContext, organism_id=None, refclass_id=10,
                    all_feature_names=False, terms=None) -> context.SessionContext:
    """Puts a session context into the state it has after loading, without database access"""
    session_context.ontology.primary_cv_id = 1
    session_context.ontology.add_terms(term_rows(terms))
    session_context.ontology._loaded = True
    session_context._organism_id = organism_id
    session_context._refclass_id = refclass_id
    session_context._all_feature_names = all_feature_names
    session_context._loaded = True
    return session_context


def create_context(responses=None, adaptor_config=None, **kwargs) -> context.SessionContext:
    """Creates a loaded session context on a mocked client"""
    client = unittest.mock.Mock(spec=iobase.ChadoClient)
    client.responder = wire_client(client, responses)
    session_context = context.SessionContext(client, adaptor_config or config.AdaptorConfig())
    return prepare_context(session_context, **kwargs)
