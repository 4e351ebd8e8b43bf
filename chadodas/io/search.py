import re
import enum
from typing import List
import sqlalchemy.sql.expression
from . import context, ontology
from .. import queries

# Explicit feature ID in a search string, e.g. 'id:1234'
feature_id_pattern = re.compile(r"^id:(\d+)")


class SearchOperation(enum.Enum):
    BY_NAME = "by_name"
    BY_ALIAS = "by_alias"


class FeatureSearchQuery:
    """Parameterised statement returning the IDs of features matching a name, or a direct feature ID"""

    def __init__(self, name: str, operation: SearchOperation, sql=None, parameters=None, feature_id=None,
                 wildcard=False, type_ids=None):
        self.name = name
        self.operation = operation
        self.sql = sql
        self.parameters = parameters or {}
        self.feature_id = feature_id
        self.wildcard = wildcard
        self.type_ids = type_ids

    def __repr__(self):
        return "<search.FeatureSearchQuery(name='{0}', operation={1}, feature_id={2}, wildcard={3})>"\
            .format(self.name, self.operation.value, self.feature_id, self.wildcard)

    @property
    def unknown_class(self) -> bool:
        """Whether a class filter was requested that matches no type, so that nothing can be found"""
        return self.type_ids is not None and not self.type_ids

    @property
    def direct(self) -> bool:
        """Whether the search string named a feature ID, bypassing the search"""
        return self.feature_id is not None

    def statement(self) -> sqlalchemy.sql.expression.TextClause:
        return queries.bind_parameters(self.sql, **self.parameters)


class FeatureSearchQueryBuilder:
    """Translates name and alias searches into SQL statements"""

    def __init__(self, session_context: context.SessionContext):
        self.context = session_context
        self.printer = session_context.printer

    def build(self, name: str, class_name=None, operation=SearchOperation.BY_NAME, fulltext=None,
              wildcard=None) -> FeatureSearchQuery:
        """Builds the statement searching for features of a given name"""

        # Explicit feature IDs bypass the search
        match = feature_id_pattern.match(name)
        if match:
            return FeatureSearchQuery(name, operation, feature_id=int(match.group(1)))

        if fulltext is None:
            fulltext = self.context.config.fulltext
        search_name = self.strip_source(name)
        if fulltext:
            search_name = prepare_fulltext_spaces(search_name)

        # Wildcard searches ignore the class filter
        if wildcard is None:
            wildcard = "*" in search_name
        if wildcard:
            class_name = None
            search_name = prepare_wildcards(search_name, fulltext)

        type_ids = None
        if class_name:
            type_ids = self.class_type_ids(class_name)

        sql = self._select_template(operation)
        alias_view = operation == SearchOperation.BY_ALIAS and self.context.use_all_feature_names
        if operation == SearchOperation.BY_NAME:
            sql = queries.set_name_condition(sql, "f.name", "f.searchable_name", fulltext, wildcard)
        elif alias_view:
            sql = queries.set_name_condition(sql, "afn.name", "afn.searchable_name", fulltext, wildcard)
        else:
            sql = queries.set_name_condition(sql, "s.synonym_sgml", "s.searchable_synonym_sgml", fulltext, wildcard)
        organism_id = self.context.organism_id
        sql = queries.set_organism_condition(sql, "afn.organism_id" if alias_view else "f.organism_id", organism_id)
        sql = queries.set_type_condition(sql, type_ids)

        parameters = {"name": search_name.lower()}
        if organism_id is not None:
            parameters["organism_id"] = organism_id
        if type_ids:
            parameters["type_ids"] = type_ids
        return FeatureSearchQuery(name, operation, sql=sql, parameters=parameters, wildcard=wildcard,
                                  type_ids=type_ids)

    def _select_template(self, operation: SearchOperation) -> str:
        """Loads the SQL template for a search operation"""
        if operation == SearchOperation.BY_NAME:
            return queries.load_query("search_feature_names")
        if self.context.use_all_feature_names:
            return queries.load_query("search_all_feature_names")
        return queries.load_query("search_synonyms")

    def strip_source(self, name: str) -> str:
        """Removes a 'source:' prefix from a name if the source is known"""
        parts = name.split(":")
        if len(parts) == 2 and self.context.source2dbxref(parts[0]) is not None:
            self.printer.print("Assuming that '" + name + "' has the form 'source:name'")
            return parts[1]
        return name

    def class_type_ids(self, class_name: str) -> List[int]:
        """Returns the type IDs matching a feature class; inferred CDS are found through their polypeptides"""
        if class_name == "CDS" and self.context.config.infer_cds:
            class_name = "polypeptide"
        ids = self.context.ontology.term_ids(class_name, ontology.TermPolicy.ANY)
        if not ids:
            self.printer.print("Unknown feature class '" + class_name + "'")
        return ids


def prepare_fulltext_spaces(name: str) -> str:
    """Joins the words of a full-text search string with ' & '"""
    name = re.sub(r"\s&\s", " ", name)
    return re.sub(r"\s", " & ", name)


def prepare_wildcards(name: str, fulltext: bool) -> str:
    """Escapes special characters and converts '*' wildcards into the SQL syntax"""
    name = name.replace("_", "\\_")
    if fulltext:
        name = re.sub(r"(?<=\s)\*", "", name)
        name = re.sub(r"^\*", "", name)
        name = re.sub(r"\*(?=\s|$)", ":*", name)
    else:
        name = name.replace("%", "\\%")
        name = name.replace("*", "%")
    return name
