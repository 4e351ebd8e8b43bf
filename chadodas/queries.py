import sqlalchemy.sql.expression
from . import utils, dbutils

# SQL templates shipped with the package, by specifier
query_files = {
    "search_feature_names": "sql/search_feature_names.sql",
    "search_synonyms": "sql/search_synonyms.sql",
    "search_all_feature_names": "sql/search_all_feature_names.sql",
    "overlapping_features": "sql/overlapping_features.sql",
    "feature_remapping": "sql/feature_remapping.sql",
    "interval_stats": "sql/interval_stats.sql",
    "relation_kind": "sql/relation_kind.sql",
    "reference_type": "sql/reference_type.sql",
}


def load_query(specifier: str) -> str:
    """Loads the SQL template for a given specifier"""
    query = ""
    if specifier in query_files:
        query = utils.read_text(dbutils.resource_filename(query_files[specifier]))
    return query


def bind_parameters(query: str, **kwargs) -> sqlalchemy.sql.expression.TextClause:
    """Binds parameters to a given query; lists are bound as expanding parameters"""
    text_query = sqlalchemy.text(query)
    for key, value in kwargs.items():
        if value is not None:
            expanding = isinstance(value, (list, tuple))
            text_query = text_query.bindparams(sqlalchemy.bindparam(key, value=list(value) if expanding else value,
                                                                    expanding=expanding))
    return text_query


def set_condition(query: str, placeholder: str, condition: str) -> str:
    """Replaces a placeholder in a query with a condition, or with TRUE if there is none"""
    return query.replace(":" + placeholder, condition or "TRUE")


def set_name_condition(query: str, column: str, searchable_column: str, fulltext: bool, wildcard: bool) -> str:
    """Replaces a placeholder in a query with a condition matching a name column against the ':name' parameter"""
    if fulltext:
        condition = searchable_column + " @@ to_tsquery(:name)"
    elif wildcard:
        condition = "lower(" + column + ") LIKE :name"
    else:
        condition = "lower(" + column + ") = :name"
    return set_condition(query, "NAME_CONDITION", condition)


def set_organism_condition(query: str, column: str, organism_id) -> str:
    """Replaces a placeholder in a query with a condition restricting results to a certain organism"""
    condition = column + " = :organism_id" if organism_id is not None else None
    return set_condition(query, "ORGANISM_CONDITION", condition)


def set_type_condition(query: str, type_ids) -> str:
    """Replaces a placeholder in a query with a condition restricting results to features of given types"""
    condition = "f.type_id IN :type_ids" if type_ids else None
    return set_condition(query, "TYPE_CONDITION", condition)


def set_obsolete_condition(query: str, allow_obsolete: bool) -> str:
    """Replaces a placeholder in a query with a condition excluding obsolete features"""
    condition = None if allow_obsolete else "f.is_obsolete = false"
    return set_condition(query, "OBSOLETE_CONDITION", condition)


def set_attribute_condition(query: str, attributes: dict) -> (str, dict):
    """Replaces a placeholder in a query with conditions on feature properties; returns the modified query
    and the parameters to bind"""
    conditions = []
    parameters = {}
    for index, (tag, value) in enumerate(sorted(attributes.items())):
        alias = "fp" + str(index)
        conditions.append("EXISTS (SELECT 1 FROM featureprop {0} JOIN cvterm {0}t ON {0}.type_id = {0}t.cvterm_id "
                          "WHERE {0}.feature_id = f.feature_id AND {0}t.name = :attribute_tag_{1} "
                          "AND {0}.value = :attribute_value_{1})".format(alias, index))
        parameters["attribute_tag_" + str(index)] = tag
        parameters["attribute_value_" + str(index)] = value
    return set_condition(query, "ATTRIBUTE_CONDITION", " AND ".join(conditions)), parameters


def set_location_source(query: str, use_slice: bool) -> str:
    """Replaces a placeholder in a query with the source of feature locations"""
    if use_slice:
        source = "featureloc_slice(:srcfeature_id, :fmin, :fmax) fl"
    else:
        source = "featureloc fl"
    return query.replace(":LOCATION_SOURCE", source)
