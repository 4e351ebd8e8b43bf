from typing import List, Union
import sqlalchemy.exc
import sqlalchemy.orm
import sqlalchemy.sql.expression
from .. import utils
from ..orm import general, cv, organism, sequence, companalysis


class AdaptorError(Exception):
    pass


class StorageFailure(AdaptorError):
    pass


class OntologyNotFound(AdaptorError):
    pass


class AmbiguousOrganism(AdaptorError):
    pass


class UnknownOrganism(AdaptorError):
    pass


class ReferenceClassError(AdaptorError):
    pass


class UnknownLandmark(AdaptorError):
    pass


class UnknownFeature(AdaptorError):
    pass


class ConfigurationError(AdaptorError):
    pass


class IOClient(object):
    """Base class for read access to a database"""

    def __init__(self, uri: str):
        """Constructor - connect to database"""
        self.uri = uri
        self.engine = sqlalchemy.create_engine(self.uri)                            # type: sqlalchemy.engine.Engine
        session_maker = sqlalchemy.orm.sessionmaker(bind=self.engine)
        self.session = session_maker()                                              # type: sqlalchemy.orm.Session

    def __del__(self):
        """Destructor - disconnect from database"""
        self.session.close()

    def query_table(self, table, **kwargs) -> sqlalchemy.orm.Query:
        """Creates a query on a database table from given keyword arguments"""
        query = self.session.query(table)
        if kwargs:
            query = query.filter_by(**kwargs)
        return query

    def query_all(self, table, **kwargs):
        """Helper function querying a table and returning all results"""
        return self.fetch_all(self.query_table(table, **kwargs))

    def query_first(self, table, **kwargs):
        """Helper function querying a table and returning the first result"""
        return self.fetch_first(self.query_table(table, **kwargs))

    @staticmethod
    def fetch_all(query: sqlalchemy.orm.Query) -> list:
        """Runs a query and returns all results; database errors are raised as StorageFailure"""
        try:
            return query.all()
        except sqlalchemy.exc.SQLAlchemyError as error:
            raise StorageFailure(str(error)) from error

    @staticmethod
    def fetch_first(query: sqlalchemy.orm.Query):
        """Runs a query and returns the first result, or None"""
        try:
            return query.first()
        except sqlalchemy.exc.SQLAlchemyError as error:
            raise StorageFailure(str(error)) from error

    @staticmethod
    def fetch_scalar(query: sqlalchemy.orm.Query):
        """Runs a query returning a single value"""
        try:
            return query.scalar()
        except sqlalchemy.exc.SQLAlchemyError as error:
            raise StorageFailure(str(error)) from error

    def execute_query(self, statement: sqlalchemy.sql.expression.TextClause) -> list:
        """Executes a raw SQL statement and returns all result rows"""
        try:
            return self.session.execute(statement).fetchall()
        except sqlalchemy.exc.SQLAlchemyError as error:
            raise StorageFailure(str(error)) from error


class ChadoClient(IOClient):
    """Class for read operations on Chado databases"""

    def __init__(self, uri: str, verbose=False, test_environment=False):
        """Constructor"""

        # Connect to database
        self.test_environment = test_environment
        if not self.test_environment:
            super().__init__(uri)
        else:
            self.uri = uri

        # Set up printer
        self.printer = utils.VerbosePrinter(verbose)

    def __del__(self):
        """Destructor"""

        # Disconnect from database
        if not self.test_environment:
            super().__del__()

    def query_cvs_by_name(self, names: List[str]) -> sqlalchemy.orm.Query:
        """Creates a query to select controlled vocabularies with given names"""
        return self.session.query(cv.Cv)\
            .filter(cv.Cv.name.in_(names))

    def query_cvterms_by_vocabulary(self, cv_names: List[str], cv_id: Union[None, int]) -> sqlalchemy.orm.Query:
        """Creates a query to select all terms of the named vocabularies and of the vocabulary with given ID"""
        condition = cv.Cv.name.in_(cv_names)
        if cv_id is not None:
            condition = sqlalchemy.or_(condition, cv.Cv.cv_id == cv_id)
        return self.session.query(cv.CvTerm.cvterm_id, cv.CvTerm.name, cv.CvTerm.cv_id)\
            .select_from(cv.CvTerm)\
            .join(cv.Cv, cv.CvTerm.cv)\
            .filter(condition)\
            .order_by(cv.CvTerm.cvterm_id)

    def query_cvterm_name(self, cvterm_id: int) -> sqlalchemy.orm.Query:
        """Creates a query to select the name of a term with given ID"""
        return self.session.query(cv.CvTerm.name)\
            .filter(cv.CvTerm.cvterm_id == cvterm_id)

    def query_organisms(self, **kwargs) -> sqlalchemy.orm.Query:
        """Creates a query to select organisms from given column values"""
        return self.query_table(organism.Organism, **kwargs)\
            .order_by(organism.Organism.organism_id)

    def query_feature_name(self, feature_id: int) -> sqlalchemy.orm.Query:
        """Creates a query to select name, uniquename and length of a feature with given ID"""
        return self.session.query(sequence.Feature.name, sequence.Feature.uniquename, sequence.Feature.seqlen)\
            .filter(sequence.Feature.feature_id == feature_id)

    def query_features_by_type(self, type_ids: List[int], organism_id: Union[None, int]) -> sqlalchemy.orm.Query:
        """Creates a query to select the IDs of all features of given types"""
        query = self.session.query(sequence.Feature.feature_id)\
            .filter(sequence.Feature.type_id.in_(type_ids))
        if organism_id is not None:
            query = query.filter(sequence.Feature.organism_id == organism_id)
        return query.order_by(sequence.Feature.feature_id)

    def query_landmarks(self, name: str, organism_id: Union[None, int]) -> sqlalchemy.orm.Query:
        """Creates a query to select features whose name or uniquename equals a landmark name"""
        query = self.session.query(sequence.Feature)\
            .filter(sqlalchemy.or_(sequence.Feature.uniquename == name, sequence.Feature.name == name))
        if organism_id is not None:
            query = query.filter(sequence.Feature.organism_id == organism_id)
        return query.order_by(sequence.Feature.feature_id)

    def query_primary_location(self, feature_id: int) -> sqlalchemy.orm.Query:
        """Creates a query to select the canonical (rank 0) location of a feature"""
        return self.session.query(sequence.FeatureLoc)\
            .filter(sequence.FeatureLoc.feature_id == feature_id)\
            .filter(sequence.FeatureLoc.rank == 0)\
            .order_by(sequence.FeatureLoc.locgroup)

    def query_located_features(self, srcfeature_id: int) -> sqlalchemy.orm.Query:
        """Creates a query to select the IDs of features located on a given reference frame"""
        return self.session.query(sequence.FeatureLoc.feature_id)\
            .filter(sequence.FeatureLoc.srcfeature_id == srcfeature_id)\
            .filter(sequence.FeatureLoc.rank == 0)

    def query_frame_extent(self, srcfeature_id: int) -> sqlalchemy.orm.Query:
        """Creates a query to select the largest end coordinate of all features located on a reference frame"""
        return self.session.query(sqlalchemy.func.max(sequence.FeatureLoc.fmax))\
            .filter(sequence.FeatureLoc.srcfeature_id == srcfeature_id)\
            .filter(sequence.FeatureLoc.rank == 0)

    def query_feature_locations(self, feature_ids: List[int], source_db_id: Union[None, int], tripal: bool
                                ) -> sqlalchemy.orm.Query:
        """Creates a query to select the canonical locations of given features, with score and GFF source,
        ordered by reference frame"""
        if tripal:
            score = sqlalchemy.null().label("score")
        else:
            score = companalysis.AnalysisFeature.significance.label("score")
        if source_db_id is not None:
            source = sequence.FeatureDbxRef.dbxref_id.label("dbxref_id")
        else:
            source = sqlalchemy.null().label("dbxref_id")
        query = self.session.query(sequence.Feature.feature_id, sequence.Feature.name, sequence.Feature.uniquename,
                                   sequence.Feature.type_id, sequence.Feature.organism_id,
                                   sequence.Feature.is_obsolete, sequence.Feature.seqlen, score,
                                   sequence.FeatureLoc.fmin, sequence.FeatureLoc.fmax, sequence.FeatureLoc.strand,
                                   sequence.FeatureLoc.phase, sequence.FeatureLoc.srcfeature_id, source)\
            .select_from(sequence.Feature)\
            .join(sequence.FeatureLoc, sequence.FeatureLoc.feature_id == sequence.Feature.feature_id)
        if not tripal:
            query = query.outerjoin(companalysis.AnalysisFeature,
                                    companalysis.AnalysisFeature.feature_id == sequence.Feature.feature_id)
        if source_db_id is not None:
            source_dbxrefs = self.session.query(general.DbxRef.dbxref_id)\
                .filter(general.DbxRef.db_id == source_db_id)
            query = query.outerjoin(sequence.FeatureDbxRef, sqlalchemy.and_(
                sequence.FeatureDbxRef.feature_id == sequence.Feature.feature_id,
                sequence.FeatureDbxRef.dbxref_id.in_(source_dbxrefs)))
        return query\
            .filter(sequence.Feature.feature_id.in_(feature_ids))\
            .filter(sequence.FeatureLoc.rank == 0)\
            .order_by(sequence.FeatureLoc.srcfeature_id, sequence.FeatureLoc.fmin, sequence.Feature.feature_id)

    def query_child_features(self, object_id: int, type_ids: List[int]) -> sqlalchemy.orm.Query:
        """Creates a query to select the IDs and types of features related to a given parent feature"""
        return self.session.query(sequence.Feature.feature_id, sequence.Feature.type_id)\
            .select_from(sequence.FeatureRelationship)\
            .join(sequence.Feature, sequence.FeatureRelationship.subject)\
            .filter(sequence.FeatureRelationship.object_id == object_id)\
            .filter(sequence.FeatureRelationship.type_id.in_(type_ids))\
            .order_by(sequence.Feature.feature_id)

    def query_parent_features(self, subject_id: int, type_ids: List[int]) -> sqlalchemy.orm.Query:
        """Creates a query to select the IDs and types of the parent feature(s) of a given feature"""
        return self.session.query(sequence.Feature.feature_id, sequence.Feature.type_id)\
            .select_from(sequence.FeatureRelationship)\
            .join(sequence.Feature, sequence.FeatureRelationship.object)\
            .filter(sequence.FeatureRelationship.subject_id == subject_id)\
            .filter(sequence.FeatureRelationship.type_id.in_(type_ids))\
            .order_by(sequence.Feature.feature_id)

    def query_child_locations(self, object_id: int, relationship_type_ids: List[int], child_type_ids: List[int]
                              ) -> sqlalchemy.orm.Query:
        """Creates a query to select the canonical locations of child features of given types"""
        return self.session.query(sequence.Feature.feature_id, sequence.Feature.is_obsolete,
                                  sequence.FeatureLoc.fmin, sequence.FeatureLoc.fmax,
                                  sequence.FeatureLoc.strand, sequence.FeatureLoc.phase,
                                  sequence.FeatureLoc.srcfeature_id)\
            .select_from(sequence.FeatureRelationship)\
            .join(sequence.Feature, sequence.FeatureRelationship.subject)\
            .join(sequence.FeatureLoc, sequence.FeatureLoc.feature_id == sequence.Feature.feature_id)\
            .filter(sequence.FeatureRelationship.object_id == object_id)\
            .filter(sequence.FeatureRelationship.type_id.in_(relationship_type_ids))\
            .filter(sequence.Feature.type_id.in_(child_type_ids))\
            .filter(sequence.FeatureLoc.rank == 0)\
            .order_by(sequence.FeatureLoc.fmin)

    def query_feature_by_uniquename(self, uniquename: str, organism_id: Union[None, int]) -> sqlalchemy.orm.Query:
        """Creates a query to select a feature by its uniquename"""
        query = self.session.query(sequence.Feature)\
            .filter(sequence.Feature.uniquename == uniquename)
        if organism_id is not None:
            query = query.filter(sequence.Feature.organism_id == organism_id)
        return query.order_by(sequence.Feature.feature_id)

    def query_feature_properties(self, feature_id: int) -> sqlalchemy.orm.Query:
        """Creates a query to select the properties of a feature together with the names of their types"""
        return self.session.query(cv.CvTerm.name, sequence.FeatureProp.value)\
            .select_from(sequence.FeatureProp)\
            .join(cv.CvTerm, sequence.FeatureProp.type)\
            .filter(sequence.FeatureProp.feature_id == feature_id)\
            .order_by(cv.CvTerm.name, sequence.FeatureProp.rank)

    def query_feature_synonyms(self, feature_id: int) -> sqlalchemy.orm.Query:
        """Creates a query to select the current synonyms of a feature"""
        return self.session.query(sequence.Synonym.name)\
            .select_from(sequence.FeatureSynonym)\
            .join(sequence.Synonym, sequence.FeatureSynonym.synonym)\
            .filter(sequence.FeatureSynonym.feature_id == feature_id)\
            .filter(sequence.FeatureSynonym.is_current == sqlalchemy.true())\
            .order_by(sequence.Synonym.name)

    def query_feature_cross_references(self, feature_id: int) -> sqlalchemy.orm.Query:
        """Creates a query to select the database cross references of a feature"""
        return self.session.query(general.Db.name, general.DbxRef.accession)\
            .select_from(sequence.FeatureDbxRef)\
            .join(general.DbxRef, sequence.FeatureDbxRef.dbxref)\
            .join(general.Db, general.DbxRef.db)\
            .filter(sequence.FeatureDbxRef.feature_id == feature_id)\
            .filter(sequence.FeatureDbxRef.is_current == sqlalchemy.true())\
            .order_by(general.Db.name, general.DbxRef.accession)

    def query_source_dbxrefs(self, db_name: str) -> sqlalchemy.orm.Query:
        """Creates a query to select the ID and accession of all cross references into a database"""
        return self.session.query(general.DbxRef.dbxref_id, general.DbxRef.accession, general.DbxRef.db_id)\
            .select_from(general.DbxRef)\
            .join(general.Db, general.DbxRef.db)\
            .filter(general.Db.name == db_name)\
            .order_by(general.DbxRef.dbxref_id)
