import sqlalchemy.orm
from . import base, general, cv, organism

# Object-relational mappings for the CHADO Sequence/Feature module


class Feature(base.PublicBase):
    """Class for the CHADO 'feature' table"""
    # Columns
    feature_id = sqlalchemy.Column(sqlalchemy.BIGINT, nullable=False, primary_key=True, autoincrement=True)
    dbxref_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(general.DbxRef.dbxref_id), nullable=True)
    organism_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(organism.Organism.organism_id),
                                    nullable=False)
    name = sqlalchemy.Column(sqlalchemy.VARCHAR(255), nullable=True)
    uniquename = sqlalchemy.Column(sqlalchemy.TEXT, nullable=False)
    residues = sqlalchemy.Column(sqlalchemy.TEXT, nullable=True)
    seqlen = sqlalchemy.Column(sqlalchemy.BIGINT, nullable=True)
    type_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(cv.CvTerm.cvterm_id), nullable=False)
    is_analysis = sqlalchemy.Column(sqlalchemy.BOOLEAN, nullable=False, server_default="False")
    is_obsolete = sqlalchemy.Column(sqlalchemy.BOOLEAN, nullable=False, server_default="False")

    __tablename__ = "feature"

    # Relationships
    organism = sqlalchemy.orm.relationship(organism.Organism, foreign_keys=organism_id, backref="feature_organism")
    type = sqlalchemy.orm.relationship(cv.CvTerm, foreign_keys=type_id, backref="feature_type")

    # Initialisation
    def __init__(self, organism_id, type_id, uniquename, name=None, residues=None, seqlen=None, is_analysis=False,
                 is_obsolete=False, dbxref_id=None, feature_id=None):
        for key, value in locals().items():
            if key != "self":
                setattr(self, key, value)

    # Representation
    def __repr__(self):
        return "<sequence.Feature(feature_id={0}, organism_id={1}, name='{2}', uniquename='{3}', seqlen={4}, " \
               "type_id={5}, is_obsolete={6})>".format(self.feature_id, self.organism_id, self.name, self.uniquename,
                                                       self.seqlen, self.type_id, self.is_obsolete)


class FeatureDbxRef(base.PublicBase):
    """Class for the CHADO 'feature_dbxref' table"""
    # Columns
    feature_dbxref_id = sqlalchemy.Column(sqlalchemy.BIGINT, nullable=False, primary_key=True, autoincrement=True)
    feature_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(Feature.feature_id), nullable=False)
    dbxref_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(general.DbxRef.dbxref_id), nullable=False)
    is_current = sqlalchemy.Column(sqlalchemy.BOOLEAN, nullable=False, server_default="True")

    __tablename__ = "feature_dbxref"

    # Relationships
    feature = sqlalchemy.orm.relationship(Feature, foreign_keys=feature_id, backref="feature_dbxref_feature")
    dbxref = sqlalchemy.orm.relationship(general.DbxRef, foreign_keys=dbxref_id, backref="feature_dbxref_dbxref")

    # Initialisation
    def __init__(self, feature_id, dbxref_id, is_current=True, feature_dbxref_id=None):
        for key, value in locals().items():
            if key != "self":
                setattr(self, key, value)

    # Representation
    def __repr__(self):
        return "<sequence.FeatureDbxRef(feature_dbxref_id={0}, feature_id={1}, dbxref_id={2})>".\
            format(self.feature_dbxref_id, self.feature_id, self.dbxref_id)


class FeatureRelationship(base.PublicBase):
    """Class for the CHADO 'feature_relationship' table; the subject is the child, the object the parent"""
    # Columns
    feature_relationship_id = sqlalchemy.Column(sqlalchemy.BIGINT, nullable=False, primary_key=True, autoincrement=True)
    subject_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(Feature.feature_id), nullable=False)
    object_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(Feature.feature_id), nullable=False)
    type_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(cv.CvTerm.cvterm_id), nullable=False)
    rank = sqlalchemy.Column(sqlalchemy.INTEGER, nullable=False, server_default="0")

    __tablename__ = "feature_relationship"

    # Relationships
    type = sqlalchemy.orm.relationship(cv.CvTerm, foreign_keys=type_id, backref="feature_relationship_type")
    subject = sqlalchemy.orm.relationship(Feature, foreign_keys=subject_id, backref="feature_relationship_subject")
    object = sqlalchemy.orm.relationship(Feature, foreign_keys=object_id, backref="feature_relationship_object")

    # Initialisation
    def __init__(self, subject_id, object_id, type_id, rank=0, feature_relationship_id=None):
        for key, value in locals().items():
            if key != "self":
                setattr(self, key, value)

    # Representation
    def __repr__(self):
        return "<sequence.FeatureRelationship(feature_relationship_id={0}, subject_id={1}, object_id={2}, " \
               "type_id={3}, rank={4})>".format(self.feature_relationship_id, self.subject_id, self.object_id,
                                                self.type_id, self.rank)


class Synonym(base.PublicBase):
    """Class for the CHADO 'synonym' table"""
    # Columns
    synonym_id = sqlalchemy.Column(sqlalchemy.BIGINT, nullable=False, primary_key=True, autoincrement=True)
    name = sqlalchemy.Column(sqlalchemy.VARCHAR(255), nullable=False)
    type_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(cv.CvTerm.cvterm_id), nullable=False)
    synonym_sgml = sqlalchemy.Column(sqlalchemy.VARCHAR(255), nullable=False)

    __tablename__ = "synonym"

    # Relationships
    type = sqlalchemy.orm.relationship(cv.CvTerm, foreign_keys=type_id, backref="synonym_type")

    # Initialisation
    def __init__(self, name, type_id, synonym_sgml, synonym_id=None):
        for key, value in locals().items():
            if key != "self":
                setattr(self, key, value)

    # Representation
    def __repr__(self):
        return "<sequence.Synonym(synonym_id={0}, name='{1}', type_id={2})>".\
            format(self.synonym_id, self.name, self.type_id)


class FeatureSynonym(base.PublicBase):
    """Class for the CHADO 'feature_synonym' table"""
    # Columns
    feature_synonym_id = sqlalchemy.Column(sqlalchemy.BIGINT, nullable=False, primary_key=True, autoincrement=True)
    synonym_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(Synonym.synonym_id), nullable=False)
    feature_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(Feature.feature_id), nullable=False)
    is_current = sqlalchemy.Column(sqlalchemy.BOOLEAN, nullable=False, server_default="True")

    __tablename__ = "feature_synonym"

    # Relationships
    synonym = sqlalchemy.orm.relationship(Synonym, foreign_keys=synonym_id, backref="feature_synonym_synonym")
    feature = sqlalchemy.orm.relationship(Feature, foreign_keys=feature_id, backref="feature_synonym_feature")

    # Initialisation
    def __init__(self, synonym_id, feature_id, is_current=True, feature_synonym_id=None):
        for key, value in locals().items():
            if key != "self":
                setattr(self, key, value)

    # Representation
    def __repr__(self):
        return "<sequence.FeatureSynonym(feature_synonym_id={0}, synonym_id={1}, feature_id={2})>".\
            format(self.feature_synonym_id, self.synonym_id, self.feature_id)


class FeatureLoc(base.PublicBase):
    """Class for the CHADO 'featureloc' table; fmin/fmax are zero-based and half-open"""
    # Columns
    featureloc_id = sqlalchemy.Column(sqlalchemy.BIGINT, nullable=False, primary_key=True, autoincrement=True)
    feature_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(Feature.feature_id), nullable=False)
    srcfeature_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(Feature.feature_id), nullable=True)
    fmin = sqlalchemy.Column(sqlalchemy.BIGINT, nullable=True)
    fmax = sqlalchemy.Column(sqlalchemy.BIGINT, nullable=True)
    strand = sqlalchemy.Column(sqlalchemy.SMALLINT, nullable=True)
    phase = sqlalchemy.Column(sqlalchemy.INTEGER, nullable=True)
    locgroup = sqlalchemy.Column(sqlalchemy.INTEGER, nullable=False, server_default="0")
    rank = sqlalchemy.Column(sqlalchemy.INTEGER, nullable=False, server_default="0")

    __tablename__ = "featureloc"

    # Relationships
    feature = sqlalchemy.orm.relationship(Feature, foreign_keys=feature_id, backref="featureloc_feature")
    srcfeature = sqlalchemy.orm.relationship(Feature, foreign_keys=srcfeature_id, backref="featureloc_srcfeature")

    # Initialisation
    def __init__(self, feature_id, srcfeature_id, fmin=None, fmax=None, strand=None, phase=None, locgroup=0, rank=0,
                 featureloc_id=None):
        for key, value in locals().items():
            if key != "self":
                setattr(self, key, value)

    # Representation
    def __repr__(self):
        return "<sequence.FeatureLoc(featureloc_id={0}, feature_id={1}, srcfeature_id={2}, fmin={3}, fmax={4}, " \
               "strand={5}, phase={6}, rank={7})>".format(self.featureloc_id, self.feature_id, self.srcfeature_id,
                                                          self.fmin, self.fmax, self.strand, self.phase, self.rank)


class FeatureProp(base.PublicBase):
    """Class for the CHADO 'featureprop' table"""
    # Columns
    featureprop_id = sqlalchemy.Column(sqlalchemy.BIGINT, nullable=False, primary_key=True, autoincrement=True)
    feature_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(Feature.feature_id), nullable=False)
    type_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(cv.CvTerm.cvterm_id), nullable=False)
    value = sqlalchemy.Column(sqlalchemy.TEXT, nullable=True)
    rank = sqlalchemy.Column(sqlalchemy.INTEGER, nullable=False, server_default="0")

    __tablename__ = "featureprop"

    # Relationships
    feature = sqlalchemy.orm.relationship(Feature, foreign_keys=feature_id, backref="featureprop_feature")
    type = sqlalchemy.orm.relationship(cv.CvTerm, foreign_keys=type_id, backref="featureprop_type")

    # Initialisation
    def __init__(self, feature_id, type_id, value=None, rank=0, featureprop_id=None):
        for key, val in locals().items():
            if key != "self":
                setattr(self, key, val)

    # Representation
    def __repr__(self):
        return "<sequence.FeatureProp(featureprop_id={0}, feature_id={1}, type_id={2}, value='{3}', rank={4})>".\
            format(self.featureprop_id, self.feature_id, self.type_id, self.value, self.rank)
