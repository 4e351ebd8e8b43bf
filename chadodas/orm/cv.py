import sqlalchemy.orm
from . import base, general

# Object-relational mappings for the CHADO Controlled Vocabulary (CV) module


class Cv(base.PublicBase):
    """Class for the CHADO 'cv' table"""
    # Columns
    cv_id = sqlalchemy.Column(sqlalchemy.BIGINT, nullable=False, primary_key=True, autoincrement=True)
    name = sqlalchemy.Column(sqlalchemy.VARCHAR(255), nullable=False)
    definition = sqlalchemy.Column(sqlalchemy.TEXT, nullable=True)

    __tablename__ = "cv"

    # Initialisation
    def __init__(self, name, definition=None, cv_id=None):
        for key, value in locals().items():
            if key != "self":
                setattr(self, key, value)

    # Representation
    def __repr__(self):
        return "<cv.Cv(cv_id={0}, name='{1}')>".format(self.cv_id, self.name)


class CvTerm(base.PublicBase):
    """Class for the CHADO 'cvterm' table"""
    # Columns
    cvterm_id = sqlalchemy.Column(sqlalchemy.BIGINT, nullable=False, primary_key=True, autoincrement=True)
    cv_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(Cv.cv_id), nullable=False)
    dbxref_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(general.DbxRef.dbxref_id), nullable=False)
    name = sqlalchemy.Column(sqlalchemy.VARCHAR(1024), nullable=False)
    is_obsolete = sqlalchemy.Column(sqlalchemy.INTEGER, nullable=False, server_default="0")
    is_relationshiptype = sqlalchemy.Column(sqlalchemy.INTEGER, nullable=False, server_default="0")

    __tablename__ = "cvterm"

    # Relationships
    cv = sqlalchemy.orm.relationship(Cv, backref="cvterm_cv")

    # Initialisation
    def __init__(self, cv_id, name, dbxref_id=None, is_obsolete=0, is_relationshiptype=0, cvterm_id=None):
        for key, value in locals().items():
            if key != "self":
                setattr(self, key, value)

    # Representation
    def __repr__(self):
        return "<cv.CvTerm(cvterm_id={0}, cv_id={1}, name='{2}', is_relationshiptype={3})>".format(
            self.cvterm_id, self.cv_id, self.name, self.is_relationshiptype)
