import sqlalchemy.orm
from . import base

# Object-relational mappings for the CHADO General module


class Db(base.PublicBase):
    """Class for the CHADO 'db' table"""
    # Columns
    db_id = sqlalchemy.Column(sqlalchemy.BIGINT, nullable=False, primary_key=True, autoincrement=True)
    name = sqlalchemy.Column(sqlalchemy.VARCHAR(255), nullable=False)
    description = sqlalchemy.Column(sqlalchemy.VARCHAR(255), nullable=True)

    __tablename__ = "db"

    # Initialisation
    def __init__(self, name, description=None, db_id=None):
        for key, value in locals().items():
            if key != "self":
                setattr(self, key, value)

    # Representation
    def __repr__(self):
        return "<general.Db(db_id={0}, name='{1}')>".format(self.db_id, self.name)


class DbxRef(base.PublicBase):
    """Class for the CHADO 'dbxref' table; accessions in the 'GFF_source' db name feature sources"""
    # Columns
    dbxref_id = sqlalchemy.Column(sqlalchemy.BIGINT, nullable=False, primary_key=True, autoincrement=True)
    db_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(Db.db_id), nullable=False)
    accession = sqlalchemy.Column(sqlalchemy.VARCHAR(1024), nullable=False)
    version = sqlalchemy.Column(sqlalchemy.VARCHAR(255), nullable=False, server_default=sqlalchemy.text("''"))

    __tablename__ = "dbxref"

    # Relationships
    db = sqlalchemy.orm.relationship(Db, backref="dbxref_db")

    # Initialisation
    def __init__(self, db_id, accession, version="", dbxref_id=None):
        for key, value in locals().items():
            if key != "self":
                setattr(self, key, value)

    # Representation
    def __repr__(self):
        return "<general.DbxRef(dbxref_id={0}, db_id={1}, accession='{2}')>"\
            .format(self.dbxref_id, self.db_id, self.accession)
