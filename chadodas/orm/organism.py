import sqlalchemy.orm
from . import base

# Object-relational mappings for the CHADO Organism module


class Organism(base.PublicBase):
    """Class for the CHADO 'organism' table"""
    # Columns
    organism_id = sqlalchemy.Column(sqlalchemy.BIGINT, nullable=False, primary_key=True, autoincrement=True)
    abbreviation = sqlalchemy.Column(sqlalchemy.VARCHAR(255), nullable=True)
    genus = sqlalchemy.Column(sqlalchemy.VARCHAR(255), nullable=False)
    species = sqlalchemy.Column(sqlalchemy.VARCHAR(255), nullable=False)
    common_name = sqlalchemy.Column(sqlalchemy.VARCHAR(255), nullable=True)

    __tablename__ = "organism"

    # Initialisation
    def __init__(self, genus, species, abbreviation=None, common_name=None, organism_id=None):
        for key, value in locals().items():
            if key != "self":
                setattr(self, key, value)

    # Representation
    def __repr__(self):
        return "<organism.Organism(organism_id={0}, abbreviation='{1}', genus='{2}', species='{3}', " \
               "common_name='{4}')>".format(self.organism_id, self.abbreviation, self.genus, self.species,
                                            self.common_name)
