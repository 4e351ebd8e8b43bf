import sqlalchemy.orm
from . import base, sequence

# Object-relational mappings for the CHADO Companalysis module; only the score columns are read


class Analysis(base.PublicBase):
    """Class for the CHADO 'analysis' table"""
    # Columns
    analysis_id = sqlalchemy.Column(sqlalchemy.BIGINT, nullable=False, primary_key=True, autoincrement=True)
    name = sqlalchemy.Column(sqlalchemy.VARCHAR(255), nullable=True)
    program = sqlalchemy.Column(sqlalchemy.VARCHAR(255), nullable=False)
    programversion = sqlalchemy.Column(sqlalchemy.VARCHAR(255), nullable=False)

    __tablename__ = "analysis"

    # Initialisation
    def __init__(self, program, programversion, name=None, analysis_id=None):
        for key, value in locals().items():
            if key != "self":
                setattr(self, key, value)

    # Representation
    def __repr__(self):
        return "<companalysis.Analysis(analysis_id={0}, name='{1}', program='{2}', programversion='{3}')>".format(
            self.analysis_id, self.name, self.program, self.programversion)


class AnalysisFeature(base.PublicBase):
    """Class for the CHADO 'analysisfeature' table"""
    # Columns
    analysisfeature_id = sqlalchemy.Column(sqlalchemy.BIGINT, nullable=False, primary_key=True, autoincrement=True)
    feature_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(sequence.Feature.feature_id),
                                   nullable=False)
    analysis_id = sqlalchemy.Column(sqlalchemy.BIGINT, sqlalchemy.ForeignKey(Analysis.analysis_id), nullable=False)
    rawscore = sqlalchemy.Column(sqlalchemy.FLOAT, nullable=True)
    significance = sqlalchemy.Column(sqlalchemy.FLOAT, nullable=True)

    __tablename__ = "analysisfeature"

    # Relationships
    feature = sqlalchemy.orm.relationship(sequence.Feature, foreign_keys=feature_id, backref="analysisfeature_feature")
    analysis = sqlalchemy.orm.relationship(Analysis, foreign_keys=analysis_id, backref="analysisfeature_analysis")

    # Initialisation
    def __init__(self, feature_id, analysis_id, rawscore=None, significance=None, analysisfeature_id=None):
        for key, value in locals().items():
            if key != "self":
                setattr(self, key, value)

    # Representation
    def __repr__(self):
        return "<companalysis.AnalysisFeature(analysisfeature_id={0}, feature_id={1}, analysis_id={2}, " \
               "significance={3})>".format(self.analysisfeature_id, self.feature_id, self.analysis_id,
                                           self.significance)
