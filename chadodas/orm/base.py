import sqlalchemy.orm
import sqlalchemy.schema

# Supplies the base for declarative mappings of the Chado tables read by the adaptor
PublicBase = sqlalchemy.orm.declarative_base(metadata=sqlalchemy.schema.MetaData(schema='public'))
