import logging
from typing import List
from sqlalchemy import inspect
from sqlalchemy.exc import CompileError, NoSuchTableError, SQLAlchemyError
from sqlmodel import Session
from ..core.config import settings
from ..core.errors import SchemaError
from ..schemas.sql import SchemaColumn

logger = logging.getLogger(__name__)

def get_table_schema(session: Session, table: str = settings.TARGET_TABLE) -> List[SchemaColumn]:
    """Read column metadata for ``table`` from the database catalog.

    Columns come back in physical (ordinal) order, which is what the
    inspector reports for every dialect we target.
    """
    try:
        conn = session.connection()
        insp = inspect(conn)
        columns = insp.get_columns(table)
        pk = set(insp.get_pk_constraint(table).get("constrained_columns") or [])
    except NoSuchTableError as e:
        raise SchemaError(f"Table not found: {table}") from e
    except SQLAlchemyError as e:
        raise SchemaError(f"Could not read schema for {table}: {e}") from e

    if not columns:
        raise SchemaError(f"Table not found: {table}")

    schema = [
        SchemaColumn(
            name=col["name"],
            data_type=_type_name(col["type"], conn.dialect),
            is_primary_key=col["name"] in pk,
        )
        for col in columns
    ]
    logger.debug("schema for %s: %s", table, [c.name for c in schema])
    return schema

def _type_name(sa_type, dialect) -> str:
    # information_schema style: lower-case base name, no length/precision
    try:
        name = sa_type.compile(dialect=dialect)
    except CompileError:
        name = type(sa_type).__name__
    return name.split("(")[0].strip().lower()
