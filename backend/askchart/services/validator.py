import logging
import re
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, text
from ..core.config import settings
from ..schemas.sql import ValidationResult

logger = logging.getLogger(__name__)

FORBIDDEN_KEYWORDS = (
    "DROP", "DELETE", "INSERT", "UPDATE", "ALTER",
    "CREATE", "TRUNCATE", "GRANT", "REVOKE", "EXEC",
    "EXECUTE", "DECLARE", "INTO OUTFILE", "INTO DUMPFILE",
)

# whole words only: created_at must not read as CREATE
_FORBIDDEN = [
    (kw, re.compile(r"\b" + r"\s+".join(kw.split()) + r"\b", re.IGNORECASE))
    for kw in FORBIDDEN_KEYWORDS
]

_TRAILING = re.compile(r"[;\s]+$")

def validate_sql(
    session: Session,
    sql: str,
    *,
    table: str = settings.TARGET_TABLE,
    require_table: bool = True,
) -> ValidationResult:
    """Run ``sql`` through the read-only gate.

    Checks run in order and the first failure is reported:
    statement shape, forbidden keywords, single statement, table
    reference, then an EXPLAIN against the live database. A rejection is
    returned, not raised, so callers can show the reason to the user.
    """
    stmt = (sql or "").strip()

    if not stmt.upper().startswith("SELECT"):
        return _reject(stmt, "Only SELECT queries are allowed")

    for keyword, pattern in _FORBIDDEN:
        if pattern.search(stmt):
            return _reject(stmt, f"Query contains forbidden keyword: {keyword}")

    body = _TRAILING.sub("", stmt)
    if ";" in body:
        return _reject(stmt, "Only a single SQL statement is allowed")

    if require_table and not re.search(rf"\b{re.escape(table)}\b", body, re.IGNORECASE):
        return _reject(stmt, f"Query must reference the {table} table")

    error = _dry_run(session, body)
    if error is not None:
        return _reject(stmt, error)

    return ValidationResult.ok(body)

def _dry_run(session: Session, sql: str):
    # EXPLAIN plans the statement without producing its rows
    try:
        session.exec(text(f"EXPLAIN {sql}")).fetchall()
    except SQLAlchemyError as e:
        session.rollback()
        orig = getattr(e, "orig", None)
        return str(orig).strip() if orig is not None and str(orig).strip() else "SQL syntax error"
    return None

def _reject(sql: str, error: str) -> ValidationResult:
    logger.warning("rejected SQL (%s): %s", error, sql)
    return ValidationResult.reject(sql, error)
