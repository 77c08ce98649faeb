import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, text
from ..core.errors import ExecutionError
from ..schemas.chart import ChartConfig, ChartType
from ..schemas.sql import ValidationResult

logger = logging.getLogger(__name__)

def run_readonly_sql(session: Session, validation: ValidationResult) -> List[Dict[str, Any]]:
    """Execute a statement the validator approved and return every row."""
    if not validation.valid:
        raise ExecutionError(f"refusing to run unvalidated SQL: {validation.error}")
    try:
        res = session.exec(text(validation.sql))
        # rows to list of dicts
        rows = [_plain(row) for row in res.mappings().all()]
    except SQLAlchemyError as e:
        session.rollback()
        raise ExecutionError(str(getattr(e, "orig", None) or e)) from e
    logger.info("query returned %d rows", len(rows))
    return rows

def _plain(row) -> Dict[str, Any]:
    # DECIMAL aggregates come back as Decimal; charts want numbers
    return {k: float(v) if isinstance(v, Decimal) else v for k, v in row.items()}

def check_chart_keys(
    config: ChartConfig,
    rows: List[Dict[str, Any]],
    requested: Optional[ChartType] = None,
) -> ChartConfig:
    """Make sure dataKey/categoryKey name columns of the actual result.

    With no rows there is nothing to check against. When a key is missing
    the config falls back to a table, unless the caller asked for a chart
    type explicitly; that choice is kept and only logged.
    """
    if not rows:
        return config
    columns = set(rows[0].keys())
    missing = [k for k in (config.data_key, config.category_key) if k and k not in columns]
    if not missing:
        return config
    if requested is not None:
        logger.warning("chart keys %s not in result columns %s; keeping requested %s",
                       missing, sorted(columns), requested.value)
        return config
    logger.warning("chart keys %s not in result columns %s; falling back to table",
                   missing, sorted(columns))
    return config.model_copy(update={"type": ChartType.TABLE})
