import logging
from typing import Any, Dict, List, Optional
from sqlmodel import Session
from ..core.errors import InputError, ValidationFailed
from ..schemas.chart import ChartType
from ..schemas.query import ChartResponse, GenerationRequest, SQLResponse
from .executor import check_chart_keys, run_readonly_sql
from .nl2sql import generate_chart, generate_sql
from .provider import LLMClient
from .schema import get_table_schema
from .validator import validate_sql

logger = logging.getLogger(__name__)


def _require_query(query: Optional[str]) -> str:
    if not query or not query.strip():
        raise InputError()
    return query.strip()


def run_chart_pipeline(
    session: Session,
    llm: LLMClient,
    query: Optional[str],
    chart_type: Optional[ChartType] = None,
) -> ChartResponse:
    query = _require_query(query)
    logger.info("chart request: %r (chart type %s)", query, chart_type.value if chart_type else "auto")

    schema = get_table_schema(session)
    request = GenerationRequest(
        natural_language_query=query,
        columns=schema,
        requested_chart_type=chart_type,
    )
    artifact = generate_chart(llm, request)

    validation = validate_sql(session, artifact.sql_query)
    if not validation.valid:
        raise ValidationFailed(validation)

    rows = run_readonly_sql(session, validation)
    config = check_chart_keys(artifact.chart_config, rows, requested=chart_type)

    return ChartResponse(
        sql_query=artifact.sql_query,
        chart_config=config,
        data=rows,
        natural_language_query=query,
    )


def run_sql_pipeline(session: Session, llm: LLMClient, query: Optional[str]) -> SQLResponse:
    query = _require_query(query)
    logger.info("sql request: %r", query)

    schema = get_table_schema(session)
    sql = generate_sql(llm, query, schema)

    validation = validate_sql(session, sql)
    if not validation.valid:
        raise ValidationFailed(validation)

    return SQLResponse(sql_query=sql, natural_language_query=query, columns=schema)


def run_raw_query(session: Session, sql: Optional[str]) -> List[Dict[str, Any]]:
    sql = _require_query(sql)
    validation = validate_sql(session, sql)
    if not validation.valid:
        raise ValidationFailed(validation)
    return run_readonly_sql(session, validation)
