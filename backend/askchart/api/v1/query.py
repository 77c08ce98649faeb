import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlmodel import Session
from ...core.errors import InputError, PipelineError, ValidationFailed
from ...db.session import get_session
from ...schemas.query import ChartRequest, ChartResponse, ErrorResponse, NLQuery, SQLResponse
from ...services.pipeline import run_chart_pipeline, run_sql_pipeline
from ...services.provider import LLMClient, get_llm_client

logger = logging.getLogger(__name__)

router = APIRouter()

def error_response(
    e: PipelineError,
    generic: str,
    invalid: str = "Generated SQL query is invalid",
    echo_sql: bool = False,
) -> JSONResponse:
    if isinstance(e, InputError):
        body = ErrorResponse(error=str(e))
    elif isinstance(e, ValidationFailed):
        body = ErrorResponse(
            error=invalid,
            details=e.result.error,
            generated_sql=e.sql if echo_sql else None,
        )
    else:
        # opaque to the caller, full detail in the server log
        logger.error("%s: %s", generic, e, exc_info=e)
        body = ErrorResponse(error=generic)
    return JSONResponse(
        status_code=e.status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )

@router.post("/generate-chart", response_model=ChartResponse,
             responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
def generate_chart(
    body: ChartRequest,
    session: Session = Depends(get_session),
    llm: LLMClient = Depends(get_llm_client),
):
    try:
        return run_chart_pipeline(session, llm, body.query, body.chart_type)
    except PipelineError as e:
        return error_response(e, "Failed to generate chart")

@router.post("/nl-to-sql", response_model=SQLResponse,
             responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
def nl_to_sql(
    body: NLQuery,
    session: Session = Depends(get_session),
    llm: LLMClient = Depends(get_llm_client),
):
    try:
        return run_sql_pipeline(session, llm, body.query)
    except PipelineError as e:
        return error_response(e, "Failed to convert natural language to SQL", echo_sql=True)
