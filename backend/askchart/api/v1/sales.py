from typing import Any, Dict, List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
from ...core.config import settings
from ...core.errors import ExecutionError, PipelineError
from ...db.crud import list_sales
from ...db.models import SalesRecord
from ...db.session import get_session
from ...schemas.query import ErrorResponse, RawQuery
from ...services.pipeline import run_raw_query
from .query import error_response

router = APIRouter()

@router.get("/sales", response_model=List[SalesRecord],
            responses={500: {"model": ErrorResponse}})
def preview(limit: int = Query(settings.PREVIEW_LIMIT, ge=1, le=100),
            session: Session = Depends(get_session)):
    try:
        return list_sales(session, limit=limit)
    except SQLAlchemyError as e:
        return error_response(ExecutionError(str(e)), "Failed to fetch sales")

@router.post("/sales", response_model=List[Dict[str, Any]],
             responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
def raw_query(body: RawQuery, session: Session = Depends(get_session)):
    try:
        return run_raw_query(session, body.query)
    except PipelineError as e:
        return error_response(e, "Failed to execute query", invalid="Query is invalid")
