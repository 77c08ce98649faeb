import logging
from typing import Sequence
from pydantic import ValidationError
from ..core.config import settings
from ..core.errors import GenerationError
from ..schemas.chart import GeneratedArtifact
from ..schemas.query import GenerationRequest
from ..schemas.sql import SchemaColumn
from .normalize import normalize_sql, strip_fences
from .prompts import build_chart_prompt, build_sql_prompt
from .provider import LLMClient

logger = logging.getLogger(__name__)

def parse_artifact(raw: str) -> GeneratedArtifact:
    """Decode a completion into the strict artifact shape or fail loudly."""
    try:
        return GeneratedArtifact.model_validate_json(strip_fences(raw or ""))
    except ValidationError as e:
        raise GenerationError(f"Unparsable chart response: {e.error_count()} error(s): {e}") from e

def generate_chart(llm: LLMClient, request: GenerationRequest) -> GeneratedArtifact:
    prompt = build_chart_prompt(
        request.natural_language_query,
        request.columns,
        request.requested_chart_type,
    )
    raw = llm.complete(prompt.system, prompt.user, json_mode=True,
                       max_tokens=settings.LLM_MAX_TOKENS_CHART)
    artifact = parse_artifact(raw)

    # explicit caller intent beats whatever the model proposed
    if request.requested_chart_type is not None:
        artifact.chart_config.type = request.requested_chart_type

    logger.info("generated chart %s: %s", artifact.chart_config.type.value, artifact.sql_query)
    return artifact

def generate_sql(llm: LLMClient, query: str, schema: Sequence[SchemaColumn]) -> str:
    prompt = build_sql_prompt(query, schema)
    raw = llm.complete(prompt.system, prompt.user, json_mode=False,
                       max_tokens=settings.LLM_MAX_TOKENS_SQL)
    sql = normalize_sql(raw or "")
    if not sql:
        raise GenerationError("LLM returned an empty completion")
    logger.info("generated SQL: %s", sql)
    return sql
