import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from .core.config import settings
from .core.errors import PipelineError
from .db.session import init_db
from .api.v1 import health, query, sales

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("%s ready (table %s, provider %s)", settings.APP_NAME,
                settings.TARGET_TABLE, settings.LLM_PROVIDER)
    yield

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
app.include_router(health.router, prefix=settings.API_V1_PREFIX)
app.include_router(query.router,  prefix=settings.API_V1_PREFIX)
app.include_router(sales.router,  prefix=settings.API_V1_PREFIX)

@app.exception_handler(RequestValidationError)
async def invalid_request(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": str(exc)})

@app.exception_handler(PipelineError)
async def pipeline_error(request: Request, exc: PipelineError):
    # raised outside a route body, e.g. while building dependencies
    logger.error("unhandled pipeline error on %s: %s", request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content={"error": "Internal server error"})
