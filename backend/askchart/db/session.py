from sqlmodel import SQLModel, create_engine, Session
from ..core.config import settings

def _connect_args(url: str) -> dict:
    # bound every DB round trip so a stalled server cannot hang a request
    if url.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": settings.DB_TIMEOUT_S}
    if url.startswith("mysql"):
        return {"connection_timeout": settings.DB_TIMEOUT_S}
    return {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.DATABASE_URL),
)

def init_db() -> None:
    from . import models  # noqa: F401
    SQLModel.metadata.create_all(engine)

def get_session():
    with Session(engine) as session:
        yield session
