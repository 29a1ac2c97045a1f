from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from media_app.config import settings


def _connect_args(database_url: str) -> dict:
    """Driver arguments; SQLite needs cross-thread access and a busy timeout"""
    if database_url.startswith("sqlite"):
        return {
            "check_same_thread": False,
            "timeout": settings.database_timeout_seconds,
        }
    return {"connect_timeout": settings.database_timeout_seconds}


engine = create_engine(
    settings.database_url,
    connect_args=_connect_args(settings.database_url),
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Request-scoped database session (FastAPI dependency)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
