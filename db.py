import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from config import settings

logger = logging.getLogger(__name__)


def normalize_url(url: str) -> str:
    # Some hosts hand out postgres:// which SQLAlchemy no longer accepts
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def build_engine(url: str, echo: bool = False):
    url = normalize_url(url)
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        echo=echo,
        connect_args=connect_args,
        pool_pre_ping=True,
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

Base = declarative_base()


def init_db(bind=None):
    """Create every table and index declared in models.py."""
    import models  # noqa: F401  # register tables on Base.metadata

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database schema ready on %s", bind.url.render_as_string(hide_password=True))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
