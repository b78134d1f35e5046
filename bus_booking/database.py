from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from typing import Optional

from bus_booking.config import settings

Base = declarative_base()

def make_engine(database_url: Optional[str] = None, **kwargs) -> Engine:
    """Create an engine; SQLite connections are shared with FastAPI's worker threads"""
    url = database_url or settings.DATABASE_URL
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, **kwargs)

def make_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)

def init_db(bind: Engine) -> None:
    """Create tables that don't exist yet"""
    # registers the ORM tables on Base.metadata
    from bus_booking import models  # noqa: F401
    Base.metadata.create_all(bind=bind)
