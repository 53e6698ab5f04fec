from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session

from config import config


def build_engine(url: str):
    if make_url(url).get_backend_name() == "sqlite":
        # Local development store; requests are served from a thread pool
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


engine = build_engine(config.get_database_url())
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_session() -> Session:
    return SessionLocal()


def session_scope() -> Generator[Session, None, None]:
    session = get_session()
    try:
        yield session
    finally:
        session.close()
