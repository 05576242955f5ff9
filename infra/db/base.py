# infra/db/base.py
from __future__ import annotations
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy import create_engine
import logging

from infra.path import default_db_path

logger = logging.getLogger(__name__)

Base = declarative_base()


def make_engine(db_url: str):
    return create_engine(db_url, echo=False, future=True)


def make_session_factory(db_url: str) -> sessionmaker:
    return sessionmaker(bind=make_engine(db_url), autoflush=False, autocommit=False)


def default_session_factory() -> sessionmaker:
    """Session factory bound to the configured SQLite file, creating its folder first."""
    db_path = default_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    db_url = f"sqlite:///{db_path.as_posix()}"
    logger.info("Using SQLite database at: %s", db_url)
    return make_session_factory(db_url)
