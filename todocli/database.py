"""Opening the task database."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from todocli.config import MySQLConfig
from todocli.models import Base


def mysql_url(cfg: MySQLConfig) -> URL:
    """Build the connection URL for a MySQL configuration."""
    return URL.create(
        "mysql+pymysql",
        username=cfg.user,
        password=cfg.password,
        host=cfg.host,
        port=cfg.port,
        database=cfg.dbname,
        query={"charset": "utf8"},
    )


def open_database(url: str | URL) -> sessionmaker[Session]:
    """Connect to ``url``, create missing tables and return a session factory."""
    try:
        engine = create_engine(url)
        Base.metadata.create_all(engine)
    except SQLAlchemyError as exc:
        raise ConnectionError(f"failed to connect to the database: {exc}") from exc
    return sessionmaker(bind=engine, expire_on_commit=False)


def connect(cfg: MySQLConfig) -> sessionmaker[Session]:
    """Open the MySQL database described by ``cfg``."""
    return open_database(mysql_url(cfg))