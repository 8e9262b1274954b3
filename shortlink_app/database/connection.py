"""
SQLAlchemy engine and declarative base for the SQL store.

Engines are created per store instance (no module-level engine),
so tests can point each store at its own database.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """
    Create an engine for the given database URL.
    
    SQLite connections are shared across threads by the pool, so
    same-thread checking is disabled for SQLite URLs only.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to an engine"""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)
