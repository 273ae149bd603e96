"""
copyholder.database

Shared SQLAlchemy declarative base and session management for the history store.

Overview:
- Provides a single `declarative_base()` instance (`Base`) inherited by the ORM
    entity classes.
- Includes a utility class for creating the engine and generating sessions.

Contents:
- Base:
    Singleton `declarative_base` instance.

- DatabaseSessionGenerator:
    Utility class to generate SQLAlchemy sessions bound to a specific engine.
    - __init__(settings: DatabaseSettings | None, engine: Engine | None):
        Builds the engine from the provided DatabaseSettings, or adopts an existing engine.
    - get_session() -> Session:
        Creates a new synchronous SQLAlchemy session.
    - init_db():
        Creates the parent directory of a file database and all tables.

Design Notes:
- `expire_on_commit=False` keeps committed attributes readable after the
    session closes so entities can be converted to models outside the session.
"""

from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from copyholder.config import DatabaseSettings


Base = declarative_base()
"""Singleton `declarative_base` instance for ORM models."""


class DatabaseSessionGenerator:
    """
    Utility class to generate SQLAlchemy sessions bound to a specific engine.

    Attributes:
        engine (sqlalchemy.engine.Engine): The SQLAlchemy engine to bind sessions to.
    """

    def __init__(
        self,
        settings: Optional[DatabaseSettings] = None,
        engine: Optional[Engine] = None,
    ):
        if engine is None:
            if settings is None:
                raise ValueError("Either settings or an engine is required.")
            self._db_path: Optional[Path] = settings.db_path
            engine = create_engine(settings.database_url)
        else:
            self._db_path = None
        self.engine = engine
        self._session_factory = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )

    def get_session(self) -> Session:
        """
        Creates a new SQLAlchemy session bound to the configured engine.

        Returns:
            sqlalchemy.orm.Session: A new session instance.
        """
        return self._session_factory()

    def init_db(self) -> None:
        """
        Initializes the database by creating all tables defined in the ORM models.
        """
        # Register the entities on Base.metadata before create_all.
        import copyholder.models  # noqa: F401

        if self._db_path is not None:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        Base.metadata.create_all(self.engine)
