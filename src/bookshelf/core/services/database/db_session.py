"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import text
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from src.bookshelf.runtime.config.config_data import DatabaseConfig
from src.bookshelf.runtime.context import get_config


class DbSessionService:
    def __init__(self, db_config: DatabaseConfig | None = None):
        """Initialize the shared database engine."""
        db_config = db_config or get_config().database
        self._config = db_config

        engine_kwargs: dict = {
            "echo": db_config.echo,
            "connect_args": self._get_connect_args(db_config),
        }
        if db_config.is_sqlite and ":memory:" in db_config.url:
            # One shared connection, otherwise each session sees an empty database
            engine_kwargs["poolclass"] = StaticPool

        logger.info("Initializing database engine for {}", db_config.url)
        self._engine = create_engine(db_config.url, **engine_kwargs)

    @property
    def engine(self):
        return self._engine

    @property
    def dialect(self) -> str:
        return self._engine.dialect.name

    def _get_connect_args(self, db_config: DatabaseConfig) -> dict:
        if db_config.is_sqlite:
            return {
                "check_same_thread": False,  # sessions run in the threadpool
                "timeout": 20,
            }
        return {}

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(self._engine, expire_on_commit=False)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session, committing on success and rolling back on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error(
                "Database health check failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False

    def dispose(self) -> None:
        self._engine.dispose()
