import contextlib
import logging
from typing import Any, Dict, Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from core.config_loader import DatabaseConfig
from database.models import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the engine and session factory for one process.

    Constructed by the entry point and passed to services and the web
    app; dispose() releases pooled connections on shutdown.
    """

    def __init__(self, url: str, echo: bool = False, engine_options: Optional[Dict[str, Any]] = None):
        options = dict(engine_options or {})
        parsed = make_url(url)
        if parsed.get_backend_name() == "sqlite":
            options.setdefault("connect_args", {"check_same_thread": False})
            if parsed.database in (None, "", ":memory:"):
                # Share one connection so in-memory databases survive across sessions
                options.setdefault("poolclass", StaticPool)
        else:
            options.setdefault("pool_pre_ping", True)

        self.url = url
        self.engine = create_engine(url, echo=echo, **options)
        self.SessionLocal = sessionmaker(autoflush=False, expire_on_commit=False, bind=self.engine)

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> "Database":
        return cls(config.url, echo=config.echo)

    def create_all(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    @contextlib.contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """Provide a transactional scope around a series of operations."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        logger.info("Disposing database engine")
        self.engine.dispose()
