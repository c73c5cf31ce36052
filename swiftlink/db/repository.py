from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import NamedTuple, Optional
import logging

from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from swiftlink.core.config import DatabaseConfig, DatabaseType
from swiftlink.core.exceptions import StorageFault, UniqueViolation
from swiftlink.db.Connection import database
from swiftlink.db.Models.models import Base, Link

logger = logging.getLogger(__name__)


class LinkRow(NamedTuple):
    url: str
    created_at: int


class LinkStore(ABC):
    """
    Storage for link rows on top of a SQLAlchemy engine.

    Every method opens its own session, so a store can be shared by any
    number of concurrent requests. Engine-specific behaviour is limited to
    recognising a unique constraint violation; subclasses translate their
    driver's error codes into the shared ``UniqueViolation``.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = database.create_session_factory(engine)

    @abstractmethod
    def is_unique_violation(self, error: IntegrityError) -> bool:
        """Return True when ``error`` was raised by a uniqueness constraint."""

    def ensure_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine)
        logger.info("Links table initialized/checked.")

    def find_code_by_url(self, url: str) -> Optional[str]:
        with self._session("find_code_by_url") as db:
            return db.scalar(select(Link.code).where(Link.url == url))

    def find_url_by_code(self, code: str) -> Optional[LinkRow]:
        with self._session("find_url_by_code") as db:
            row = db.execute(
                select(Link.url, Link.created_at).where(Link.code == code)
            ).first()
        if row is None:
            return None
        return LinkRow(url=row.url, created_at=row.created_at)

    def insert(self, code: str, url: str, created_at: int) -> None:
        with self._session("insert") as db:
            try:
                db.add(Link(code=code, url=url, created_at=created_at))
                db.commit()
            except IntegrityError as e:
                db.rollback()
                if self.is_unique_violation(e):
                    raise UniqueViolation(self._constraint_name(e)) from e
                logger.error("IntegrityError inserting code=%s: %s", code, e.orig)
                raise StorageFault("Error inserting link") from e

    def delete_by_code(self, code: str) -> int:
        with self._session("delete_by_code") as db:
            result = db.execute(delete(Link).where(Link.code == code))
            db.commit()
            return result.rowcount

    def ping(self) -> bool:
        return database.verify_database_connection(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    def _constraint_name(self, error: IntegrityError) -> str:
        return ""

    @contextmanager
    def _session(self, operation: str):
        db = self.SessionLocal()
        try:
            yield db
        except SQLAlchemyError as e:
            logger.error("Storage error during %s: %s", operation, e, exc_info=True)
            raise StorageFault(f"Storage error during {operation}") from e
        finally:
            db.close()


class PostgresLinkStore(LinkStore):
    UNIQUE_VIOLATION = "23505"

    def is_unique_violation(self, error: IntegrityError) -> bool:
        orig = error.orig
        sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
        return sqlstate == self.UNIQUE_VIOLATION

    def _constraint_name(self, error: IntegrityError) -> str:
        diag = getattr(error.orig, "diag", None)
        return getattr(diag, "constraint_name", None) or ""


class SqliteLinkStore(LinkStore):
    # Extended result codes: SQLITE_CONSTRAINT_PRIMARYKEY, SQLITE_CONSTRAINT_UNIQUE
    UNIQUE_VIOLATIONS = frozenset({1555, 2067})

    def is_unique_violation(self, error: IntegrityError) -> bool:
        return getattr(error.orig, "sqlite_errorcode", None) in self.UNIQUE_VIOLATIONS

    def _constraint_name(self, error: IntegrityError) -> str:
        # e.g. "UNIQUE constraint failed: links.url"
        message = str(error.orig)
        return message.rsplit(":", 1)[-1].strip() if ":" in message else ""


def create_store(config: DatabaseConfig) -> LinkStore:
    engine = database.create_db_engine(config)
    if config.database_type == DatabaseType.SQLITE:
        return SqliteLinkStore(engine)
    return PostgresLinkStore(engine)
