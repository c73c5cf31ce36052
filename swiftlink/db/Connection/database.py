import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from swiftlink.core.config import DatabaseConfig, DatabaseType

logger = logging.getLogger(__name__)

SQLITE_BUSY_TIMEOUT = 15


def build_database_url(config: DatabaseConfig) -> URL:
    if config.database_type == DatabaseType.SQLITE:
        return URL.create("sqlite", database=config.database)
    return URL.create(
        "postgresql+psycopg2",
        username=config.username,
        password=config.password,
        host=config.host,
        port=config.port,
        database=config.database,
    )


def create_db_engine(config: DatabaseConfig) -> Engine:
    url = build_database_url(config)
    logger.info(f"Connecting to {config.database_type.value} database {config.database}")

    if config.database_type == DatabaseType.SQLITE:
        if config.database in ("", ":memory:"):
            # A single shared connection keeps the in-memory database alive
            return create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT},
            pool_size=config.max_connections,
            max_overflow=0,
        )

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=config.max_connections,
        max_overflow=0,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def verify_database_connection(engine: Engine) -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection verified")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False
