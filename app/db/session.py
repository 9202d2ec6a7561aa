import logging
import psycopg2
from psycopg2 import sql
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool
from app.core.config import DATABASE_URL
from app.db.base import Base
from app.db.guard import ConnectionGuard
from app.db.models import archive  # noqa: F401 registers the archive table

logger = logging.getLogger(__name__)


def ensure_database(url: str = DATABASE_URL) -> None:
    """Try to create the PostgreSQL database if it doesn't exist."""
    target = make_url(url)
    if target.get_backend_name() != "postgresql" or not target.database:
        return
    try:
        conn = psycopg2.connect(
            dbname="postgres",
            user=target.username,
            password=target.password,
            host=target.host,
            port=target.port,
        )
    except psycopg2.Error as e:
        logger.warning(f"Could not reach the database server: {e}")
        return
    try:
        conn.autocommit = True
        cur = conn.cursor()
        cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(target.database)))
        cur.close()
        logger.info(f"Created database {target.database}")
    except psycopg2.errors.DuplicateDatabase:
        pass
    except psycopg2.Error as e:
        logger.warning(f"Could not create database {target.database}: {e}")
    finally:
        conn.close()


def engine_options(url: str) -> dict:
    # The guarded connection is used from whichever worker thread holds the lock
    if make_url(url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {}


engine = create_engine(DATABASE_URL, **engine_options(DATABASE_URL))
guard = ConnectionGuard(engine)

def create_tables(guard: ConnectionGuard = guard) -> None:
    # Runs on the guarded connection so the process holds a single session
    guard.with_connection(lambda db: Base.metadata.create_all(bind=db.connection()))


def get_guard():
    yield guard
