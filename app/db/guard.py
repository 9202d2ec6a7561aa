import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TypeVar

from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConnectionGuard:
    """Serialized access to one long-lived database connection.

    The connection is opened on first use and kept until close(). Callers
    queue on a lock, so at most one statement runs on it at a time. There is
    no pool and no reconnection: once the connection breaks every command
    fails until the process restarts.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._lock = threading.Lock()
        self._connection: Optional[Connection] = None
        self._session: Optional[Session] = None

    def _open(self) -> Session:
        if self._session is None:
            self._connection = self.engine.connect()
            self._session = Session(bind=self._connection, autoflush=False, expire_on_commit=False)
        return self._session

    @contextmanager
    def session(self) -> Iterator[Session]:
        with self._lock:
            db = self._open()
            try:
                yield db
                db.commit()
            except BaseException:
                try:
                    db.rollback()
                except SQLAlchemyError as e:
                    logger.error(f"Rollback failed: {str(e)}")
                raise
            finally:
                db.expunge_all()

    def with_connection(self, fn: Callable[[Session], T]) -> T:
        with self.session() as db:
            return fn(db)

    def locked(self) -> bool:
        return self._lock.locked()

    def close(self) -> None:
        with self._lock:
            if self._session is not None:
                self._session.close()
                self._session = None
            if self._connection is not None:
                self._connection.close()
                self._connection = None
