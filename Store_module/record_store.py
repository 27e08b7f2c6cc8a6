"""
Record store - the single persistence client shared by all requests.

The store is constructed once at startup and handed to routers through
dependency injection (see deps.get_store). Connection state is tracked from
engine/pool events rather than by probing the database on every health check.
"""
import enum
import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List, Type

from sqlalchemy import event, func, inspect, select, text
from sqlalchemy.orm import Session, sessionmaker

from database import Base, build_engine
from .store_errors import StoreError, StoreErrorKind, to_store_error

logger = logging.getLogger(__name__)


class ConnectionState(str, enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTING = "disconnecting"


class RecordStore:
    def __init__(self, database_url: str, **engine_options):
        self.database_url = database_url
        self.engine = build_engine(database_url, **engine_options)
        self._session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            future=True,
        )
        self._state = ConnectionState.DISCONNECTED
        self._state_lock = threading.Lock()
        self._closed = False

        event.listen(self.engine, "connect", self._on_pool_connect)
        event.listen(self.engine, "handle_error", self._on_handle_error)

    # -- connection state -------------------------------------------------

    @property
    def connection_state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED

    def _set_state(self, state: ConnectionState) -> None:
        with self._state_lock:
            if self._state is state:
                return
            previous, self._state = self._state, state
        logger.info("Record store state: %s -> %s", previous.value, state.value)

    def _on_pool_connect(self, dbapi_connection, connection_record):
        if not self._closed:
            self._set_state(ConnectionState.CONNECTED)

    def _on_handle_error(self, context):
        if context.is_disconnect:
            self._set_state(ConnectionState.DISCONNECTED)

    # -- lifecycle --------------------------------------------------------

    def connect(self) -> bool:
        """Open the first connection. Failures are logged, never raised."""
        self._closed = False
        self._set_state(ConnectionState.CONNECTING)
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"Record store connection error: {e}")
            self._set_state(ConnectionState.DISCONNECTED)
            return False
        # A pooled connection may already exist, in which case no connect event fires
        self._set_state(ConnectionState.CONNECTED)
        logger.info("Record store connected: %s", self.engine.url.render_as_string(hide_password=True))
        return True

    def create_schema(self) -> None:
        # Register both record tables with Base.metadata
        import Enquiry_module.Enquiry_model  # noqa: F401
        import Appointment_module.Appointment_model  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def close(self) -> None:
        if self._closed:
            return
        self._set_state(ConnectionState.DISCONNECTING)
        self._closed = True
        self.engine.dispose()
        self._set_state(ConnectionState.DISCONNECTED)
        logger.info("Record store connection closed")

    # -- operations -------------------------------------------------------

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a session and make sure it is closed after use."""
        if self._closed:
            raise StoreError(StoreErrorKind.CONNECTIVITY, "Record store is closed")
        db = self._session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def insert(self, record):
        """Persist a single record atomically and return it."""
        try:
            with self.session() as db:
                db.add(record)
                db.commit()
        except Exception as e:
            raise to_store_error(e) from e
        return record

    def list_all(self, model: Type) -> List:
        """Return every record of a model, most recent first."""
        try:
            with self.session() as db:
                return list(db.scalars(select(model).order_by(model.created_at.desc())))
        except Exception as e:
            raise to_store_error(e) from e

    def count(self, model: Type) -> int:
        try:
            with self.session() as db:
                return db.scalar(select(func.count()).select_from(model))
        except Exception as e:
            raise to_store_error(e) from e

    def table_names(self) -> List[str]:
        try:
            return inspect(self.engine).get_table_names()
        except Exception as e:
            raise to_store_error(e) from e
