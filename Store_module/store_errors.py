"""
Store error taxonomy - every failure leaving the record store is a StoreError
carrying a StoreErrorKind, so routers never inspect driver exception names.
"""
import enum

from pydantic import ValidationError
from sqlalchemy.exc import (
    DataError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    StatementError,
    TimeoutError as PoolTimeoutError,
)


class StoreErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    CONNECTIVITY = "connectivity"
    UNKNOWN = "unknown"


class StoreError(Exception):
    """Failure reported by the record store."""

    def __init__(self, kind: StoreErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self):
        return f"StoreError(kind={self.kind.value!r}, message={self.message!r})"


_VALIDATION_ERRORS = (ValidationError, IntegrityError, DataError, ValueError, TypeError)
_CONNECTIVITY_ERRORS = (
    OperationalError,
    InterfaceError,
    DisconnectionError,
    PoolTimeoutError,
    ConnectionError,
)


def classify_error(exc: BaseException) -> StoreErrorKind:
    """Map a raised exception onto the store taxonomy."""
    if isinstance(exc, StoreError):
        return exc.kind
    # OperationalError/IntegrityError/DataError are StatementError subclasses,
    # so check them before unwrapping the original DBAPI or bind error.
    if isinstance(exc, _CONNECTIVITY_ERRORS):
        return StoreErrorKind.CONNECTIVITY
    if isinstance(exc, _VALIDATION_ERRORS):
        return StoreErrorKind.VALIDATION
    if isinstance(exc, StatementError) and exc.orig is not None:
        return classify_error(exc.orig)
    return StoreErrorKind.UNKNOWN


def to_store_error(exc: BaseException) -> StoreError:
    if isinstance(exc, StoreError):
        return exc
    return StoreError(classify_error(exc), str(exc))
