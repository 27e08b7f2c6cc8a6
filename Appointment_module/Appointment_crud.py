import logging
import uuid
from typing import Any, Dict, List

from pydantic import ValidationError

from Store_module.record_store import RecordStore
from Store_module.store_errors import StoreError, StoreErrorKind
from Utils.datetime_utils import now_utc
from .Appointment_model import Appointment
from .Appointment_schema import AppointmentCreate

logger = logging.getLogger(__name__)


def build_appointment(payload: Dict[str, Any]) -> Appointment:
    """
    Validate caller fields, parse preferredDate into a date,
    fill type/status defaults and stamp id/createdAt.
    """
    try:
        data = AppointmentCreate.model_validate(payload)
    except ValidationError as e:
        raise StoreError(StoreErrorKind.VALIDATION, str(e)) from e

    return Appointment(
        id=str(uuid.uuid4()),
        name=data.name,
        email=data.email,
        phone=data.phone,
        preferred_date=data.preferred_date,
        preferred_time=data.preferred_time,
        purpose=data.purpose,
        type=data.type,
        status=data.status,
        created_at=now_utc(),
    )


def create_appointment(store: RecordStore, payload: Dict[str, Any]) -> Appointment:
    appointment = store.insert(build_appointment(payload))
    logger.info(f"Appointment saved with ID: {appointment.id}")
    return appointment


def list_appointments(store: RecordStore) -> List[Appointment]:
    return store.list_all(Appointment)
