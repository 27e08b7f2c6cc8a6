"""
Appointment router - appointment request submission and admin listing.
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from deps import get_store
from Store_module.record_store import RecordStore
from Store_module.store_errors import StoreError, StoreErrorKind
from Utils.payload import read_payload
from Utils.responses import error_response, find_missing_fields, missing_fields_response
from .Appointment_crud import create_appointment, list_appointments
from .Appointment_schema import (
    REQUIRED_FIELDS,
    AppointmentCreateResponse,
    AppointmentListResponse,
    AppointmentOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Appointment"])

SUCCESS_MESSAGE = "Appointment request submitted successfully"


@router.post("/appointment", status_code=status.HTTP_201_CREATED, response_model=AppointmentCreateResponse)
def submit_appointment(
    payload: Dict[str, Any] = Depends(read_payload),
    store: RecordStore = Depends(get_store),
):
    logger.info(f"Appointment form data: {payload}")

    missing = find_missing_fields(payload, REQUIRED_FIELDS)
    if missing:
        return missing_fields_response(missing, "Missing required fields")

    try:
        appointment = create_appointment(store, payload)
    except StoreError as e:
        if e.kind is StoreErrorKind.VALIDATION:
            logger.warning(f"Rejected appointment: {e.message}")
            return error_response(400, "Validation error", details=e.message, code="validation_error")
        logger.error(f"Error saving appointment: {e.message}")
        return error_response(500, "Failed to submit appointment request", details=e.message)

    return AppointmentCreateResponse(message=SUCCESS_MESSAGE, id=appointment.id)


@router.get("/appointments", response_model=AppointmentListResponse)
def get_appointments(store: RecordStore = Depends(get_store)):
    """All appointment requests, most recent first (admin panel)."""
    try:
        appointments = list_appointments(store)
    except StoreError as e:
        logger.error(f"Error fetching appointments: {e.message}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Failed to fetch appointments"},
        )

    return AppointmentListResponse(
        count=len(appointments),
        data=[AppointmentOut.model_validate(appointment) for appointment in appointments],
    )
