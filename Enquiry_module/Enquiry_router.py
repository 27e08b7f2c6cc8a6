"""
Enquiry router - general enquiry form submission and admin listing.
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
from .Enquiry_crud import create_enquiry, list_enquiries
from .Enquiry_schema import (
    REQUIRED_FIELDS,
    EnquiryCreateResponse,
    EnquiryListResponse,
    EnquiryOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Enquiry"])

SUCCESS_MESSAGE = "Enquiry submitted successfully"


@router.post("/enquiry", status_code=status.HTTP_201_CREATED, response_model=EnquiryCreateResponse)
def submit_enquiry(
    payload: Dict[str, Any] = Depends(read_payload),
    store: RecordStore = Depends(get_store),
):
    """
    Submit a general enquiry (name, email, message; optional phone and subject).
    """
    logger.info(f"Enquiry form data: {payload}")

    missing = find_missing_fields(payload, REQUIRED_FIELDS)
    if missing:
        return missing_fields_response(
            missing,
            "Missing required fields: name, email, and message are required",
        )

    try:
        enquiry = create_enquiry(store, payload)
    except StoreError as e:
        if e.kind is StoreErrorKind.VALIDATION:
            logger.warning(f"Rejected enquiry: {e.message}")
            return error_response(400, "Validation error", details=e.message, code="validation_error")
        logger.error(f"Error saving enquiry: {e.message}")
        return error_response(500, "Failed to submit enquiry", details=e.message)

    return EnquiryCreateResponse(message=SUCCESS_MESSAGE, id=enquiry.id)


@router.get("/enquiries", response_model=EnquiryListResponse)
def get_enquiries(store: RecordStore = Depends(get_store)):
    """All enquiries, most recent first (admin panel)."""
    try:
        enquiries = list_enquiries(store)
    except StoreError as e:
        logger.error(f"Error fetching enquiries: {e.message}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Failed to fetch enquiries"},
        )

    return EnquiryListResponse(
        count=len(enquiries),
        data=[EnquiryOut.model_validate(enquiry) for enquiry in enquiries],
    )
