import logging
import uuid
from typing import Any, Dict, List

from pydantic import ValidationError

from Store_module.record_store import RecordStore
from Store_module.store_errors import StoreError, StoreErrorKind
from Utils.datetime_utils import now_utc
from .Enquiry_model import Enquiry
from .Enquiry_schema import EnquiryCreate

logger = logging.getLogger(__name__)


def build_enquiry(payload: Dict[str, Any]) -> Enquiry:
    """Validate caller fields, fill defaults and stamp id/createdAt."""
    try:
        data = EnquiryCreate.model_validate(payload)
    except ValidationError as e:
        raise StoreError(StoreErrorKind.VALIDATION, str(e)) from e

    return Enquiry(
        id=str(uuid.uuid4()),
        name=data.name,
        email=data.email,
        phone=data.phone,
        subject=data.subject,
        message=data.message,
        type=data.type,
        created_at=now_utc(),
    )


def create_enquiry(store: RecordStore, payload: Dict[str, Any]) -> Enquiry:
    enquiry = store.insert(build_enquiry(payload))
    logger.info(f"Enquiry saved with ID: {enquiry.id}")
    return enquiry


def list_enquiries(store: RecordStore) -> List[Enquiry]:
    return store.list_all(Enquiry)
