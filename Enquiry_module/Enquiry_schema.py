"""
Pydantic schemas for the enquiry form.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator

from Utils.datetime_utils import to_utc_isoformat
from .Enquiry_model import ENQUIRY_TYPE

REQUIRED_FIELDS = ("name", "email", "message")


class EnquiryCreate(BaseModel):
    """Authoritative shape of an enquiry before it is stored. Unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: str = Field(..., min_length=1, description="Full name")
    email: str = Field(..., min_length=1, description="Email address")
    phone: Optional[str] = Field(None, description="Phone (optional)")
    subject: Optional[str] = Field(None, description="Subject (optional)")
    message: str = Field(..., min_length=1, description="Message")
    type: str = Field(ENQUIRY_TYPE, description="Defaults to general_enquiry when null or blank")

    @field_validator("type", mode="before")
    @classmethod
    def _default_type(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return ENQUIRY_TYPE
        return value


class EnquiryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: str
    type: str
    created_at: datetime = Field(
        ...,
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )

    @field_serializer("created_at")
    def _serialize_created_at(self, value: datetime) -> str:
        return to_utc_isoformat(value)


class EnquiryCreateResponse(BaseModel):
    success: bool = True
    message: str
    id: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Enquiry submitted successfully",
                "id": "0b6f6c2e-1d1f-4d87-9a9c-3a8f5f0f7e21",
            }
        }
    )


class EnquiryListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[EnquiryOut]
