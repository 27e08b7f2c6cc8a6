"""
Pydantic schemas for the appointment request form.
"""
from datetime import date, datetime
from typing import List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator

from Utils.datetime_utils import parse_calendar_date, to_utc_isoformat
from .Appointment_model import APPOINTMENT_STATUS_PENDING, APPOINTMENT_TYPE

REQUIRED_FIELDS = ("name", "email", "phone", "preferredDate", "preferredTime", "purpose")


class AppointmentCreate(BaseModel):
    """
    Authoritative shape of an appointment request before it is stored.
    Form keys are camelCase; unknown keys are dropped.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True, populate_by_name=True)

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    preferred_date: date = Field(..., alias="preferredDate")
    preferred_time: str = Field(..., min_length=1, alias="preferredTime")
    purpose: str = Field(..., min_length=1)
    type: str = APPOINTMENT_TYPE
    status: str = APPOINTMENT_STATUS_PENDING

    @field_validator("type", "status", mode="before")
    @classmethod
    def _default_when_blank(cls, value, info):
        if value is None or (isinstance(value, str) and not value.strip()):
            return APPOINTMENT_TYPE if info.field_name == "type" else APPOINTMENT_STATUS_PENDING
        return value

    @field_validator("preferred_date", mode="before")
    @classmethod
    def _parse_preferred_date(cls, value):
        if isinstance(value, (date, datetime)) or not isinstance(value, str):
            return value
        return parse_calendar_date(value)


class AppointmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: str
    preferred_date: date = Field(
        ...,
        validation_alias=AliasChoices("preferred_date", "preferredDate"),
        serialization_alias="preferredDate",
    )
    preferred_time: str = Field(
        ...,
        validation_alias=AliasChoices("preferred_time", "preferredTime"),
        serialization_alias="preferredTime",
    )
    purpose: str
    type: str
    status: str
    created_at: datetime = Field(
        ...,
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )

    @field_serializer("created_at")
    def _serialize_created_at(self, value: datetime) -> str:
        return to_utc_isoformat(value)


class AppointmentCreateResponse(BaseModel):
    success: bool = True
    message: str
    id: str


class AppointmentListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[AppointmentOut]
