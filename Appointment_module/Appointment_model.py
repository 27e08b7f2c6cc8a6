"""
Appointment model - appointment requests submitted from the booking form.
"""
from sqlalchemy import Column, Date, DateTime, String, Text

from database import Base

APPOINTMENT_TYPE = "appointment_request"
APPOINTMENT_STATUS_PENDING = "pending"


class Appointment(Base):
    """
    Stores an appointment request. Every contact and scheduling field is
    required; status starts as "pending" and is only ever changed by the
    admin workflow outside this service.
    """

    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    phone = Column(Text, nullable=False)
    preferred_date = Column(Date, nullable=False)
    preferred_time = Column(Text, nullable=False)
    purpose = Column(Text, nullable=False)
    type = Column(Text, nullable=False, default=APPOINTMENT_TYPE)
    status = Column(Text, nullable=False, default=APPOINTMENT_STATUS_PENDING)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
