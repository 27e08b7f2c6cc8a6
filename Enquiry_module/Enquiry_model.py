"""
Enquiry model - general enquiries submitted from the website contact form.
"""
from sqlalchemy import Column, DateTime, String, Text

from database import Base

ENQUIRY_TYPE = "general_enquiry"


class Enquiry(Base):
    """
    Stores a general enquiry: name, email and message are required,
    phone and subject optional. Rows are append-only.
    """

    __tablename__ = "enquiries"

    id = Column(String(36), primary_key=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    phone = Column(Text, nullable=True)
    subject = Column(Text, nullable=True)
    message = Column(Text, nullable=False)
    type = Column(Text, nullable=False, default=ENQUIRY_TYPE)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
