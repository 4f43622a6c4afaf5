"""
Prospect model — a tracked business entity. Owned by the CRM; read-only here.
"""
from sqlalchemy import Column, Text, Boolean, DateTime
from sqlalchemy.sql import func

from prospect_intel.database import Base


class Prospect(Base):
    __tablename__ = 'prospects'

    id = Column(Text, primary_key=True)
    company = Column(Text, nullable=False)
    status = Column(Text, nullable=False, default='Not contacted yet')  # Hot/Warm/Not contacted yet/Cold/Lost
    archived = Column(Boolean, nullable=False, default=False)
    website = Column(Text, nullable=True)
    prospect_type = Column(Text, nullable=True)  # Media / Sports Club / Sports League / ...
    country = Column(Text, nullable=True)
    linkedin_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
