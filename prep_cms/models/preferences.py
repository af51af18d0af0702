# preferences.py
from sqlalchemy import JSON, Column, DateTime, String

from prep_cms.database import Base
from prep_cms.models.content import utcnow


class ClientPreferencesModel(Base):
    __tablename__ = "client_preferences"

    client_id = Column(String(64), primary_key=True)
    preferences_data = Column(JSON, nullable=False, default=dict)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
