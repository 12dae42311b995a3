"""SQLAlchemy ORM models for saved floor-plan projects."""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Float, DateTime, Text
from database import Base
from services.layout_constants import DEFAULT_SCALE_RATIO


def generate_uuid():
    return str(uuid.uuid4())


class Project(Base):
    __tablename__ = "projects"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String, nullable=False, default="Untitled plan")
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
    scale_ratio = Column(Float, nullable=False, default=DEFAULT_SCALE_RATIO)
    plan_json = Column(Text, nullable=False)  # persisted project document, see services/project_io.py
