# schoolhub/models/event.py
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base


class Event(Base):
    __tablename__ = "events"

    # Null means the event is for the whole school
    class_id = Column(Uuid(as_uuid=True), ForeignKey("classes.id"), nullable=True, index=True)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)

    class_ref = relationship("ClassModel", back_populates="events")
