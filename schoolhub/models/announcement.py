# schoolhub/models/announcement.py
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base


class Announcement(Base):
    __tablename__ = "announcements"

    class_id = Column(Uuid(as_uuid=True), ForeignKey("classes.id"), nullable=True, index=True)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    date = Column(DateTime, nullable=False, index=True)

    class_ref = relationship("ClassModel", back_populates="announcements")
