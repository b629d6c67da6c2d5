# schoolhub/models/calendar.py
from sqlalchemy import Column, String, Date, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base


class Module(Base):
    """A named teaching period (e.g. a semester) bounding lesson generation."""
    __tablename__ = "modules"

    name = Column(String(100), nullable=False, unique=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    holidays = relationship("Holiday", back_populates="module", cascade="all, delete")


class Holiday(Base):
    __tablename__ = "holidays"

    # Null module means the holiday applies to every module
    module_id = Column(Uuid(as_uuid=True), ForeignKey("modules.id"), nullable=True, index=True)

    name = Column(String(100), nullable=False)
    date = Column(Date, nullable=False, index=True)

    module = relationship("Module", back_populates="holidays")
