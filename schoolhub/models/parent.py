# schoolhub/models/parent.py
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from .base import Base


class Parent(Base):
    __tablename__ = "parents"

    username = Column(String(20), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    name = Column(String(100), nullable=False, index=True)
    surname = Column(String(100), nullable=False, index=True)
    email = Column(String(255), unique=True)
    phone = Column(String(20), nullable=False, unique=True)
    address = Column(String(500), nullable=False)

    students = relationship("Student", back_populates="parent")
