# schoolhub/models/admin.py
from sqlalchemy import Column, String
from .base import Base


class Admin(Base):
    __tablename__ = "admins"

    username = Column(String(20), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(100), nullable=False)
    surname = Column(String(100), nullable=False)
