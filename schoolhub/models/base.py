from sqlalchemy.orm import as_declarative, declared_attr
from sqlalchemy import Column, DateTime, Uuid, func
import uuid


@as_declarative()
class Base:
    __abstract__ = True  # Prevents creating a table for the base class

    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower()

    # Generic UUID type: native on PostgreSQL, CHAR(32) elsewhere
    id = Column(Uuid(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
