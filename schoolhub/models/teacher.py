# schoolhub/models/teacher.py
from sqlalchemy import Column, String, Date, Enum, ForeignKey, Table, Uuid
from sqlalchemy.orm import relationship
from .base import Base
from .enums import Gender


teacher_subjects = Table(
    "teacher_subjects",
    Base.metadata,
    Column("teacher_id", Uuid(as_uuid=True), ForeignKey("teachers.id", ondelete="CASCADE"), primary_key=True),
    Column("subject_id", Uuid(as_uuid=True), ForeignKey("subjects.id", ondelete="CASCADE"), primary_key=True),
)


class Teacher(Base):
    __tablename__ = "teachers"

    # Login
    username = Column(String(20), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    # Profile
    name = Column(String(100), nullable=False, index=True)
    surname = Column(String(100), nullable=False, index=True)
    email = Column(String(255), unique=True)
    phone = Column(String(20), unique=True)
    address = Column(String(500), nullable=False, default="")
    img = Column(String(500))
    blood_type = Column(String(5))
    birthday = Column(Date, nullable=False)
    gender = Column(Enum(Gender, native_enum=False, length=10), nullable=False)

    # Relationships
    subjects = relationship("Subject", secondary=teacher_subjects, back_populates="teachers")
    lessons = relationship("Lesson", back_populates="teacher", cascade="all, delete")
    supervised_classes = relationship("ClassModel", back_populates="supervisor")
