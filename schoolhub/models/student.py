# schoolhub/models/student.py
from sqlalchemy import Column, String, Date, Enum, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base
from .enums import Gender


class Student(Base):
    __tablename__ = "students"

    # Foreign Keys
    parent_id = Column(Uuid(as_uuid=True), ForeignKey("parents.id"), nullable=False, index=True)
    grade_id = Column(Uuid(as_uuid=True), ForeignKey("grades.id"), nullable=False, index=True)
    class_id = Column(Uuid(as_uuid=True), ForeignKey("classes.id"), nullable=False, index=True)

    # Login
    username = Column(String(20), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    # Profile
    name = Column(String(100), nullable=False, index=True)
    surname = Column(String(100), nullable=False, index=True)
    email = Column(String(255), unique=True)
    phone = Column(String(20), unique=True)
    address = Column(String(500), nullable=False)
    img = Column(String(500))
    blood_type = Column(String(5))
    birthday = Column(Date, nullable=False)
    gender = Column(Enum(Gender, native_enum=False, length=10), nullable=False)

    # Relationships
    parent = relationship("Parent", back_populates="students")
    grade = relationship("Grade", back_populates="students")
    class_ref = relationship("ClassModel", back_populates="students")
    results = relationship("Result", back_populates="student", cascade="all, delete")
    attendances = relationship("Attendance", back_populates="student", cascade="all, delete")
