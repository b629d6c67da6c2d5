# schoolhub/models/__init__.py
"""Import all models here, needed for Alembic migrations and metadata.create_all."""
from .base import Base
from .enums import Day, Gender

from .admin import Admin
from .teacher import Teacher, teacher_subjects
from .parent import Parent
from .student import Student
from .grade import Grade
from .class_model import ClassModel
from .subject import Subject
from .lesson import Lesson
from .exam import Exam
from .assignment import Assignment
from .result import Result
from .attendance import Attendance
from .event import Event
from .announcement import Announcement
from .calendar import Module, Holiday

__all__ = [
    "Base", "Day", "Gender",
    "Admin", "Teacher", "teacher_subjects", "Parent", "Student",
    "Grade", "ClassModel", "Subject", "Lesson",
    "Exam", "Assignment", "Result", "Attendance",
    "Event", "Announcement", "Module", "Holiday",
]
