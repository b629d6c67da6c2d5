"""
Unit tests for request schemas
Tests for: lesson hours, assessment dates, results, events, people
"""
from datetime import date, datetime, time, timedelta
from uuid import uuid4

import pytest
from pydantic import ValidationError

from schoolhub.schemas.academic import ClassCreate, SubjectCreate
from schoolhub.schemas.assessment import AssignmentCreate, ExamCreate, ResultCreate
from schoolhub.schemas.calendar import ModuleCreate
from schoolhub.schemas.documents import AbsenceReportRequest, CertificateRequest
from schoolhub.schemas.lesson import LessonCreate, RecurringLessonCreate
from schoolhub.schemas.notices import AnnouncementCreate, EventCreate
from schoolhub.schemas.users import ParentCreate, ParentUpdate, StudentCreate, TeacherUpdate

MONDAY = date(2030, 1, 7)


def lesson_data(**overrides):
    data = {
        "name": "Mathematics",
        "day": "MONDAY",
        "start_time": datetime.combine(MONDAY, time(9)),
        "end_time": datetime.combine(MONDAY, time(10)),
        "subject_id": uuid4(),
        "class_id": uuid4(),
        "teacher_id": uuid4(),
    }
    data.update(overrides)
    return data


def future(days=1, hour=10):
    return datetime.combine(date.today() + timedelta(days=days), time(hour))


class TestLessonSchemas:

    def test_valid_lesson(self):
        lesson = LessonCreate(**lesson_data())
        assert lesson.day.value == "MONDAY"

    def test_school_day_bounds_are_inclusive(self):
        LessonCreate(**lesson_data(
            start_time=datetime.combine(MONDAY, time(8)),
            end_time=datetime.combine(MONDAY, time(15)),
        ))

    def test_start_before_eight_fails(self):
        with pytest.raises(ValidationError) as exc_info:
            LessonCreate(**lesson_data(start_time=datetime.combine(MONDAY, time(7, 59))))
        assert "The start time must be between 08:00 and 15:00." in str(exc_info.value)

    def test_end_after_three_fails(self):
        with pytest.raises(ValidationError) as exc_info:
            LessonCreate(**lesson_data(end_time=datetime.combine(MONDAY, time(15, 1))))
        assert "The end time must be between 08:00 and 15:00." in str(exc_info.value)

    def test_end_must_follow_start(self):
        with pytest.raises(ValidationError):
            LessonCreate(**lesson_data(end_time=datetime.combine(MONDAY, time(9))))

    def test_date_must_match_day(self):
        tuesday = MONDAY + timedelta(days=1)
        with pytest.raises(ValidationError) as exc_info:
            LessonCreate(**lesson_data(
                start_time=datetime.combine(tuesday, time(9)),
                end_time=datetime.combine(tuesday, time(10)),
            ))
        assert "monday" in str(exc_info.value)

    def test_lesson_zeroes_seconds(self):
        lesson = LessonCreate(**lesson_data(start_time=datetime.combine(MONDAY, time(9, 0, 45, 500))))
        assert lesson.start_time == datetime.combine(MONDAY, time(9))

    def test_lesson_within_one_minute_fails(self):
        with pytest.raises(ValidationError) as exc_info:
            LessonCreate(**lesson_data(
                start_time=datetime.combine(MONDAY, time(13, 0, 10)),
                end_time=datetime.combine(MONDAY, time(13, 0, 50)),
            ))
        assert "End time must be after start time" in str(exc_info.value)

    def test_weekend_day_rejected(self):
        with pytest.raises(ValidationError):
            LessonCreate(**lesson_data(day="SATURDAY"))

    def test_recurring_template_zeroes_seconds(self):
        data = lesson_data(start_time=time(9, 0, 45), end_time=time(10), module_id=uuid4())
        template = RecurringLessonCreate(**data)
        assert template.start_time == time(9, 0)

    def test_recurring_template_hours(self):
        with pytest.raises(ValidationError):
            RecurringLessonCreate(**lesson_data(start_time=time(16), end_time=time(17), module_id=uuid4()))


class TestAssessmentSchemas:

    def test_exam_in_the_past_fails(self):
        with pytest.raises(ValidationError) as exc_info:
            ExamCreate(title="Quiz", start_time=future(-2), end_time=future(-2, 11), lesson_id=uuid4())
        assert "past" in str(exc_info.value)

    def test_exam_end_before_start_fails(self):
        with pytest.raises(ValidationError):
            ExamCreate(title="Quiz", start_time=future(2, 11), end_time=future(2, 10), lesson_id=uuid4())

    def test_assignment_due_equal_to_start_is_valid(self):
        start = future(3)
        assignment = AssignmentCreate(title="Essay", start_date=start, due_date=start, lesson_id=uuid4())
        assert assignment.due_date == start

    def test_assignment_due_before_start_fails(self):
        with pytest.raises(ValidationError):
            AssignmentCreate(title="Essay", start_date=future(3), due_date=future(2), lesson_id=uuid4())

    @pytest.mark.parametrize("score", [-1, 101])
    def test_result_score_range(self, score):
        with pytest.raises(ValidationError):
            ResultCreate(score=score, student_id=uuid4(), exam_id=uuid4())

    def test_result_needs_exactly_one_assessment(self):
        with pytest.raises(ValidationError):
            ResultCreate(score=50, student_id=uuid4())
        with pytest.raises(ValidationError):
            ResultCreate(score=50, student_id=uuid4(), exam_id=uuid4(), assignment_id=uuid4())

    def test_result_blank_reference_is_none(self):
        result = ResultCreate(score=50, student_id=uuid4(), exam_id="", assignment_id=str(uuid4()))
        assert result.exam_id is None


class TestNoticeSchemas:

    def test_event_shorter_than_fifteen_minutes_fails(self):
        start = future(1)
        with pytest.raises(ValidationError) as exc_info:
            EventCreate(title="Fair", description="Science fair", start_time=start, end_time=start + timedelta(minutes=14))
        assert "15 minutes" in str(exc_info.value)

    def test_event_without_class_is_school_wide(self):
        start = future(1)
        event = EventCreate(
            title="Fair", description="Science fair",
            start_time=start, end_time=start + timedelta(minutes=15), class_id="",
        )
        assert event.class_id is None

    def test_announcement_today_is_valid(self):
        AnnouncementCreate(title="Notice", description="Text", date=datetime.combine(date.today(), time(0)))

    def test_announcement_in_the_past_fails(self):
        with pytest.raises(ValidationError):
            AnnouncementCreate(title="Notice", description="Text", date=future(-1))


class TestPeopleSchemas:

    def student_data(self, **overrides):
        data = {
            "username": "ana",
            "password": "secret123",
            "name": "Ana",
            "surname": "Horvat",
            "email": "ana@example.com",
            "phone": "0911234567",
            "address": "Main Street 1",
            "birthday": "2015-05-01",
            "gender": "FEMALE",
            "grade_id": str(uuid4()),
            "class_id": str(uuid4()),
            "parent_id": str(uuid4()),
        }
        data.update(overrides)
        return data

    def test_valid_student(self):
        student = StudentCreate(**self.student_data(img="", blood_type=""))
        assert student.img is None
        assert student.blood_type is None

    @pytest.mark.parametrize("username", ["ab", "a" * 21])
    def test_username_length(self, username):
        with pytest.raises(ValidationError):
            StudentCreate(**self.student_data(username=username))

    def test_short_password_fails(self):
        with pytest.raises(ValidationError):
            StudentCreate(**self.student_data(password="short"))

    def test_invalid_gender_fails(self):
        with pytest.raises(ValidationError):
            StudentCreate(**self.student_data(gender="UNKNOWN"))

    def test_update_empty_password_keeps_current(self):
        data = self.student_data(password="")
        for key in ("grade_id", "class_id", "parent_id"):
            data.pop(key)
        teacher = TeacherUpdate(**data)
        assert teacher.password is None

    def test_parent_email_optional(self):
        parent = ParentCreate(
            username="parent1", password="secret", name="Ivo", surname="Horvat",
            email="", phone="0919876543", address="Main Street 1",
        )
        assert parent.email is None

    def test_parent_update_short_password_fails(self):
        with pytest.raises(ValidationError):
            ParentUpdate(
                username="parent1", password="abc", name="Ivo", surname="Horvat",
                phone="0919876543", address="Main Street 1",
            )


class TestOtherSchemas:

    def test_class_capacity_must_be_positive(self):
        with pytest.raises(ValidationError):
            ClassCreate(name="1A", capacity=0, grade_id=uuid4())

    def test_subject_needs_a_teacher(self):
        with pytest.raises(ValidationError):
            SubjectCreate(name="History", teacher_ids=[])

    def test_module_end_before_start_fails(self):
        with pytest.raises(ValidationError):
            ModuleCreate(name="Spring", start_date=date(2030, 3, 1), end_date=date(2030, 2, 1))

    def test_certificate_years(self):
        with pytest.raises(ValidationError):
            CertificateRequest(number="1/2030", purpose="Sports club", school_year_start=2030, school_year_end=2029)

    @pytest.mark.parametrize("month,expected", [("2030-3", "2030-03"), ("2030-12", "2030-12")])
    def test_absence_month_is_normalized(self, month, expected):
        assert AbsenceReportRequest(month=month).month == expected

    @pytest.mark.parametrize("month", ["2030-13", "March", "30-01"])
    def test_absence_month_invalid(self, month):
        with pytest.raises(ValidationError):
            AbsenceReportRequest(month=month)
