"""
Unit tests for recurring lesson generation and overlap detection
"""
from dataclasses import dataclass
from datetime import date, datetime, time
from uuid import uuid4

import pytest

from schoolhub.models import Day
from schoolhub.services.scheduling import (
    LessonTemplate,
    day_of,
    find_conflicts,
    generate_recurring_lessons,
    intervals_overlap,
    iter_lesson_dates,
    minutes_of_day,
)


@dataclass
class Period:
    start_date: date
    end_date: date


@dataclass
class Slot:
    start_time: datetime
    end_time: datetime


def slot(hour_from, minute_from, hour_to, minute_to):
    day = date(2030, 1, 7)
    return Slot(
        datetime.combine(day, time(hour_from, minute_from)),
        datetime.combine(day, time(hour_to, minute_to)),
    )


def template(**overrides):
    data = {
        "name": "Physics",
        "day": Day.MONDAY,
        "start_time": time(9, 0),
        "end_time": time(10, 0),
        "subject_id": uuid4(),
        "class_id": uuid4(),
        "teacher_id": uuid4(),
    }
    data.update(overrides)
    return LessonTemplate(**data)


class TestIntervals:

    def test_minutes_ignore_seconds(self):
        assert minutes_of_day(time(9, 30, 59)) == 570
        assert minutes_of_day(datetime(2030, 1, 7, 9, 30, 1)) == 570

    def test_overlapping_intervals(self):
        assert intervals_overlap(time(9), time(10), time(9, 30), time(10, 30))
        assert intervals_overlap(time(9, 30), time(10, 30), time(9), time(10))

    def test_contained_interval_overlaps(self):
        assert intervals_overlap(time(8), time(12), time(9), time(10))

    def test_touching_endpoints_do_not_overlap(self):
        assert not intervals_overlap(time(9), time(10), time(10), time(11))
        assert not intervals_overlap(time(10), time(11), time(9), time(10))

    def test_seconds_do_not_create_overlap(self):
        assert not intervals_overlap(time(9), time(10, 0, 30), time(10), time(11))

    def test_date_part_is_ignored(self):
        monday = datetime(2030, 1, 7, 9)
        next_monday = datetime(2030, 1, 14, 9, 30)
        assert intervals_overlap(monday, monday.replace(hour=10), next_monday, next_monday.replace(hour=11))

    def test_find_conflicts_returns_only_overlapping(self):
        existing = [slot(8, 0, 9, 0), slot(9, 30, 10, 30), slot(10, 0, 11, 0), slot(12, 0, 13, 0)]
        conflicts = find_conflicts(time(9, 0), time(10, 0), existing)
        assert conflicts == [existing[1]]

    def test_find_conflicts_empty_when_available(self):
        assert find_conflicts(time(14), time(15), [slot(8, 0, 9, 0)]) == []


class TestLessonDates:

    def test_day_of(self):
        assert day_of(date(2030, 1, 7)) == Day.MONDAY
        assert day_of(date(2030, 1, 11)) == Day.FRIDAY
        assert day_of(date(2030, 1, 12)) is None

    def test_every_matching_weekday_in_range(self):
        dates = list(iter_lesson_dates(Day.MONDAY, date(2030, 1, 1), date(2030, 1, 31)))
        assert dates == [date(2030, 1, 7), date(2030, 1, 14), date(2030, 1, 21), date(2030, 1, 28)]

    def test_range_bounds_are_inclusive(self):
        dates = list(iter_lesson_dates(Day.MONDAY, date(2030, 1, 7), date(2030, 1, 14)))
        assert dates == [date(2030, 1, 7), date(2030, 1, 14)]

    def test_holidays_are_skipped(self):
        dates = list(iter_lesson_dates(
            Day.MONDAY, date(2030, 1, 1), date(2030, 1, 31),
            holidays=[date(2030, 1, 14), date(2030, 1, 15)],
        ))
        assert date(2030, 1, 14) not in dates
        assert len(dates) == 3

    def test_no_matching_day(self):
        assert list(iter_lesson_dates(Day.FRIDAY, date(2030, 1, 7), date(2030, 1, 10))) == []

    def test_accepts_day_value(self):
        dates = list(iter_lesson_dates("WEDNESDAY", date(2030, 1, 1), date(2030, 1, 10)))
        assert dates == [date(2030, 1, 2), date(2030, 1, 9)]


class TestGenerateRecurringLessons:

    @pytest.mark.parametrize("day,start,end,holidays,expected", [
        (Day.MONDAY, date(2030, 1, 1), date(2030, 1, 31), [], 4),
        (Day.MONDAY, date(2030, 1, 1), date(2030, 1, 31), [date(2030, 1, 14)], 3),
        (Day.TUESDAY, date(2030, 1, 1), date(2030, 1, 31), [date(2030, 1, 14)], 5),
        (Day.FRIDAY, date(2030, 1, 1), date(2030, 6, 30), [date(2030, 1, 4), date(2030, 4, 19)], 24),
    ])
    def test_count_is_matching_weekdays_minus_holidays(self, day, start, end, holidays, expected):
        lessons = generate_recurring_lessons(template(day=day), Period(start, end), holidays)
        assert len(lessons) == expected

    def test_occurrence_fields(self):
        tpl = template(start_time=time(9, 15, 42), end_time=time(10, 0))
        lessons = generate_recurring_lessons(tpl, Period(date(2030, 1, 1), date(2030, 1, 10)))

        first = lessons[0]
        assert first.name == "Physics - 07.01.2030"
        assert first.day == Day.MONDAY
        assert first.start_time == datetime(2030, 1, 7, 9, 15)
        assert first.end_time == datetime(2030, 1, 7, 10, 0)
        assert first.teacher_id == tpl.teacher_id
        assert first.as_dict()["class_id"] == tpl.class_id

    def test_occurrences_fall_on_the_template_day(self):
        lessons = generate_recurring_lessons(
            template(day=Day.THURSDAY), Period(date(2030, 2, 1), date(2030, 5, 31))
        )
        assert lessons
        assert all(lesson.start_time.weekday() == 3 for lesson in lessons)

    def test_empty_module(self):
        lessons = generate_recurring_lessons(template(), Period(date(2030, 1, 8), date(2030, 1, 11)))
        assert lessons == []
