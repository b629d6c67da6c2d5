# schoolhub/services/scheduling.py
"""Recurring lesson generation and teacher overlap detection.

Pure functions with no database access. Times are compared at minute
granularity on the clock time of day, and intervals are half-open:
a lesson ending at 10:00 does not collide with one starting at 10:00.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Iterator, List, Optional, Set, Union
from uuid import UUID

from ..models.enums import Day

WEEKDAYS = {
    Day.MONDAY: 0,
    Day.TUESDAY: 1,
    Day.WEDNESDAY: 2,
    Day.THURSDAY: 3,
    Day.FRIDAY: 4,
}

DAY_BY_WEEKDAY = {number: day for day, number in WEEKDAYS.items()}

Clock = Union[time, datetime]


@dataclass(frozen=True)
class LessonTemplate:
    name: str
    day: Day
    start_time: time
    end_time: time
    subject_id: Optional[UUID] = None
    class_id: Optional[UUID] = None
    teacher_id: Optional[UUID] = None


@dataclass(frozen=True)
class LessonOccurrence:
    name: str
    day: Day
    start_time: datetime
    end_time: datetime
    subject_id: Optional[UUID] = None
    class_id: Optional[UUID] = None
    teacher_id: Optional[UUID] = None

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "day": self.day,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "subject_id": self.subject_id,
            "class_id": self.class_id,
            "teacher_id": self.teacher_id,
        }


def day_of(value: date) -> Optional[Day]:
    """School day of a date, None on weekends."""
    return DAY_BY_WEEKDAY.get(value.weekday())


def minutes_of_day(value: Clock) -> int:
    return value.hour * 60 + value.minute


def intervals_overlap(a_start: Clock, a_end: Clock, b_start: Clock, b_end: Clock) -> bool:
    return (
        minutes_of_day(a_start) < minutes_of_day(b_end)
        and minutes_of_day(b_start) < minutes_of_day(a_end)
    )


def iter_lesson_dates(
    day: Day,
    start_date: date,
    end_date: date,
    holidays: Iterable[date] = (),
) -> Iterator[date]:
    """Dates in [start_date, end_date] falling on ``day`` that are not holidays."""
    weekday = WEEKDAYS[Day(day)]
    skipped: Set[date] = set(holidays)

    # Jump straight to the first matching weekday, then step a week at a time
    current = start_date + timedelta(days=(weekday - start_date.weekday()) % 7)
    while current <= end_date:
        if current not in skipped:
            yield current
        current += timedelta(days=7)


def _clock(value: time) -> time:
    return value.replace(second=0, microsecond=0, tzinfo=None)


def generate_recurring_lessons(
    template: LessonTemplate,
    module: Any,
    holidays: Iterable[date] = (),
) -> List[LessonOccurrence]:
    """One occurrence per matching day of the module (anything with start_date/end_date)."""
    start_clock = _clock(template.start_time)
    end_clock = _clock(template.end_time)

    return [
        LessonOccurrence(
            name=f"{template.name} - {lesson_date.strftime('%d.%m.%Y')}",
            day=Day(template.day),
            start_time=datetime.combine(lesson_date, start_clock),
            end_time=datetime.combine(lesson_date, end_clock),
            subject_id=template.subject_id,
            class_id=template.class_id,
            teacher_id=template.teacher_id,
        )
        for lesson_date in iter_lesson_dates(template.day, module.start_date, module.end_date, holidays)
    ]


def find_conflicts(candidate_start: Clock, candidate_end: Clock, existing: Iterable[Any]) -> List[Any]:
    """Existing lessons (anything with start_time/end_time) overlapping the candidate."""
    return [
        lesson for lesson in existing
        if intervals_overlap(candidate_start, candidate_end, lesson.start_time, lesson.end_time)
    ]
