"""
Integration tests for events and announcements
"""
import pytest
from httpx import AsyncClient

from conftest import in_days
from schoolhub.models import Event, Announcement


@pytest.fixture
async def notices(db_session, school):
    """One school-wide row and one row per class, for both events and announcements"""
    rows = []
    for title, class_obj, days in (("Sports day", None, 10), ("1A trip", school.class_a, 5), ("1B play", school.class_b, 3)):
        class_id = class_obj.id if class_obj else None
        rows.append(Event(
            title=title, description=title, class_id=class_id,
            start_time=in_days(days, 9), end_time=in_days(days, 11),
        ))
        rows.append(Announcement(title=title, description=title, class_id=class_id, date=in_days(days)))
    db_session.add_all(rows)
    await db_session.commit()
    return {row.title: row for row in rows if isinstance(row, Event)}


def event_payload(class_obj=None, **overrides):
    data = {
        "title": "Parents meeting",
        "description": "Room 12",
        "start_time": in_days(7, 17).isoformat(),
        "end_time": in_days(7, 18).isoformat(),
        "class_id": str(class_obj.id) if class_obj else None,
    }
    data.update(overrides)
    return data


class TestVisibility:

    async def test_admin_sees_everything(self, client: AsyncClient, notices, admin_headers):
        response = await client.get("/api/v1/events/", headers=admin_headers)

        # Newest start first
        assert [e["title"] for e in response.json()["items"]] == ["Sports day", "1A trip", "1B play"]

    async def test_student_sees_school_wide_and_own_class(self, client: AsyncClient, notices, student_headers):
        events = await client.get("/api/v1/events/", headers=student_headers)
        announcements = await client.get("/api/v1/announcements/", headers=student_headers)

        assert {e["title"] for e in events.json()["items"]} == {"Sports day", "1A trip"}
        assert {a["title"] for a in announcements.json()["items"]} == {"Sports day", "1A trip"}

    async def test_teacher_sees_taught_classes(self, client: AsyncClient, notices, other_teacher_headers):
        response = await client.get("/api/v1/events/", params={"sort": "asc"}, headers=other_teacher_headers)
        assert [e["title"] for e in response.json()["items"]] == ["1B play", "Sports day"]

    async def test_hidden_row_is_not_found(self, client: AsyncClient, notices, parent_headers):
        response = await client.get(f"/api/v1/events/{notices['1B play'].id}", headers=parent_headers)
        assert response.status_code == 404

    async def test_search(self, client: AsyncClient, notices, parent_headers):
        response = await client.get("/api/v1/announcements/", params={"search": "trip"}, headers=parent_headers)
        assert [a["title"] for a in response.json()["items"]] == ["1A trip"]


class TestEventWrites:

    async def test_teacher_creates_for_taught_class(self, client: AsyncClient, school, teacher_headers):
        response = await client.post("/api/v1/events/", json=event_payload(school.class_a), headers=teacher_headers)

        assert response.status_code == 201
        assert response.json()["event"]["class"] == {"id": str(school.class_a.id), "name": "1A"}

    async def test_teacher_cannot_create_for_other_class(self, client: AsyncClient, school, teacher_headers):
        response = await client.post("/api/v1/events/", json=event_payload(school.class_b), headers=teacher_headers)
        assert response.status_code == 403

    async def test_teacher_cannot_edit_school_wide(self, client: AsyncClient, notices, teacher_headers):
        response = await client.put(
            f"/api/v1/events/{notices['Sports day'].id}", json=event_payload(), headers=teacher_headers
        )
        assert response.status_code == 403

    async def test_students_cannot_create(self, client: AsyncClient, school, student_headers):
        response = await client.post("/api/v1/events/", json=event_payload(), headers=student_headers)
        assert response.status_code == 403

    async def test_event_in_the_past(self, client: AsyncClient, school, admin_headers):
        response = await client.post(
            "/api/v1/events/",
            json=event_payload(start_time=in_days(-1, 9).isoformat(), end_time=in_days(-1, 10).isoformat()),
            headers=admin_headers,
        )

        assert response.status_code == 422
        assert response.json()["message"] == "Start time cannot be in the past!"

    async def test_minimum_duration(self, client: AsyncClient, school, admin_headers):
        start = in_days(2, 9)
        response = await client.post(
            "/api/v1/events/",
            json=event_payload(start_time=start.isoformat(), end_time=start.replace(minute=10).isoformat()),
            headers=admin_headers,
        )

        assert response.status_code == 422
        assert response.json()["message"] == "Event must be at least 15 minutes long!"

    async def test_admin_deletes_school_wide(self, client: AsyncClient, notices, admin_headers):
        response = await client.delete(f"/api/v1/events/{notices['Sports day'].id}", headers=admin_headers)
        assert response.status_code == 200


class TestAnnouncementWrites:

    async def test_date_in_the_past(self, client: AsyncClient, school, admin_headers):
        response = await client.post(
            "/api/v1/announcements/",
            json={"title": "Late", "description": "Too late", "date": in_days(-2).isoformat(), "class_id": ""},
            headers=admin_headers,
        )

        assert response.status_code == 422
        assert response.json()["message"] == "Date cannot be in the past!"

    async def test_school_wide_announcement(self, client: AsyncClient, school, admin_headers, parent_headers):
        created = await client.post(
            "/api/v1/announcements/",
            json={"title": "Holiday", "description": "No classes", "date": in_days(1).isoformat()},
            headers=admin_headers,
        )
        assert created.status_code == 201
        assert created.json()["announcement"]["class"] is None

        listing = await client.get("/api/v1/announcements/", headers=parent_headers)
        assert [a["title"] for a in listing.json()["items"]] == ["Holiday"]
