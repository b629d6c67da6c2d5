"""
Integration tests for exams, assignments and results
"""
from dataclasses import dataclass

import pytest
from httpx import AsyncClient

from conftest import MONDAY, at, in_days
from schoolhub.models import Exam, Assignment, Result


@dataclass
class Graded:
    exam: Exam
    assignment: Assignment
    other_exam: Exam


@pytest.fixture
async def graded(db_session, school) -> Graded:
    """Two results in 1A, one in 1B"""
    exam = Exam(title="Fractions", start_time=at(MONDAY, 9), end_time=at(MONDAY, 10), lesson_id=school.lesson.id)
    assignment = Assignment(
        title="Homework 1", start_date=at(MONDAY, 9), due_date=at(MONDAY, 14), lesson_id=school.lesson.id
    )
    other_exam = Exam(
        title="Geometry", start_time=at(MONDAY, 11), end_time=at(MONDAY, 12), lesson_id=school.other_lesson.id
    )
    db_session.add_all([exam, assignment, other_exam])
    await db_session.flush()

    db_session.add_all([
        Result(score=85, student_id=school.student.id, exam_id=exam.id),
        Result(score=40, student_id=school.student.id, assignment_id=assignment.id),
        Result(score=70, student_id=school.other_student.id, exam_id=other_exam.id),
    ])
    await db_session.commit()
    return Graded(exam=exam, assignment=assignment, other_exam=other_exam)


class TestResultVisibility:

    async def test_admin_sees_everything(self, client: AsyncClient, graded, admin_headers):
        response = await client.get("/api/v1/results/", params={"sort_grade": "score_desc"}, headers=admin_headers)

        assert response.status_code == 200
        assert [r["score"] for r in response.json()["items"]] == [85, 70, 40]

    async def test_teacher_sees_own_lessons(self, client: AsyncClient, graded, teacher_headers, other_teacher_headers):
        own = await client.get("/api/v1/results/", headers=teacher_headers)
        other = await client.get("/api/v1/results/", headers=other_teacher_headers)

        assert own.json()["total"] == 2
        assert [r["title"] for r in other.json()["items"]] == ["Geometry"]

    async def test_student_sees_own_results(self, client: AsyncClient, school, graded, student_headers):
        response = await client.get("/api/v1/results/", headers=student_headers)

        items = response.json()["items"]
        assert {r["student_id"] for r in items} == {str(school.student.id)}
        assert {r["type"] for r in items} == {"exam", "assignment"}

    async def test_parent_sees_children(self, client: AsyncClient, school, graded, parent_headers):
        response = await client.get("/api/v1/results/", headers=parent_headers)
        assert response.json()["total"] == 2

    async def test_filters(self, client: AsyncClient, school, graded, admin_headers):
        by_class = await client.get(
            "/api/v1/results/", params={"class_id": str(school.class_b.id)}, headers=admin_headers
        )
        by_title = await client.get("/api/v1/results/", params={"title": "Homework 1"}, headers=admin_headers)
        by_search = await client.get(
            "/api/v1/results/", params={"search": school.other_student.surname}, headers=admin_headers
        )

        assert by_class.json()["total"] == 1
        assert [r["score"] for r in by_title.json()["items"]] == [40]
        assert by_search.json()["items"][0]["student_id"] == str(school.other_student.id)

    async def test_module_filter(self, client: AsyncClient, school, graded, admin_headers):
        response = await client.get(
            "/api/v1/results/", params={"module_id": str(school.module.id)}, headers=admin_headers
        )
        assert response.json()["total"] == 3


class TestResultWrites:

    async def test_teacher_records_result(self, client: AsyncClient, school, graded, teacher_headers):
        response = await client.post(
            "/api/v1/results/",
            json={"score": 100, "student_id": str(school.student.id), "exam_id": str(graded.exam.id)},
            headers=teacher_headers,
        )

        assert response.status_code == 201
        result = response.json()["result"]
        assert result["subject"] == "Mathematics"
        assert result["class"] == "1A"

    async def test_student_must_be_in_lesson_class(self, client: AsyncClient, school, graded, teacher_headers):
        response = await client.post(
            "/api/v1/results/",
            json={"score": 50, "student_id": str(school.other_student.id), "exam_id": str(graded.exam.id)},
            headers=teacher_headers,
        )

        assert response.status_code == 422
        assert response.json()["field"] == "student_id"

    async def test_teacher_cannot_grade_colleague_exam(self, client: AsyncClient, school, graded, teacher_headers):
        response = await client.post(
            "/api/v1/results/",
            json={"score": 50, "student_id": str(school.other_student.id), "exam_id": str(graded.other_exam.id)},
            headers=teacher_headers,
        )
        assert response.status_code == 403

    async def test_exactly_one_assessment(self, client: AsyncClient, school, graded, admin_headers):
        response = await client.post(
            "/api/v1/results/",
            json={
                "score": 50,
                "student_id": str(school.student.id),
                "exam_id": str(graded.exam.id),
                "assignment_id": str(graded.assignment.id),
            },
            headers=admin_headers,
        )

        assert response.status_code == 422
        assert response.json()["message"] == "A result belongs to exactly one exam or assignment"

    @pytest.mark.parametrize("score", [-1, 101])
    async def test_score_range(self, client: AsyncClient, school, graded, admin_headers, score):
        response = await client.post(
            "/api/v1/results/",
            json={"score": score, "student_id": str(school.student.id), "exam_id": str(graded.exam.id)},
            headers=admin_headers,
        )
        assert response.status_code == 422

    async def test_students_cannot_write(self, client: AsyncClient, school, graded, student_headers):
        response = await client.post(
            "/api/v1/results/",
            json={"score": 100, "student_id": str(school.student.id), "exam_id": str(graded.exam.id)},
            headers=student_headers,
        )
        assert response.status_code == 403


class TestExports:

    async def test_pdf_report(self, client: AsyncClient, school, graded, admin_headers):
        response = await client.get(
            "/api/v1/results/export.pdf", params={"module_id": str(school.module.id)}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"].startswith('attachment; filename="results_')
        assert response.content.startswith(b"%PDF")

    async def test_csv_is_scoped_to_caller(self, client: AsyncClient, school, graded, student_headers):
        response = await client.get("/api/v1/results/export.csv", headers=student_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        lines = response.text.strip().splitlines()
        assert lines[0] == "Title,Subject,Student,Score,Teacher,Class,Date"
        assert len(lines) == 3
        assert "Geometry" not in response.text

    async def test_empty_pdf_report(self, client: AsyncClient, school, parent_headers):
        response = await client.get("/api/v1/results/export.pdf", headers=parent_headers)

        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")


class TestExams:

    async def test_create_exam(self, client: AsyncClient, school, teacher_headers):
        response = await client.post(
            "/api/v1/exams/",
            json={
                "title": "Midterm",
                "start_time": in_days(3, 9).isoformat(),
                "end_time": in_days(3, 10).isoformat(),
                "lesson_id": str(school.lesson.id),
            },
            headers=teacher_headers,
        )

        assert response.status_code == 201
        assert response.json()["exam"]["lesson"]["class"] == "1A"

    async def test_exam_in_the_past(self, client: AsyncClient, school, admin_headers):
        response = await client.post(
            "/api/v1/exams/",
            json={
                "title": "Midterm",
                "start_time": in_days(-3, 9).isoformat(),
                "end_time": in_days(-3, 10).isoformat(),
                "lesson_id": str(school.lesson.id),
            },
            headers=admin_headers,
        )

        assert response.status_code == 422
        assert response.json()["message"] == "Start time cannot be in the past"

    async def test_assignment_due_before_start(self, client: AsyncClient, school, admin_headers):
        response = await client.post(
            "/api/v1/assignments/",
            json={
                "title": "Essay",
                "start_date": in_days(5).isoformat(),
                "due_date": in_days(4).isoformat(),
                "lesson_id": str(school.lesson.id),
            },
            headers=admin_headers,
        )
        assert response.status_code == 422

    async def test_exam_list_is_scoped(self, client: AsyncClient, school, graded, student_headers):
        response = await client.get("/api/v1/exams/", headers=student_headers)
        assert [e["title"] for e in response.json()["items"]] == ["Fractions"]

    async def test_deleting_exam_removes_results(self, client: AsyncClient, school, graded, admin_headers):
        response = await client.delete(f"/api/v1/exams/{graded.exam.id}", headers=admin_headers)
        assert response.status_code == 200

        remaining = await client.get("/api/v1/results/", headers=admin_headers)
        assert remaining.json()["total"] == 2
