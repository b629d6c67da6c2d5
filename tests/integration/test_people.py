"""
Integration tests for teachers, students, parents, classes and grades
"""
from httpx import AsyncClient

from conftest import PASSWORD, fake


def student_payload(school, username, class_obj=None, **overrides):
    class_obj = class_obj or school.class_a
    data = {
        "username": username,
        "password": PASSWORD,
        "name": fake.first_name(),
        "surname": fake.last_name(),
        "phone": fake.unique.numerify("+3859#######"),
        "email": fake.unique.email(),
        "address": fake.street_address(),
        "birthday": "2015-04-12",
        "gender": "FEMALE",
        "grade_id": str(school.grade.id),
        "class_id": str(class_obj.id),
        "parent_id": str(school.parent.id),
    }
    data.update(overrides)
    return data


def teacher_payload(school, username, **overrides):
    data = {
        "username": username,
        "password": PASSWORD,
        "name": "Ana",
        "surname": "Horvat",
        "phone": fake.unique.numerify("+3859#######"),
        "email": fake.unique.email(),
        "address": "Ilica 1, Zagreb",
        "birthday": "1985-09-30",
        "gender": "FEMALE",
        "subject_ids": [str(school.subject.id)],
    }
    data.update(overrides)
    return data


class TestStudents:

    async def test_class_capacity_is_enforced(self, client: AsyncClient, school, admin_headers):
        # 1A holds two students and already has one
        first = await client.post("/api/v1/students/", json=student_payload(school, "pupil_one"), headers=admin_headers)
        assert first.status_code == 201
        student = first.json()["student"]
        assert student["class"] == {"id": str(school.class_a.id), "name": "1A"}
        assert "password" not in student and "password_hash" not in student

        second = await client.post("/api/v1/students/", json=student_payload(school, "pupil_two"), headers=admin_headers)
        assert second.status_code == 409
        assert second.json()["error"] == "CapacityExceeded"
        assert second.json()["message"] == "Class 1A is full (capacity 2)"

    async def test_moving_into_full_class(self, client: AsyncClient, school, admin_headers):
        await client.post("/api/v1/students/", json=student_payload(school, "pupil_one"), headers=admin_headers)

        response = await client.put(
            f"/api/v1/students/{school.other_student.id}",
            json=student_payload(
                school, school.other_student.username,
                parent_id=str(school.other_parent.id), password="",
            ),
            headers=admin_headers,
        )
        assert response.status_code == 409

    async def test_update_keeps_password_when_blank(self, client: AsyncClient, school, admin_headers):
        response = await client.put(
            f"/api/v1/students/{school.student.id}",
            json=student_payload(school, school.student.username, name="Renamed", password=""),
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["student"]["name"] == "Renamed"

        login = await client.post(
            "/api/v1/auth/login", json={"username": school.student.username, "password": PASSWORD}
        )
        assert login.status_code == 200

    async def test_username_is_unique_across_roles(self, client: AsyncClient, school, admin_headers):
        response = await client.post(
            "/api/v1/students/", json=student_payload(school, school.teacher.username), headers=admin_headers
        )

        assert response.status_code == 409
        assert response.json()["error"] == "DuplicateRecord"

    async def test_unknown_parent(self, client: AsyncClient, school, admin_headers):
        response = await client.post(
            "/api/v1/students/",
            json=student_payload(school, "orphan", parent_id=str(school.class_a.id)),
            headers=admin_headers,
        )
        assert response.status_code == 404

    async def test_short_password(self, client: AsyncClient, school, admin_headers):
        response = await client.post(
            "/api/v1/students/", json=student_payload(school, "pupil_three", password="short"), headers=admin_headers
        )

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "password"

    async def test_teacher_cannot_create_student(self, client: AsyncClient, school, teacher_headers):
        response = await client.post(
            "/api/v1/students/", json=student_payload(school, "pupil_four"), headers=teacher_headers
        )
        assert response.status_code == 403

    async def test_list_filtered_by_teacher(self, client: AsyncClient, school, teacher_headers):
        response = await client.get(
            "/api/v1/students/", params={"teacher_id": str(school.teacher.id)}, headers=teacher_headers
        )

        assert response.status_code == 200
        assert [s["id"] for s in response.json()["items"]] == [str(school.student.id)]

    async def test_students_cannot_list_students(self, client: AsyncClient, school, student_headers):
        response = await client.get("/api/v1/students/", headers=student_headers)
        assert response.status_code == 403

    async def test_detail_without_records(self, client: AsyncClient, school, admin_headers):
        response = await client.get(f"/api/v1/students/{school.student.id}", headers=admin_headers)

        data = response.json()
        assert data["lessons_count"] == 1
        assert data["attendance_percentage"] is None
        assert data["results"]["overall"]["has_data"] is False


class TestTeachers:

    async def test_create_with_subjects(self, client: AsyncClient, school, admin_headers):
        response = await client.post(
            "/api/v1/teachers/", json=teacher_payload(school, "ahorvat"), headers=admin_headers
        )

        assert response.status_code == 201
        teacher = response.json()["teacher"]
        assert [s["name"] for s in teacher["subjects"]] == ["Mathematics"]

    async def test_unknown_subject(self, client: AsyncClient, school, admin_headers):
        response = await client.post(
            "/api/v1/teachers/",
            json=teacher_payload(school, "ahorvat", subject_ids=[str(school.grade.id)]),
            headers=admin_headers,
        )
        assert response.status_code == 404

    async def test_detail_counts(self, client: AsyncClient, school, teacher_headers):
        response = await client.get(f"/api/v1/teachers/{school.teacher.id}", headers=teacher_headers)

        assert response.status_code == 200
        assert response.json()["counts"] == {"subjects": 1, "lessons": 1, "classes": 1}

    async def test_search(self, client: AsyncClient, school, admin_headers):
        response = await client.get(
            "/api/v1/teachers/", params={"search": school.other_teacher.surname}, headers=admin_headers
        )
        ids = [t["id"] for t in response.json()["items"]]
        assert str(school.other_teacher.id) in ids

    async def test_delete_teacher_with_lessons(self, client: AsyncClient, school, admin_headers):
        response = await client.delete(f"/api/v1/teachers/{school.other_teacher.id}", headers=admin_headers)
        assert response.status_code == 200

        lesson = await client.get(f"/api/v1/lessons/{school.other_lesson.id}", headers=admin_headers)
        assert lesson.status_code == 404


class TestParents:

    async def test_create_parent(self, client: AsyncClient, school, admin_headers):
        response = await client.post(
            "/api/v1/parents/",
            json={
                "username": "mama_bear",
                "password": "secret1",
                "name": "Iva",
                "surname": "Kovac",
                "phone": "+385911111111",
                "email": "",
                "address": "Vukovarska 5",
            },
            headers=admin_headers,
        )

        assert response.status_code == 201
        parent = response.json()["parent"]
        assert parent["email"] is None
        assert parent["students"] == []

    async def test_parent_with_students_cannot_be_deleted(self, client: AsyncClient, school, admin_headers):
        response = await client.delete(f"/api/v1/parents/{school.parent.id}", headers=admin_headers)

        assert response.status_code == 422
        assert response.json()["success"] is False


class TestClassesAndGrades:

    async def test_list_with_student_counts(self, client: AsyncClient, school, teacher_headers):
        response = await client.get("/api/v1/classes/", headers=teacher_headers)

        assert response.status_code == 200
        counts = {c["name"]: c["students_count"] for c in response.json()["items"]}
        assert counts == {"1A": 1, "1B": 1}

    async def test_duplicate_class_name(self, client: AsyncClient, school, admin_headers):
        response = await client.post(
            "/api/v1/classes/",
            json={"name": "1A", "capacity": 20, "grade_id": str(school.grade.id)},
            headers=admin_headers,
        )
        assert response.status_code == 409

    async def test_capacity_below_enrollment(self, client: AsyncClient, school, admin_headers):
        await client.post("/api/v1/students/", json=student_payload(school, "pupil_one"), headers=admin_headers)

        response = await client.put(
            f"/api/v1/classes/{school.class_a.id}",
            json={"name": "1A", "capacity": 1, "grade_id": str(school.grade.id)},
            headers=admin_headers,
        )
        assert response.status_code == 422

    async def test_class_with_students_cannot_be_deleted(self, client: AsyncClient, school, admin_headers):
        response = await client.delete(f"/api/v1/classes/{school.class_a.id}", headers=admin_headers)
        assert response.status_code == 422

    async def test_grade_in_use_cannot_be_deleted(self, client: AsyncClient, school, admin_headers):
        response = await client.delete(f"/api/v1/grades/{school.grade.id}", headers=admin_headers)

        assert response.status_code == 422
        assert response.json()["message"] == "Grade still has classes or students"

    async def test_create_and_delete_grade(self, client: AsyncClient, school, admin_headers):
        created = await client.post("/api/v1/grades/", json={"level": 2}, headers=admin_headers)
        assert created.status_code == 201

        deleted = await client.delete(f"/api/v1/grades/{created.json()['grade']['id']}", headers=admin_headers)
        assert deleted.status_code == 200
