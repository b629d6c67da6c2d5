"""
SchoolHub - Test Configuration and Fixtures
"""
import os
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import AsyncGenerator
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from faker import Faker

# Set testing environment before the settings are loaded
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///:memory:'
os.environ['REDIS_URL'] = 'redis://localhost:6379/15'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['CACHE_ENABLED'] = 'false'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['SCHOOL_NAME'] = 'Test High School'

from schoolhub.main import app
from schoolhub.core.database import get_db
from schoolhub.core.security import create_access_token, get_password_hash
from schoolhub.models import (
    Base, Admin, Teacher, Parent, Student, Grade, ClassModel, Subject,
    Lesson, Module, Day, Gender,
)

fake = Faker()

PASSWORD = 'password123'

# A Monday far enough ahead for "not in the past" rules
MONDAY = date(2030, 1, 7)


def at(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime.combine(day, time(hour, minute))


def auth_headers_for(user, role: str) -> dict:
    token = create_access_token({
        'sub': str(user.id),
        'role': role,
        'name': f'{user.name} {user.surname}',
    })
    return {'Authorization': f'Bearer {token}'}


def person_fields() -> dict:
    return {
        'username': f'u{fake.unique.random_int(min=10000, max=99999999)}',
        'password_hash': get_password_hash(PASSWORD),
        'name': fake.first_name(),
        'surname': fake.last_name(),
        'phone': fake.unique.numerify('+3859#######'),
    }


def profile_fields() -> dict:
    return {
        **person_fields(),
        'email': fake.unique.email(),
        'birthday': fake.date_of_birth(minimum_age=8, maximum_age=60),
        'gender': fake.random_element([Gender.FEMALE, Gender.MALE]),
    }


@dataclass
class School:
    """Seed data shared by the integration tests"""
    admin: Admin
    teacher: Teacher
    other_teacher: Teacher
    parent: Parent
    other_parent: Parent
    grade: Grade
    class_a: ClassModel
    class_b: ClassModel
    subject: Subject
    student: Student
    other_student: Student
    lesson: Lesson
    other_lesson: Lesson
    module: Module


@pytest.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh SQLite database file per test"""
    engine = create_async_engine(f'sqlite+aiosqlite:///{tmp_path}/test.db', echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    await engine.dispose()


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Test client with one database session per request, as in production"""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def school(db_session: AsyncSession) -> School:
    """Two classes of one grade, two teachers, two families and a lesson per class"""
    admin = Admin(**{k: v for k, v in person_fields().items() if k != 'phone'})
    teacher = Teacher(**profile_fields(), address=fake.address())
    other_teacher = Teacher(**profile_fields(), address=fake.address())
    parent = Parent(**person_fields(), email=fake.unique.email(), address=fake.address())
    other_parent = Parent(**person_fields(), address=fake.address())
    grade = Grade(level=1)
    subject = Subject(name='Mathematics', teachers=[teacher, other_teacher])
    db_session.add_all([admin, teacher, other_teacher, parent, other_parent, grade, subject])
    await db_session.flush()

    class_a = ClassModel(name='1A', capacity=2, grade_id=grade.id, supervisor_id=teacher.id)
    class_b = ClassModel(name='1B', capacity=30, grade_id=grade.id)
    db_session.add_all([class_a, class_b])
    await db_session.flush()

    student = Student(
        **profile_fields(), address=fake.address(),
        parent_id=parent.id, grade_id=grade.id, class_id=class_a.id,
    )
    other_student = Student(
        **profile_fields(), address=fake.address(),
        parent_id=other_parent.id, grade_id=grade.id, class_id=class_b.id,
    )
    lesson = Lesson(
        name='Mathematics 1A', day=Day.MONDAY,
        start_time=at(MONDAY, 9), end_time=at(MONDAY, 10),
        subject_id=subject.id, class_id=class_a.id, teacher_id=teacher.id,
    )
    other_lesson = Lesson(
        name='Mathematics 1B', day=Day.MONDAY,
        start_time=at(MONDAY, 11), end_time=at(MONDAY, 12),
        subject_id=subject.id, class_id=class_b.id, teacher_id=other_teacher.id,
    )
    module = Module(name='Winter 2030', start_date=date(2030, 1, 1), end_date=date(2030, 1, 31))
    db_session.add_all([student, other_student, lesson, other_lesson, module])
    await db_session.commit()

    return School(
        admin=admin, teacher=teacher, other_teacher=other_teacher,
        parent=parent, other_parent=other_parent, grade=grade,
        class_a=class_a, class_b=class_b, subject=subject,
        student=student, other_student=other_student,
        lesson=lesson, other_lesson=other_lesson, module=module,
    )


@pytest.fixture
def admin_headers(school: School) -> dict:
    return auth_headers_for(school.admin, 'admin')


@pytest.fixture
def teacher_headers(school: School) -> dict:
    return auth_headers_for(school.teacher, 'teacher')


@pytest.fixture
def other_teacher_headers(school: School) -> dict:
    return auth_headers_for(school.other_teacher, 'teacher')


@pytest.fixture
def student_headers(school: School) -> dict:
    return auth_headers_for(school.student, 'student')


@pytest.fixture
def parent_headers(school: School) -> dict:
    return auth_headers_for(school.parent, 'parent')


def in_days(days: int, hour: int = 10) -> datetime:
    return at(date.today() + timedelta(days=days), hour)
