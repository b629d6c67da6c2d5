"""initial school schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DAY = sa.Enum('MONDAY', 'TUESDAY', 'WEDNESDAY', 'THURSDAY', 'FRIDAY', name='day', native_enum=False, length=10)
GENDER = sa.Enum('FEMALE', 'MALE', 'OTHER', name='gender', native_enum=False, length=10)

# Tables in creation order; dropped in reverse
TABLES = [
    'admins', 'grades', 'subjects', 'modules', 'parents', 'teachers',
    'teacher_subjects', 'holidays', 'classes', 'students', 'lessons',
    'exams', 'assignments', 'results', 'attendances', 'events', 'announcements',
]


def base_columns():
    return [
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
    ]


def person_columns():
    return [
        sa.Column('username', sa.String(length=20), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('surname', sa.String(length=100), nullable=False),
    ]


def profile_columns():
    return [
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('img', sa.String(length=500), nullable=True),
        sa.Column('blood_type', sa.String(length=5), nullable=True),
        sa.Column('birthday', sa.Date(), nullable=False),
        sa.Column('gender', GENDER, nullable=False),
    ]


def create_base_indexes(table: str) -> None:
    op.create_index(f'ix_{table}_id', table, ['id'])
    op.create_index(f'ix_{table}_created_at', table, ['created_at'])


def upgrade() -> None:
    op.create_table(
        'admins',
        *base_columns(),
        *person_columns(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_admins_username', 'admins', ['username'], unique=True)

    op.create_table(
        'grades',
        *base_columns(),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('level'),
    )

    op.create_table(
        'subjects',
        *base_columns(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_subjects_name', 'subjects', ['name'], unique=True)

    op.create_table(
        'modules',
        *base_columns(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'parents',
        *base_columns(),
        *person_columns(),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('phone'),
    )
    op.create_index('ix_parents_username', 'parents', ['username'], unique=True)

    op.create_table(
        'teachers',
        *base_columns(),
        *person_columns(),
        *profile_columns(),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('phone'),
    )
    op.create_index('ix_teachers_username', 'teachers', ['username'], unique=True)

    op.create_table(
        'teacher_subjects',
        sa.Column('teacher_id', sa.Uuid(), nullable=False),
        sa.Column('subject_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['subject_id'], ['subjects.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['teacher_id'], ['teachers.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('teacher_id', 'subject_id'),
    )

    op.create_table(
        'holidays',
        *base_columns(),
        sa.Column('module_id', sa.Uuid(), nullable=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(['module_id'], ['modules.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_holidays_module_id', 'holidays', ['module_id'])
    op.create_index('ix_holidays_date', 'holidays', ['date'])

    op.create_table(
        'classes',
        *base_columns(),
        sa.Column('grade_id', sa.Uuid(), nullable=False),
        sa.Column('supervisor_id', sa.Uuid(), nullable=True),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['grade_id'], ['grades.id']),
        sa.ForeignKeyConstraint(['supervisor_id'], ['teachers.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_classes_name', 'classes', ['name'], unique=True)
    op.create_index('ix_classes_grade_id', 'classes', ['grade_id'])
    op.create_index('ix_classes_supervisor_id', 'classes', ['supervisor_id'])

    op.create_table(
        'students',
        *base_columns(),
        sa.Column('parent_id', sa.Uuid(), nullable=False),
        sa.Column('grade_id', sa.Uuid(), nullable=False),
        sa.Column('class_id', sa.Uuid(), nullable=False),
        *person_columns(),
        *profile_columns(),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.ForeignKeyConstraint(['class_id'], ['classes.id']),
        sa.ForeignKeyConstraint(['grade_id'], ['grades.id']),
        sa.ForeignKeyConstraint(['parent_id'], ['parents.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('phone'),
    )
    op.create_index('ix_students_username', 'students', ['username'], unique=True)
    op.create_index('ix_students_class_id', 'students', ['class_id'])
    op.create_index('ix_students_parent_id', 'students', ['parent_id'])

    op.create_table(
        'lessons',
        *base_columns(),
        sa.Column('subject_id', sa.Uuid(), nullable=False),
        sa.Column('class_id', sa.Uuid(), nullable=False),
        sa.Column('teacher_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('day', DAY, nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['class_id'], ['classes.id']),
        sa.ForeignKeyConstraint(['subject_id'], ['subjects.id']),
        sa.ForeignKeyConstraint(['teacher_id'], ['teachers.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_lessons_teacher_day', 'lessons', ['teacher_id', 'day'])
    op.create_index('ix_lessons_class_id', 'lessons', ['class_id'])
    op.create_index('ix_lessons_start_time', 'lessons', ['start_time'])

    op.create_table(
        'exams',
        *base_columns(),
        sa.Column('lesson_id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['lesson_id'], ['lessons.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_exams_lesson_id', 'exams', ['lesson_id'])

    op.create_table(
        'assignments',
        *base_columns(),
        sa.Column('lesson_id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('due_date', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['lesson_id'], ['lessons.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_assignments_lesson_id', 'assignments', ['lesson_id'])

    op.create_table(
        'results',
        *base_columns(),
        sa.Column('student_id', sa.Uuid(), nullable=False),
        sa.Column('exam_id', sa.Uuid(), nullable=True),
        sa.Column('assignment_id', sa.Uuid(), nullable=True),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.CheckConstraint('score >= 0 AND score <= 100', name='ck_results_score_range'),
        sa.ForeignKeyConstraint(['assignment_id'], ['assignments.id']),
        sa.ForeignKeyConstraint(['exam_id'], ['exams.id']),
        sa.ForeignKeyConstraint(['student_id'], ['students.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_results_student_id', 'results', ['student_id'])

    op.create_table(
        'attendances',
        *base_columns(),
        sa.Column('student_id', sa.Uuid(), nullable=False),
        sa.Column('lesson_id', sa.Uuid(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('present', sa.Boolean(), nullable=False),
        sa.Column('excused', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['lesson_id'], ['lessons.id']),
        sa.ForeignKeyConstraint(['student_id'], ['students.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_attendances_student_id', 'attendances', ['student_id'])
    op.create_index('ix_attendances_date', 'attendances', ['date'])

    op.create_table(
        'events',
        *base_columns(),
        sa.Column('class_id', sa.Uuid(), nullable=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['class_id'], ['classes.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_events_class_id', 'events', ['class_id'])

    op.create_table(
        'announcements',
        *base_columns(),
        sa.Column('class_id', sa.Uuid(), nullable=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['class_id'], ['classes.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_announcements_class_id', 'announcements', ['class_id'])

    for table in TABLES:
        if table != 'teacher_subjects':
            create_base_indexes(table)


def downgrade() -> None:
    for table in reversed(TABLES):
        op.drop_table(table)
