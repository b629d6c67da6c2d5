"""
Unit tests for the PDF builders and the CSV export
"""
import io

import pandas as pd
import pytest

from schoolhub.services.documents import (
    RESULT_HEADERS,
    absence_totals,
    build_absence_report_pdf,
    build_certificate_pdf,
    build_results_pdf,
    build_transcript_pdf,
    month_label,
    results_to_csv,
)
from schoolhub.services.scores import summarize_scores


@pytest.fixture
def result_rows():
    return [
        {
            "id": "1", "title": "Algebra test", "type": "exam", "subject": "Mathematics",
            "student_id": "s1", "student": "Ana Horvat", "score": 85,
            "teacher": "Ivo Kovac", "class": "1A", "date": "2030-01-07T09:00:00",
        },
        {
            "id": "2", "title": "Essay <draft>", "type": "assignment", "subject": "English",
            "student_id": "s2", "student": "Marko Babic", "score": 40,
            "teacher": "Eva Novak", "class": "1B", "date": "2030-01-08T00:00:00",
        },
    ]


def test_certificate_is_a_pdf():
    pdf = build_certificate_pdf({
        "number": "12/2030",
        "issue_date": "07.01.2030",
        "student_name": "Ana Horvat",
        "class_name": "1A",
        "registration_number": None,
        "school_year_start": 2029,
        "school_year_end": 2030,
        "purpose": "Sports club & swimming",
    })
    assert pdf.startswith(b"%PDF")


def test_transcript_without_results():
    pdf = build_transcript_pdf({
        "student_name": "Ana Horvat",
        "birthday": "01.05.2015",
        "subjects": [],
    })
    assert pdf.startswith(b"%PDF")


def test_transcript_with_subjects():
    pdf = build_transcript_pdf({
        "student_name": "Ana Horvat",
        "birthday": "01.05.2015",
        "birth_place": "Zagreb",
        "parents": "Ivo Horvat",
        "subjects": [{"subject": "Mathematics", "average": 85.5, "count": 2}],
    })
    assert pdf.startswith(b"%PDF")


def test_absence_totals():
    totals = absence_totals([{"excused": True}, {"excused": False}, {"excused": False}])
    assert totals == {"excused": 1, "unexcused": 2, "total": 3}


def test_month_label():
    assert month_label("2030-03") == "March 2030"


def test_absence_report_is_a_pdf():
    pdf = build_absence_report_pdf({
        "issue_date": "31.03.2030",
        "name": "Ana",
        "surname": "Horvat",
        "month": "2030-03",
        "absences": [{"date": "04.03.2030", "excused": True}],
    })
    assert pdf.startswith(b"%PDF")


def test_results_report(result_rows):
    stats = summarize_scores([row["score"] for row in result_rows])
    pdf = build_results_pdf(result_rows, stats, module_name="Winter 2030")
    assert pdf.startswith(b"%PDF")


def test_results_report_without_rows():
    pdf = build_results_pdf([], summarize_scores([]))
    assert pdf.startswith(b"%PDF")


def test_results_csv(result_rows):
    df = pd.read_csv(io.StringIO(results_to_csv(result_rows)))
    assert list(df.columns) == RESULT_HEADERS
    assert len(df) == 2
    assert df.loc[0, "Score"] == 85
    assert df.loc[1, "Title"] == "Essay <draft>"
