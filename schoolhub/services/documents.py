# schoolhub/services/documents.py
"""PDF documents (reportlab) and the CSV results export (pandas).

Builders take plain dictionaries so they can be used without a database.
"""
from datetime import date
from typing import Any, Dict, List, Optional
import calendar
import io
import logging
from xml.sax.saxutils import escape

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from ..core.config import settings

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ["title", "subject", "student", "score", "teacher", "class", "date"]
RESULT_HEADERS = ["Title", "Subject", "Student", "Score", "Teacher", "Class", "Date"]

GRID_STYLE = [
    ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#e2e8f0')),
    ('TEXTCOLOR', (0, 0), (-1, 0), colors.HexColor('#2d3748')),
    ('FONTNAME', (0, 0), (-1, 0), 'Times-Bold'),
    ('FONTNAME', (0, 1), (-1, -1), 'Times-Roman'),
    ('FONTSIZE', (0, 0), (-1, -1), 10),
    ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#4a5568')),
    ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
    ('TOPPADDING', (0, 0), (-1, -1), 4),
    ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
]


def _styles() -> Dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            'DocTitle', parent=base['Heading1'], fontName='Times-Bold',
            fontSize=20, alignment=TA_CENTER, spaceAfter=6,
        ),
        "subtitle": ParagraphStyle(
            'DocSubtitle', parent=base['Heading2'], fontName='Times-Bold',
            fontSize=13, alignment=TA_CENTER, spaceAfter=12,
        ),
        "body": ParagraphStyle(
            'DocBody', parent=base['Normal'], fontName='Times-Roman',
            fontSize=12, leading=18, alignment=TA_LEFT,
        ),
        "center": ParagraphStyle(
            'DocCenter', parent=base['Normal'], fontName='Times-Roman',
            fontSize=11, alignment=TA_CENTER,
        ),
        "right": ParagraphStyle(
            'DocRight', parent=base['Normal'], fontName='Times-Roman',
            fontSize=12, alignment=TA_RIGHT,
        ),
        "label": ParagraphStyle(
            'DocLabel', parent=base['Normal'], fontName='Times-Bold', fontSize=11,
        ),
    }


def _render(content: List[Any], pagesize=A4) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=pagesize,
        rightMargin=2 * cm,
        leftMargin=2 * cm,
        topMargin=1.5 * cm,
        bottomMargin=1.5 * cm,
    )
    doc.build(content)
    pdf_bytes = buffer.getvalue()
    buffer.close()
    logger.debug(f"Rendered PDF ({len(pdf_bytes)} bytes)")
    return pdf_bytes


def _header_row(left: List[str], right: List[str], styles) -> Table:
    """Two-column letterhead: school on the left, number/date on the right"""
    rows = [
        [Paragraph(escape(l), styles["body"]), Paragraph(escape(r), styles["right"])]
        for l, r in zip(left, right)
    ]
    table = Table(rows, colWidths=[10 * cm, 7 * cm])
    table.setStyle(TableStyle([('VALIGN', (0, 0), (-1, -1), 'TOP')]))
    return table


def build_certificate_pdf(data: Dict[str, Any]) -> bytes:
    """Enrollment certificate confirming a student attends the school."""
    styles = _styles()
    school = data.get("school_name") or settings.school_name
    content = [
        _header_row(
            ["Educational institution", school],
            [f"No. {data['number']}", f"Date {data['issue_date']}"],
            styles,
        ),
        Spacer(1, 40),
        Paragraph("CERTIFICATE", styles["title"]),
        Spacer(1, 24),
        Paragraph(
            f"Student <b>{escape(data['student_name'])}</b> is enrolled in class <b>{escape(data['class_name'])}</b>, "
            f"registration number <b>{escape(data.get('registration_number') or '-')}</b>, "
            f"in the school year {data['school_year_start']} - {data['school_year_end']}. "
            "This certificate is issued by the educational institution to serve for:",
            styles["body"],
        ),
        Spacer(1, 12),
        Paragraph(escape(data["purpose"]), styles["body"]),
        Spacer(1, 60),
        _header_row(["PRINCIPAL,"], ["Secretary,"], styles),
    ]
    return _render(content)


def build_transcript_pdf(data: Dict[str, Any]) -> bytes:
    """Student record sheet with identity data and subject averages."""
    styles = _styles()
    school = data.get("school_name") or settings.school_name

    identity_rows = [
        ["School fiscal code", data.get("fiscal_code") or settings.school_fiscal_code or "-"],
        ["Name and surname", data["student_name"]],
        ["Personal code", data.get("personal_code") or "-"],
        ["Date and place of birth", f"{data['birthday']} {data.get('birth_place') or ''}".strip()],
        ["Nationality", data.get("nationality") or "-"],
        ["Parents", data.get("parents") or "-"],
        ["Parents' address", data.get("parents_address") or "-"],
        ["Student's address", data.get("student_address") or "-"],
    ]
    identity = Table(identity_rows, colWidths=[5.5 * cm, 11.5 * cm])
    identity.setStyle(TableStyle([('FONTNAME', (0, 0), (0, -1), 'Times-Bold')] + GRID_STYLE[3:]))

    subject_rows = [["Subject", "Average", "Results"]]
    for row in data.get("subjects", []):
        subject_rows.append([row["subject"], f"{row['average']:.2f}", str(row["count"])])
    if len(subject_rows) == 1:
        subject_rows.append(["No results recorded", "-", "-"])
    subjects = Table(subject_rows, colWidths=[9 * cm, 4 * cm, 4 * cm])
    subjects.setStyle(TableStyle(GRID_STYLE))

    content = [
        Paragraph("MINISTRY OF EDUCATION", styles["subtitle"]),
        Paragraph(escape(school), styles["center"]),
        Spacer(1, 20),
        Paragraph("STUDENT RECORD SHEET", styles["title"]),
        Spacer(1, 16),
        identity,
        Spacer(1, 20),
        Paragraph("General academic situation", styles["label"]),
        Spacer(1, 6),
        subjects,
    ]
    return _render(content)


def absence_totals(absences: List[Dict[str, Any]]) -> Dict[str, int]:
    excused = sum(1 for a in absences if a["excused"])
    return {
        "excused": excused,
        "unexcused": len(absences) - excused,
        "total": len(absences),
    }


def month_label(month: str) -> str:
    """'2025-03' -> 'March 2025'"""
    year, number = month.split("-")
    return f"{calendar.month_name[int(number)]} {year}"


def build_absence_report_pdf(data: Dict[str, Any]) -> bytes:
    """Monthly list of a student's absences with excused/unexcused totals."""
    styles = _styles()
    school = data.get("school_name") or settings.school_name
    absences = data.get("absences", [])
    totals = absence_totals(absences)

    rows = [["Date", "Status"]]
    for absence in absences:
        rows.append([absence["date"], "excused" if absence["excused"] else "unexcused"])
    table = Table(rows, colWidths=[10 * cm, 7 * cm])
    table.setStyle(TableStyle(GRID_STYLE))

    content = [
        _header_row(["Educational institution", school], [f"Date: {data['issue_date']}", ""], styles),
        Spacer(1, 30),
        Paragraph("Absence report", styles["title"]),
        Paragraph(f"- {month_label(data['month'])} -", styles["center"]),
        Spacer(1, 24),
        Paragraph(f"Name: {escape(data['surname'])}", styles["body"]),
        Paragraph(f"First name: {escape(data['name'])}", styles["body"]),
        Spacer(1, 16),
        table,
        Spacer(1, 16),
        Paragraph(f"Total excused absences: {totals['excused']}", styles["body"]),
        Paragraph(f"Total unexcused absences: {totals['unexcused']}", styles["body"]),
        Paragraph(f"Total absences: {totals['total']}", styles["body"]),
    ]
    return _render(content)


def build_results_pdf(
    rows: List[Dict[str, Any]],
    stats: Dict[str, Any],
    module_name: Optional[str] = None,
    generated_on: Optional[date] = None,
) -> bytes:
    """Results table followed by a statistics block."""
    styles = _styles()
    generated_on = generated_on or date.today()

    table_rows = [RESULT_HEADERS]
    for row in rows:
        table_rows.append([
            row["title"], row["subject"], row["student"], str(row["score"]),
            row["teacher"], row["class"], row["date"][:10],
        ])
    table = Table(table_rows, repeatRows=1)
    table.setStyle(TableStyle(GRID_STYLE))

    content = [
        Paragraph(escape(settings.school_name), styles["subtitle"]),
        Paragraph("Results report", styles["title"]),
        Paragraph(f"Generated on {generated_on.isoformat()}", styles["center"]),
    ]
    if module_name:
        content.append(Paragraph(f"Module: {escape(module_name)}", styles["center"]))
    content += [Spacer(1, 16), table, Spacer(1, 16)]

    if stats.get("has_data"):
        content += [
            Paragraph("Statistics", styles["label"]),
            Paragraph(f"Results: {stats['count']}", styles["body"]),
            Paragraph(f"Average score: {stats['average']}", styles["body"]),
            Paragraph(f"Highest score: {stats['max']}", styles["body"]),
            Paragraph(f"Lowest score: {stats['min']}", styles["body"]),
            Paragraph(f"Pass rate: {stats['pass_rate']}%", styles["body"]),
        ]
    else:
        content.append(Paragraph("No results match the selected filters.", styles["body"]))

    return _render(content, pagesize=landscape(A4))


def results_to_csv(rows: List[Dict[str, Any]]) -> str:
    df = pd.DataFrame(rows, columns=RESULT_COLUMNS)
    df.columns = RESULT_HEADERS
    return df.to_csv(index=False)
