"""
Interview report rendering.

build_report_sections() shapes a SessionSummary into the report's content
(what the document says); render_report_pdf() lays that content out as a
PDF with reportlab.
"""
import io
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm, mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from xml.sax.saxutils import escape

from app.schemas.interview import SessionSummary

logger = logging.getLogger(__name__)

REPORT_TITLE = "Mock Interview Report"


@dataclass
class ReportSection:
    heading: str
    lines: List[str] = field(default_factory=list)
    numbered: bool = False


@dataclass
class ReportContent:
    title: str
    header: List[Tuple[str, str]]
    overview: List[Tuple[str, str]]
    sections: List[ReportSection]


def report_filename(session_id) -> str:
    return f"mock-interview-{session_id}.pdf"


def _format_timestamp(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M UTC") if value else "N/A"


def build_report_sections(summary: SessionSummary) -> ReportContent:
    """
    Shape the summary into report content.
    
    Sections with nothing to show (no strengths, no feedback, ...) are left
    out; the round-wise section is always present.
    """
    role_name = summary.role_profile.name if summary.role_profile else "N/A"
    header = [
        ("Session ID", str(summary.session_id)),
        ("Role", role_name),
        ("Mode", summary.mode),
        ("Status", summary.status),
        ("Started", _format_timestamp(summary.started_at)),
        ("Completed", _format_timestamp(summary.completed_at)),
    ]
    overview = [
        ("Overall Score", f"{summary.overall_score}/10"),
        (
            "Completion",
            f"{summary.questions_answered}/{summary.total_questions} ({summary.completion_percentage}%)",
        ),
        ("Time Spent", f"{summary.total_time_spent_seconds}s of {summary.estimated_time_seconds}s estimated"),
        ("Time Efficiency", f"{summary.time_efficiency}%"),
        ("Hiring Recommendation", "Hire-ready" if summary.is_hireable else "Needs improvement"),
        ("Recommendation Detail", summary.hiring_recommendation.replace("\n", " ")),
    ]

    round_lines = []
    for performance in summary.round_wise_performance:
        round_lines.append(
            f"{performance.round_type.upper()}: Score {performance.average_score}/10 | "
            f"Completion {performance.completion_percentage}% | "
            f"Answered {performance.questions_answered}/{performance.total_questions} | "
            f"Time {performance.total_time_spent_seconds}s"
        )
    sections = [ReportSection("Round-wise Performance", round_lines)]

    for heading, items in (
        ("Key Strengths", summary.overall_strengths),
        ("Areas to Improve", summary.overall_weaknesses),
        ("Actionable Tips", summary.overall_improvement_tips),
    ):
        if items:
            sections.append(ReportSection(heading, list(items), numbered=True))

    if summary.detailed_feedback:
        sections.append(ReportSection(
            "Detailed Feedback",
            [
                f"{entry.round_type.upper()} - Score {entry.score}/10: {entry.feedback}"
                for entry in summary.detailed_feedback
            ],
            numbered=True,
        ))

    return ReportContent(title=REPORT_TITLE, header=header, overview=overview, sections=sections)


def _styles():
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "ReportTitle",
            parent=base["Title"],
            fontSize=20,
            textColor=colors.HexColor("#0d47a1"),
            spaceAfter=6 * mm,
        ),
        "heading": ParagraphStyle(
            "ReportHeading",
            parent=base["Heading2"],
            fontSize=14,
            textColor=colors.HexColor("#0d47a1"),
            spaceBefore=5 * mm,
            spaceAfter=2 * mm,
        ),
        "body": ParagraphStyle(
            "ReportBody",
            parent=base["Normal"],
            fontSize=10,
            leading=14,
            textColor=colors.HexColor("#333333"),
            spaceAfter=1.5 * mm,
        ),
    }


def _key_value_table(rows: List[Tuple[str, str]], style: ParagraphStyle) -> Table:
    data = [[Paragraph(escape(k), style), Paragraph(escape(v), style)] for k, v in rows]
    table = Table(data, colWidths=[5 * cm, 11 * cm])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (0, -1), colors.HexColor("#e3f2fd")),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#bbdefb")),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]))
    return table


def render_report_pdf(summary: SessionSummary) -> bytes:
    """Render the summary as an A4 PDF and return its bytes."""
    content = build_report_sections(summary)
    styles = _styles()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=2 * cm,
        rightMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2 * cm,
        title=content.title,
    )

    elements = [
        Paragraph(escape(content.title), styles["title"]),
        _key_value_table(content.header, styles["body"]),
        Paragraph("Performance Overview", styles["heading"]),
        _key_value_table(content.overview, styles["body"]),
    ]
    for section in content.sections:
        elements.append(Paragraph(escape(section.heading), styles["heading"]))
        if not section.lines:
            elements.append(Paragraph("No data yet.", styles["body"]))
        for index, line in enumerate(section.lines, start=1):
            text = f"{index}. {line}" if section.numbered else line
            elements.append(Paragraph(escape(text), styles["body"]))
        elements.append(Spacer(1, 2 * mm))

    doc.build(elements)
    pdf = buffer.getvalue()
    logger.debug(f"Rendered report for session {summary.session_id} ({len(pdf)} bytes)")
    return pdf
