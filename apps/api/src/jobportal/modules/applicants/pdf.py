"""
Application Form PDF

Renders an applicant's record as a printable application form: profile,
qualifications, experiences and document status, each as label/value grids.
"""

from io import BytesIO
from typing import Any
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from jobportal.modules.applicants.models import OTHER_CHOICE, Applicant

LABEL_COLOR = colors.HexColor("#0f4ec7")
LABEL_BACKGROUND = colors.HexColor("#eef3ff")
GRID_COLOR = colors.HexColor("#d0d7e4")
COLUMN_WIDTHS = [32 * mm, 53 * mm, 32 * mm, 53 * mm]

Row = list[tuple[str, Any]]


def _text(value: Any) -> str:
    if value is None or value == "":
        return "-"
    if hasattr(value, "isoformat"):
        return value.isoformat()[:10]
    return str(value)


def _with_other(choice: str | None, other: str | None) -> str:
    if choice == OTHER_CHOICE and other:
        return f"{choice} ({other})"
    return _text(choice)


def _uploaded(ref: str | None) -> str:
    return "Uploaded" if ref else "Missing"


class _FormBuilder:
    def __init__(self):
        self.styles = getSampleStyleSheet()
        self.label_style = self.styles["BodyText"].clone(
            "FormLabel", fontName="Helvetica-Bold", fontSize=9, leading=11, textColor=LABEL_COLOR
        )
        self.value_style = self.styles["BodyText"].clone(
            "FormValue", fontName="Helvetica", fontSize=9, leading=11
        )
        self.story: list = []

    def heading(self, text: str, style: str = "Title") -> None:
        self.story.append(Paragraph(escape(text), self.styles[style]))

    def section(self, text: str) -> None:
        self.story.append(Spacer(1, 6))
        self.story.append(Paragraph(escape(text), self.styles["Heading2"]))

    def subsection(self, text: str) -> None:
        self.story.append(Paragraph(escape(text), self.styles["Heading4"]))

    def note(self, text: str) -> None:
        self.story.append(Paragraph(escape(text), self.styles["Normal"]))

    def grid(self, rows: list[Row]) -> None:
        data = []
        for row in rows:
            cells = []
            for label, value in row:
                cells.append(Paragraph(escape(label), self.label_style))
                cells.append(Paragraph(escape(_text(value)) if label else "", self.value_style))
            data.append(cells)

        table = Table(data, colWidths=COLUMN_WIDTHS)
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (0, -1), LABEL_BACKGROUND),
                    ("BACKGROUND", (2, 0), (2, -1), LABEL_BACKGROUND),
                    ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ]
            )
        )
        self.story.append(table)
        self.story.append(Spacer(1, 6))


def render_application_pdf(applicant: Applicant) -> bytes:
    """Render the application form for an applicant with children loaded."""
    form = _FormBuilder()

    form.heading("Government of the Punjab")
    form.heading("Skills Development and Entrepreneurship Department", "Heading2")
    form.heading("Application Form", "Heading3")
    form.story.append(Spacer(1, 8))

    form.section("Profile")
    district = applicant.district.name if applicant.district else applicant.other_district
    status = applicant.submission_status.value if applicant.submission_status else None
    form.grid(
        [
            [("Full Name", applicant.full_name), ("Father Name", applicant.father_name)],
            [("CNIC", applicant.cnic), ("Email", applicant.email)],
            [("Username", applicant.username), ("Cell No", applicant.cell_no)],
            [("Date of Birth", applicant.dob), ("Gender", applicant.gender)],
            [("Post", applicant.post.name if applicant.post else None), ("District", district)],
            [("Address", applicant.address), ("Submission Status", status)],
        ]
    )

    form.section("Qualifications")
    if not applicant.qualifications:
        form.note("No qualifications provided.")
    for index, q in enumerate(applicant.qualifications, start=1):
        form.subsection(f"Qualification {index}")
        form.grid(
            [
                [
                    ("Degree Type", _with_other(q.degree_type, q.degree_type_other)),
                    ("Field of Study", _with_other(q.field_of_study, q.field_of_study_other)),
                ],
                [
                    ("Institution", q.institution_name),
                    (
                        "Country",
                        _with_other(q.institution_country, q.institution_country_other),
                    ),
                ],
                [("Graduation Year", q.graduation_year), ("Grade/CGPA", q.grade)],
                [
                    ("Duration (months)", q.duration_months),
                    ("Foreign Degree", "Yes" if q.is_foreign else "No"),
                ],
                [("Notes", q.notes), ("", "")],
            ]
        )

    form.section("Experiences")
    if not applicant.experiences:
        form.note("No experiences provided.")
    for index, e in enumerate(applicant.experiences, start=1):
        form.subsection(f"Experience {index}")
        end_date = e.end_date or ("Current" if e.is_current else None)
        form.grid(
            [
                [("Organization", e.organization_name), ("Type", e.organization_type)],
                [("Department", e.department), ("Designation", e.designation)],
                [("Grade", e.grade), ("District", e.district.name if e.district else None)],
                [("Start Date", e.start_date), ("End Date", end_date)],
                [
                    ("Country", _with_other(e.country, e.country_other)),
                    ("Foreign Posting", "Yes" if e.is_foreign_posting else "No"),
                ],
                [("Duties", e.duties_summary), ("Achievements", e.achievements)],
            ]
        )

    form.section("Documents")
    form.grid(
        [
            [
                ("Profile Picture", _uploaded(applicant.url_profile_pic)),
                ("CV", _uploaded(applicant.url_cv)),
            ],
            [
                ("Academic Certificates", _uploaded(applicant.url_academic_certs)),
                ("Experience Certificates", _uploaded(applicant.url_experience_certs)),
            ],
            [("CNIC", _uploaded(applicant.url_cnic)), ("", "")],
        ]
    )

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        title="Application Form",
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        topMargin=18 * mm,
        bottomMargin=18 * mm,
    )
    doc.build(form.story)
    return buffer.getvalue()
