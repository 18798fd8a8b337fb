from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

MARGIN = 50
BODY_FONT = "Helvetica"
HEADING_FONT = "Helvetica-Bold"


class _PageWriter:
    """Top-down text cursor over a reportlab canvas that starts new pages as needed."""

    def __init__(self, pdf: canvas.Canvas, width: float, height: float):
        self.pdf = pdf
        self.width = width
        self.height = height
        self.y = height - MARGIN

    def _ensure_room(self, needed: float) -> None:
        if self.y - needed < MARGIN:
            self.pdf.showPage()
            self.y = self.height - MARGIN

    def line(self, text: str, size: int = 12, font: str = BODY_FONT, centered: bool = False) -> None:
        max_width = self.width - 2 * MARGIN
        for chunk in simpleSplit(text or "", font, size, max_width) or [""]:
            self._ensure_room(size * 1.4)
            self.pdf.setFont(font, size)
            if centered:
                self.pdf.drawCentredString(self.width / 2, self.y, chunk)
            else:
                self.pdf.drawString(MARGIN, self.y, chunk)
            self.y -= size * 1.4

    def gap(self, lines: float = 1.0) -> None:
        self.y -= 12 * lines

    def heading(self, text: str) -> None:
        self.gap()
        self.line(text, size=18, font=HEADING_FONT)
        self.gap(0.5)


def _span(start, end, current: bool = False) -> str:
    if not start:
        return ""
    tail = "Present" if current else (end or "")
    return f" ({start} - {tail})" if tail else f" ({start})"


def render_cv_pdf(cv) -> bytes:
    """
    Render a CV to PDF bytes.
    Missing personal-info fields are printed as N/A; empty sections keep their heading.
    """
    info = cv.personal_info if isinstance(cv.personal_info, dict) else {}
    buf = BytesIO()
    width, height = A4
    pdf = canvas.Canvas(buf, pagesize=A4)
    pdf.setTitle(cv.title or "CV")
    out = _PageWriter(pdf, width, height)

    out.line(str(info.get("fullName") or "N/A"), size=24, font=HEADING_FONT, centered=True)
    out.gap()
    out.line(f"Phone: {info.get('phone') or 'N/A'}")
    out.line(f"Email: {info.get('email') or 'N/A'}")
    out.line(f"Location: {info.get('address') or 'N/A'}")
    if info.get("summary"):
        out.gap(0.5)
        out.line(str(info["summary"]))

    out.heading("Education")
    for edu in cv.education:
        out.line(f"{edu.degree}, {edu.institution}{_span(edu.start_year, edu.end_year)}")
        if edu.description:
            out.line(edu.description, size=10)

    out.heading("Experience")
    for exp in cv.experience:
        out.line(f"{exp.position}, {exp.company}{_span(exp.start_date, exp.end_date, exp.is_current)}")
        if exp.description:
            out.line(exp.description, size=10)

    out.heading("Skills")
    for skill in cv.skills:
        level = f" ({skill.proficiency_level})" if skill.proficiency_level else ""
        out.line(f"{skill.skill_name}{level}")

    if cv.languages:
        out.heading("Languages")
        for lang in cv.languages:
            level = f" ({lang.proficiency})" if lang.proficiency else ""
            out.line(f"{lang.language}{level}")

    if cv.references:
        out.heading("References")
        for ref in cv.references:
            contact = ", ".join(p for p in (ref.relationship_to_candidate, ref.phone, ref.email) if p)
            out.line(f"{ref.name}{': ' + contact if contact else ''}")

    pdf.showPage()
    pdf.save()
    return buf.getvalue()
