from datetime import date
from types import SimpleNamespace

from jobready.services.cv_pdf_service import _span, render_cv_pdf


def _cv(**overrides):
    fields = {
        "title": "My CV",
        "personal_info": {},
        "education": [],
        "experience": [],
        "skills": [],
        "languages": [],
        "references": [],
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_empty_cv_still_renders():
    pdf = render_cv_pdf(_cv(personal_info=None))
    assert pdf.startswith(b"%PDF")
    assert b"%%EOF" in pdf[-32:]


def test_long_cv_spills_onto_more_pages():
    edu = SimpleNamespace(degree="Certificate", institution="TVET", start_year=2010, end_year=2011, description="x " * 200)
    short = render_cv_pdf(_cv(education=[edu]))
    long = render_cv_pdf(_cv(education=[edu] * 40))
    assert long.startswith(b"%PDF")
    assert len(long) > len(short)


def test_full_cv_renders():
    cv = _cv(
        personal_info={"fullName": "Thandi Mokoena", "phone": "0821234567", "summary": "Reliable"},
        experience=[SimpleNamespace(position="Packer", company="Pick n Pay", start_date=date(2021, 3, 1), end_date=None, is_current=True, description=None)],
        skills=[SimpleNamespace(skill_name="Typing", proficiency_level="Advanced")],
        languages=[SimpleNamespace(language="isiZulu", proficiency=None)],
        references=[SimpleNamespace(name="Mr Dlamini", relationship_to_candidate="Supervisor", phone=None, email=None)],
    )
    assert render_cv_pdf(cv).startswith(b"%PDF")


def test_span_formats():
    assert _span(None, None) == ""
    assert _span(2018, 2020) == " (2018 - 2020)"
    assert _span(2018, None) == " (2018)"
    assert _span(2018, None, current=True) == " (2018 - Present)"
