"""
File downloads of an enhanced CV.

The text layout comes from ``rendering.cv_to_text`` so downloads follow
the same rendering rules as the page.  Each builder returns an
``HttpResponse`` carrying the file as an attachment.
"""

from __future__ import annotations

from io import BytesIO
from textwrap import wrap

from django.http import HttpResponse
from docx import Document  # type: ignore
from reportlab.lib.pagesizes import letter  # type: ignore
from reportlab.lib.units import inch  # type: ignore
from reportlab.pdfgen import canvas  # type: ignore

from .rendering import CVDisplay, cv_to_text

EXPORT_BASENAME = "enhanced_cv"


def _attachment(buffer: BytesIO, content_type: str, extension: str) -> HttpResponse:
    buffer.seek(0)
    return HttpResponse(
        buffer.getvalue(),
        content_type=content_type,
        headers={"Content-Disposition": f"attachment; filename={EXPORT_BASENAME}.{extension}"},
    )


def generate_docx_response(display: CVDisplay) -> HttpResponse:
    doc = Document()
    doc.add_heading(display.name, level=0)
    for line in cv_to_text(display).splitlines()[1:]:
        if line.startswith("## "):
            doc.add_heading(line[3:], level=1)
        elif line.startswith("- "):
            doc.add_paragraph(line[2:], style="List Bullet")
        elif line.startswith("**"):
            doc.add_paragraph().add_run(line.strip("*")).bold = True
        elif line:
            doc.add_paragraph(line)
    buffer = BytesIO()
    doc.save(buffer)
    return _attachment(
        buffer,
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "docx",
    )


def generate_pdf_response(display: CVDisplay) -> HttpResponse:
    buffer = BytesIO()
    p = canvas.Canvas(buffer, pagesize=letter)
    width, height = letter
    y = height - inch
    left_margin = inch
    max_width = width - 2 * inch
    for line in cv_to_text(display).splitlines():
        # Basic markdown-like styling
        if line.startswith("# "):
            p.setFont("Helvetica-Bold", 14)
            line = line[2:]
            y -= 20
        elif line.startswith("## "):
            p.setFont("Helvetica-Bold", 12)
            line = line[3:]
            y -= 15
        elif line.startswith("- "):
            p.setFont("Helvetica", 12)
            line = f"• {line[2:]}"
        elif "**" in line:
            p.setFont("Helvetica-Bold", 12)
            line = line.replace("**", "")
        else:
            p.setFont("Helvetica", 12)
        for chunk in wrap(line, width=int(max_width / 6)) or [""]:
            if y <= inch:
                p.showPage()
                p.setFont("Helvetica", 12)
                y = height - inch
            p.drawString(left_margin, y, chunk)
            y -= 14
    p.save()
    return _attachment(buffer, "application/pdf", "pdf")


def generate_txt_response(display: CVDisplay) -> HttpResponse:
    buffer = BytesIO(cv_to_text(display).encode("utf-8"))
    return _attachment(buffer, "text/plain; charset=utf-8", "txt")


EXPORTERS = {
    "pdf": generate_pdf_response,
    "docx": generate_docx_response,
    "txt": generate_txt_response,
}
