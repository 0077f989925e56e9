import io

import pytest
from reportlab.lib import pdfencrypt
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from policy_compass.auth.identity import Identity


@pytest.fixture()
def identity() -> Identity:
    return Identity(user_id="user-1", token="token-abc")


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a single-page policy PDF with title and author metadata."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.setTitle("Acceptable Use Policy")
    c.setAuthor("Security Team")
    c.drawString(72, 720, "Acceptable Use Policy")
    c.drawString(72, 700, "MFA required for privileged accounts")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a three-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for label in ("one", "two", "three"):
        c.drawString(72, 720, f"Page {label} content")
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def blank_multi_page_pdf_bytes() -> bytes:
    """Generate a three-page PDF where no page carries text."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for _ in range(3):
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def encrypted_pdf_bytes() -> bytes:
    """Generate a PDF that needs a user password to open."""
    buf = io.BytesIO()
    encryption = pdfencrypt.StandardEncryption("user-secret", ownerPassword="owner-secret")
    c = canvas.Canvas(buf, pagesize=letter, encrypt=encryption)
    c.drawString(72, 720, "Confidential policy")
    c.save()
    return buf.getvalue()
