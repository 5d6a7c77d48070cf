import io
import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PyPDF2 import PdfWriter

from execution.exceptions import ValidationError
from onboarding.services.pdf_extract import extract_slides, is_pdf


def _blank_pdf(pages=2):
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def test_is_pdf_by_type_or_name():
    assert is_pdf(SimpleUploadedFile("deck.bin", b"", content_type="application/pdf"))
    assert is_pdf(SimpleUploadedFile("deck.PDF", b"", content_type="application/octet-stream"))
    assert not is_pdf(SimpleUploadedFile("deck.pptx", b"", content_type="application/vnd.ms-powerpoint"))

def test_extract_one_entry_per_page():
    upload = SimpleUploadedFile("deck.pdf", _blank_pdf(3), content_type="application/pdf")
    slides = extract_slides(upload)
    assert [s["slide_index"] for s in slides] == [0, 1, 2]
    assert all(s["text"] == "" for s in slides)

def test_missing_file():
    with pytest.raises(ValidationError):
        extract_slides(None)

def test_non_pdf_rejected():
    with pytest.raises(ValidationError):
        extract_slides(SimpleUploadedFile("deck.pptx", b"PK", content_type="application/zip"))

def test_corrupt_pdf_rejected():
    with pytest.raises(ValidationError):
        extract_slides(SimpleUploadedFile("deck.pdf", b"this is not a pdf", content_type="application/pdf"))


@pytest.mark.django_db
def test_extract_slides_endpoint(founder, client_for):
    upload = SimpleUploadedFile("deck.pdf", _blank_pdf(1), content_type="application/pdf")
    resp = client_for(founder).post("/api/onboarding/extract-slides/", {"file": upload}, format="multipart")
    assert resp.status_code == 200
    assert resp.json() == {"slides": [{"slide_index": 0, "text": ""}]}
