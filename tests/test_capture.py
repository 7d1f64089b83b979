import base64
import io

import pytest
from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from core.capture import (
    CAMERA_FILE_NAME,
    CaptureError,
    from_camera,
    from_data_url,
    load_capture,
    make_thumbnail,
    to_data_url,
)


def png_bytes(size=(800, 600)):
    buf = io.BytesIO()
    Image.new("RGB", size, (200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


def pdf_bytes():
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.drawString(72, 760, "Hemoglobin 10.2 g/dL")
    c.showPage()
    c.save()
    return buf.getvalue()


def test_image_upload_is_sent_as_is():
    data = png_bytes()
    cap = load_capture(data, "image/png", "scan.png")
    assert cap.image_bytes == data
    assert cap.image_mime == "image/png"
    assert cap.file_size == len(data)


def test_jpg_alias_and_default_name():
    cap = load_capture(b"\xff\xd8\xff", "image/JPG")
    assert cap.mime_type == "image/jpeg"
    assert cap.file_name == "report.jpg"


def test_camera_capture_name():
    cap = from_camera(b"\xff\xd8\xff")
    assert cap.file_name == CAMERA_FILE_NAME
    assert cap.mime_type == "image/jpeg"


@pytest.mark.parametrize("mime", ["text/plain", "image/gif", "", None])
def test_unsupported_types_rejected(mime):
    with pytest.raises(CaptureError):
        load_capture(b"data", mime, "x")


def test_empty_file_rejected():
    with pytest.raises(CaptureError):
        load_capture(b"", "image/png", "x.png")


def test_pdf_first_page_becomes_jpeg():
    data = pdf_bytes()
    cap = load_capture(data, "application/pdf", "labs.pdf")
    assert cap.mime_type == "application/pdf"
    assert cap.file_size == len(data)
    assert cap.image_mime == "image/jpeg"
    assert cap.image_bytes[:2] == b"\xff\xd8"


def test_broken_pdf_rejected():
    with pytest.raises(CaptureError):
        load_capture(b"%PDF-1.4 truncated", "application/pdf", "bad.pdf")


def test_thumbnail_is_bounded_jpeg():
    url = make_thumbnail(png_bytes((1600, 400)), max_px=200)
    assert url.startswith("data:image/jpeg;base64,")
    img = Image.open(io.BytesIO(from_data_url(url)))
    assert max(img.size) <= 200


def test_thumbnail_of_garbage_rejected():
    with pytest.raises(CaptureError):
        make_thumbnail(b"not an image")


def test_data_url_payloads():
    assert from_data_url(to_data_url(b"abc", "image/png")) == b"abc"
    assert from_data_url(base64.b64encode(b"abc").decode()) == b"abc"
    with pytest.raises(CaptureError):
        from_data_url("data:image/png;base64,!!!")
