import base64
import binascii
import io
import logging
from dataclasses import dataclass
from typing import Optional

import pdfplumber
from PIL import Image

logger = logging.getLogger(__name__)

SUPPORTED_TYPES = ("image/jpeg", "image/png", "image/webp", "application/pdf")
UPLOAD_EXTENSIONS = ["jpg", "jpeg", "png", "webp", "pdf"]
CAMERA_FILE_NAME = "camera-capture.jpg"
PDF_RESOLUTION = 150


class CaptureError(ValueError):
    pass


@dataclass
class CapturedImage:
    file_name: str
    mime_type: str  # type of the file the user supplied
    file_size: int
    image_bytes: bytes  # what gets sent for analysis
    image_mime: str


# --- base64 data payloads ---

def to_data_url(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def from_data_url(url: str) -> bytes:
    """Decode a ``data:`` URL, or a bare base64 string, to bytes."""
    payload = url.split(",", 1)[1] if url.startswith("data:") and "," in url else url
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CaptureError("not a base64 payload") from e


# --- images ---

def _jpeg_bytes(img: Image.Image, quality: int = 90) -> bytes:
    if img.mode not in ("RGB", "L"):
        img = img.convert("RGB")
    buf = io.BytesIO()
    img.save(buf, format="JPEG", quality=quality)
    return buf.getvalue()


def pdf_first_page(data: bytes, resolution: int = PDF_RESOLUTION) -> bytes:
    try:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            if not pdf.pages:
                raise CaptureError("PDF has no pages")
            img = pdf.pages[0].to_image(resolution=resolution).original
            return _jpeg_bytes(img)
    except CaptureError:
        raise
    except Exception as e:
        raise CaptureError("could not read PDF") from e


def make_thumbnail(data: bytes, max_px: int = 320) -> str:
    try:
        img = Image.open(io.BytesIO(data))
        img.thumbnail((max_px, max_px))
    except Exception as e:
        raise CaptureError("could not read image") from e
    return to_data_url(_jpeg_bytes(img, quality=80), "image/jpeg")


def load_capture(data: bytes, mime_type: Optional[str], file_name: Optional[str] = None) -> CapturedImage:
    mime_type = (mime_type or "").lower()
    if mime_type == "image/jpg":
        mime_type = "image/jpeg"
    if mime_type not in SUPPORTED_TYPES:
        raise CaptureError(f"unsupported file type: {mime_type or 'unknown'}")
    if not data:
        raise CaptureError("empty file")

    if mime_type == "application/pdf":
        image_bytes, image_mime = pdf_first_page(data), "image/jpeg"
        logger.debug("Rasterised first page of %s", file_name)
    else:
        image_bytes, image_mime = data, mime_type

    return CapturedImage(
        file_name=file_name or "report.jpg",
        mime_type=mime_type,
        file_size=len(data),
        image_bytes=image_bytes,
        image_mime=image_mime,
    )


def from_camera(data: bytes, mime_type: str = "image/jpeg") -> CapturedImage:
    return load_capture(data, mime_type, CAMERA_FILE_NAME)
