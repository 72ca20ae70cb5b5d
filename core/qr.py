from io import BytesIO

import qrcode
from django.http import HttpResponse


def render_qr_png(payload: str) -> bytes:
    """Encode `payload` as a QR code and return the PNG bytes."""
    qr_img = qrcode.make(payload)
    buffer = BytesIO()
    qr_img.save(buffer, format="PNG")
    return buffer.getvalue()


def qr_png_response(payload: str) -> HttpResponse:
    response = HttpResponse(render_qr_png(payload), content_type="image/png")
    response["Cache-Control"] = "no-store"
    return response
