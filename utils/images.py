import base64
import binascii
import mimetypes
from typing import Optional, Tuple


def to_data_url(payload: bytes, filename: str = "", mime: Optional[str] = None) -> str:
    """Encode an uploaded screenshot as a data URL for storage in the student document."""
    mime = mime or mimetypes.guess_type(filename)[0] or "application/octet-stream"
    return f"data:{mime};base64,{base64.b64encode(payload).decode('ascii')}"


def from_data_url(url: str) -> Tuple[str, bytes]:
    """Split a base64 data URL into (mime type, raw bytes). Raises ValueError if it isn't one."""
    if not url or not url.startswith("data:") or "," not in url:
        raise ValueError("Not a data URL")
    header, encoded = url[5:].split(",", 1)
    if not header.endswith(";base64"):
        raise ValueError("Only base64 data URLs are supported")
    try:
        return header[: -len(";base64")], base64.b64decode(encoded, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 payload: {exc}") from exc
