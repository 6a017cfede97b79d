"""
Helpers for image data URLs (`data:<mime>;base64,<payload>`).

Shared by the edit proxy and the canvas editor client.
"""
import base64
from typing import Tuple

from core.errors import InvalidDataURLError

DEFAULT_MIME_TYPE = "image/png"


def extract_base64_payload(data_url: str) -> str:
    """
    Return the base64 payload of a data URL.

    The payload is everything after the first comma.

    Raises:
        InvalidDataURLError: if the string is not a data URL
    """
    if not data_url.startswith("data:"):
        raise InvalidDataURLError()

    header, sep, payload = data_url.partition(",")
    if not sep:
        raise InvalidDataURLError()

    return payload


def detect_mime_type(data_url: str) -> str:
    """PNG if the URL mentions image/png anywhere, JPEG otherwise."""
    return "image/png" if "image/png" in data_url else "image/jpeg"


def decode_data_url(data_url: str) -> bytes:
    """Decode the payload of a data URL into raw image bytes."""
    payload = extract_base64_payload(data_url)
    try:
        return base64.b64decode(payload, validate=True)
    except ValueError as e:
        raise InvalidDataURLError(f"Invalid base64 image payload: {e}") from e


def split_data_url(data_url: str, detect_mime: bool = True) -> Tuple[str, bytes]:
    """Return (mime_type, raw bytes) for a data URL."""
    mime_type = detect_mime_type(data_url) if detect_mime else DEFAULT_MIME_TYPE
    return mime_type, decode_data_url(data_url)


def to_data_url(data: bytes, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type or DEFAULT_MIME_TYPE};base64,{encoded}"
