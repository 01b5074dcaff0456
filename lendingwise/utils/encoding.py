import base64
import mimetypes
from typing import Optional


def encode_bytes(data: bytes) -> str:
    return base64.b64encode(data).decode("utf-8")


def guess_mime_type(filename: str, declared: Optional[str] = None) -> str:
    if declared and declared != "application/octet-stream":
        return declared
    guessed, _ = mimetypes.guess_type(filename or "")
    return guessed or "application/octet-stream"
