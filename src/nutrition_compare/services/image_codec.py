"""Image payload normalization for vision calls."""

import base64
from dataclasses import dataclass

_BASE64_MARKER = "base64,"
_DEFAULT_MIME_TYPE = "image/jpeg"
_GENERIC_MIME_TYPES = {"", "application/octet-stream"}


def strip_base64_prefix(raw: str | None) -> str | None:
    """Return the bare base64 payload of a data URL.

    Bare base64 input is returned unchanged, so the call is idempotent.
    Empty input passes through.
    """
    if not raw:
        return raw
    index = raw.find(_BASE64_MARKER)
    if index < 0:
        return raw.strip()
    return raw[index + len(_BASE64_MARKER) :].strip()


def mime_type_from_data_url(raw: str) -> str | None:
    """Read the MIME type from a ``data:<mime>;base64,`` prefix."""
    if not raw.startswith("data:"):
        return None
    header, _, _ = raw.partition(",")
    mime_type = header[len("data:") :].split(";", 1)[0].strip()
    return mime_type or None


def encode_bytes(data: bytes) -> str:
    """Encode raw bytes as bare base64 text."""
    return base64.b64encode(data).decode("utf-8")


def to_data_url(base64_data: str, mime_type: str = _DEFAULT_MIME_TYPE) -> str:
    """Wrap bare base64 text into a data URL."""
    return f"data:{mime_type};base64,{base64_data}"


def detect_mime_type(data: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    if data[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return _DEFAULT_MIME_TYPE


@dataclass(frozen=True)
class ImagePayload:
    """Image ready to embed in a vision prompt."""

    base64_data: str
    mime_type: str = _DEFAULT_MIME_TYPE

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str | None = None) -> "ImagePayload":
        """Build a payload from an uploaded file."""
        if mime_type is None or mime_type.strip() in _GENERIC_MIME_TYPES:
            mime_type = detect_mime_type(data)
        return cls(base64_data=encode_bytes(data), mime_type=mime_type)

    @classmethod
    def from_base64(cls, raw: str) -> "ImagePayload":
        """Build a payload from inline base64 or a data URL."""
        mime_type = mime_type_from_data_url(raw) or _DEFAULT_MIME_TYPE
        return cls(base64_data=strip_base64_prefix(raw) or "", mime_type=mime_type)

    @property
    def data_url(self) -> str:
        """Return the payload as a data URL."""
        return to_data_url(self.base64_data, self.mime_type)
