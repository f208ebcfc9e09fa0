"""Tests for image payload normalization."""

import base64

from nutrition_compare.services.image_codec import (
    ImagePayload,
    detect_mime_type,
    strip_base64_prefix,
    to_data_url,
)


def test_data_url_and_bare_base64_normalize_the_same() -> None:
    bare = base64.b64encode(b"same-bytes").decode()
    prefixed = f"data:image/png;base64,{bare}"

    assert strip_base64_prefix(prefixed) == strip_base64_prefix(bare) == bare


def test_strip_prefix_is_idempotent() -> None:
    raw = "data:image/jpeg;base64,QUJD"

    once = strip_base64_prefix(raw)

    assert strip_base64_prefix(once) == once == "QUJD"


def test_strip_prefix_passes_empty_input_through() -> None:
    assert strip_base64_prefix(None) is None
    assert strip_base64_prefix("") == ""


def test_from_bytes_sniffs_png_when_mime_is_generic() -> None:
    data = b"\x89PNG\r\n\x1a\n" + b"rest"

    payload = ImagePayload.from_bytes(data, "application/octet-stream")

    assert payload.mime_type == "image/png"
    assert payload.data_url.startswith("data:image/png;base64,")
    assert base64.b64decode(payload.base64_data) == data


def test_from_bytes_keeps_declared_mime() -> None:
    payload = ImagePayload.from_bytes(b"whatever", "image/webp")

    assert payload.mime_type == "image/webp"


def test_from_base64_reads_mime_from_prefix() -> None:
    payload = ImagePayload.from_base64("data:image/png;base64,QUJD")

    assert payload.base64_data == "QUJD"
    assert payload.data_url == "data:image/png;base64,QUJD"


def test_from_base64_defaults_to_jpeg() -> None:
    payload = ImagePayload.from_base64("QUJD")

    assert payload.data_url == to_data_url("QUJD", "image/jpeg")


def test_detect_mime_type_defaults_to_jpeg() -> None:
    assert detect_mime_type(b"unknown") == "image/jpeg"
    assert detect_mime_type(b"GIF89a....") == "image/gif"
    assert detect_mime_type(b"RIFF\x00\x00\x00\x00WEBPVP8 ") == "image/webp"
