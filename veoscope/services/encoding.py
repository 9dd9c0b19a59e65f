"""Turns uploaded video bytes into a base64 payload tagged with its MIME type."""

import base64
import mimetypes
import re
from pathlib import Path
from typing import BinaryIO

from veoscope.exceptions import FormatError
from veoscope.models.analysis import EncodedMedia

DEFAULT_MIME_TYPE = "application/octet-stream"

_MIME_PATTERN = re.compile(r":(.*?);")


def to_data_url(data: bytes, mime_type: str | None) -> str:
    mime_type = mime_type or DEFAULT_MIME_TYPE
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def split_data_url(data_url: str) -> EncodedMedia:
    """Split a ``data:<mime>;base64,<payload>`` URL into an EncodedMedia.

    Raises FormatError unless there is exactly one ``,`` separating the
    metadata prefix from the payload, or when the prefix carries no MIME type.
    """
    parts = data_url.split(",")
    if len(parts) != 2:
        raise FormatError("Invalid data URL format")
    meta, data = parts

    match = _MIME_PATTERN.search(meta)
    if not match:
        raise FormatError("Could not determine MIME type from data URL")
    return EncodedMedia(data=data, mime_type=match.group(1))


def encode_media(source: bytes | BinaryIO, mime_type: str | None) -> EncodedMedia:
    """Read the whole source and encode it. I/O errors from ``read()`` propagate."""
    data = source if isinstance(source, bytes) else source.read()
    return split_data_url(to_data_url(data, mime_type))


def guess_mime_type(path: str | Path) -> str:
    return mimetypes.guess_type(str(path))[0] or DEFAULT_MIME_TYPE
