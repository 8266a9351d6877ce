"""
Transport codec for file payloads.

Binary payloads travel inside JSON as standard base64 text (RFC 4648
alphabet, ``=`` padding). ``decode`` is strict about the alphabet so a
malformed upload is rejected instead of silently stored as garbage.
"""

import base64
import binascii
import re
from typing import Optional

_ALPHABET = re.compile(r"[A-Za-z0-9+/]*={0,2}")
_DATA_URL_PREFIX = re.compile(r"^data:[^,]*;base64,", re.IGNORECASE)


class InvalidEncoding(ValueError):
    """Text is not valid base64."""


class PayloadTooLarge(InvalidEncoding):
    """Decoded payload would exceed the configured ceiling."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"Decoded payload of {size} bytes exceeds the {limit} byte limit")
        self.size = size
        self.limit = limit


def encode(data: bytes) -> str:
    """Encode raw bytes as padded base64 text."""
    return base64.b64encode(data).decode("ascii")


def _normalize(text: str) -> str:
    """Strip whitespace and a data-URL prefix, and restore missing padding."""
    if not isinstance(text, str):
        raise InvalidEncoding(f"Expected base64 text, got {type(text).__name__}")

    text = _DATA_URL_PREFIX.sub("", text.strip(), count=1)
    if not _ALPHABET.fullmatch(text):
        raise InvalidEncoding("File data contains characters outside the base64 alphabet")

    unpadded = text.rstrip("=")
    remainder = len(unpadded) % 4
    if remainder == 1:
        raise InvalidEncoding("File data has an impossible base64 length")
    if len(text) % 4 and len(text) != len(unpadded):
        # partial padding such as "QQ=" is malformed
        raise InvalidEncoding("File data has incorrect base64 padding")
    return unpadded + "=" * (-len(unpadded) % 4)


def decoded_size(text: str) -> int:
    """Exact decoded length of normalized base64 text, without decoding it."""
    if not text:
        return 0
    return len(text) // 4 * 3 - (len(text) - len(text.rstrip("=")))


def decode(text: str, max_size: Optional[int] = None) -> bytes:
    """Decode base64 text back to the exact original bytes.

    Args:
        text: base64 text, optionally wrapped as a ``data:`` URL.
        max_size: reject payloads that would decode to more bytes than this.

    Raises:
        InvalidEncoding: the text is not valid base64.
        PayloadTooLarge: the decoded payload would exceed ``max_size``.
    """
    normalized = _normalize(text)

    size = decoded_size(normalized)
    if max_size is not None and size > max_size:
        raise PayloadTooLarge(size, max_size)

    try:
        return base64.b64decode(normalized, validate=True)
    except binascii.Error as e:
        raise InvalidEncoding(f"File data is not valid base64: {e}") from e
