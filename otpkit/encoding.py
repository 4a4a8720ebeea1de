"""
Byte codecs used to carry secrets across textual boundaries.

Base32 : RFC 4648 §6, alphabet A-Z2-7, ``=`` padding
Base64 : RFC 4648 §4, alphabet A-Za-z0-9+/, ``=`` padding

The OTP engine itself only ever consumes raw bytes; these helpers exist for
callers that receive or hand out secrets as text.
"""

import base64
import re

from otpkit.errors import DecodingError

# ── Constants ────────────────────────────────────────────────────────────────

_BASE32_ALPHABET = re.compile(r"[A-Za-z2-7]*")
_BASE32_SEPARATORS = re.compile(r"[\s\-]+")

# Unpadded Base32 lengths (mod 8) that correspond to a whole number of bytes.
_BASE32_VALID_REMAINDERS = frozenset({0, 2, 4, 5, 7})


# ── Base32 ────────────────────────────────────────────────────────────────────

def normalize_base32(text: str) -> str:
    """
    Normalise a hand-typed Base32 secret: strip spaces and dashes, uppercase.

    Example::

        >>> normalize_base32("jbsw y3dp-ehpk 3pxp")
        'JBSWY3DPEHPK3PXP'

    The result still has to go through :func:`base32_decode`, which does the
    actual validation.
    """
    return _BASE32_SEPARATORS.sub("", text).upper()


def base32_encode(data: bytes) -> str:
    """Encode raw bytes as uppercase, ``=``-padded Base32 text."""
    return base64.b32encode(bytes(data)).decode("ascii")


def base32_decode(text: str) -> bytes:
    """
    Decode Base32 text to raw bytes.

    Input is case-insensitive and padding is optional. When padding is
    present it must bring the length to exactly the next multiple of 8.

    Args:
        text: Base32 text.

    Returns:
        Decoded bytes (``b""`` for an empty string).

    Raises:
        DecodingError: On an invalid character, bad padding or a length that
            does not describe a whole number of bytes.
    """
    stripped = text.rstrip("=")
    padding = len(text) - len(stripped)

    if not _BASE32_ALPHABET.fullmatch(stripped):
        raise DecodingError("Base32 text contains characters outside A-Z2-7.")

    if len(stripped) % 8 not in _BASE32_VALID_REMAINDERS:
        raise DecodingError(
            f"Base32 text has an invalid length ({len(stripped)} significant characters)."
        )

    if padding and padding != -len(stripped) % 8:
        raise DecodingError("Padded Base32 text must be padded to exactly a multiple of 8 characters.")

    padded = stripped.upper() + "=" * (-len(stripped) % 8)
    try:
        return base64.b32decode(padded)
    except ValueError as exc:
        raise DecodingError(f"Invalid Base32 text: {exc}") from exc


# ── Base64 ────────────────────────────────────────────────────────────────────

def base64_encode(data: bytes) -> str:
    """Encode raw bytes as standard, ``=``-padded Base64 text."""
    return base64.b64encode(bytes(data)).decode("ascii")


def base64_decode(text: str) -> bytes:
    """
    Decode standard Base64 text to raw bytes.

    Args:
        text: Base64 text using the ``+`` and ``/`` alphabet.

    Returns:
        Decoded bytes (``b""`` for an empty string).

    Raises:
        DecodingError: On characters outside the alphabet or malformed
            padding / length.
    """
    try:
        return base64.b64decode(text, validate=True)
    except ValueError as exc:
        raise DecodingError(f"Invalid Base64 text: {exc}") from exc
