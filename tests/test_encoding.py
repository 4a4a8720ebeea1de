"""Tests for otpkit.encoding."""

import os

import pytest

from otpkit.encoding import (
    base32_decode,
    base32_encode,
    base64_decode,
    base64_encode,
    normalize_base32,
)
from otpkit.errors import DecodingError

RFC_SECRET = b"12345678901234567890"
RFC_SECRET_B32 = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
RFC_SECRET_B64 = "MTIzNDU2Nzg5MDEyMzQ1Njc4OTA="


# ── Base32: RFC 4648 §10 vectors ──────────────────────────────────────────────

_BASE32_VECTORS = [
    (b"", ""),
    (b"f", "MY======"),
    (b"fo", "MZXQ===="),
    (b"foo", "MZXW6==="),
    (b"foob", "MZXW6YQ="),
    (b"fooba", "MZXW6YTB"),
    (b"foobar", "MZXW6YTBOI======"),
]


@pytest.mark.parametrize("raw,encoded", _BASE32_VECTORS)
def test_base32_encode_rfc4648(raw: bytes, encoded: str) -> None:
    assert base32_encode(raw) == encoded


@pytest.mark.parametrize("raw,encoded", _BASE32_VECTORS)
def test_base32_decode_rfc4648(raw: bytes, encoded: str) -> None:
    assert base32_decode(encoded) == raw


@pytest.mark.parametrize("raw,encoded", _BASE32_VECTORS)
def test_base32_decode_without_padding(raw: bytes, encoded: str) -> None:
    assert base32_decode(encoded.rstrip("=")) == raw


def test_base32_decode_lowercase() -> None:
    assert base32_decode(RFC_SECRET_B32.lower()) == RFC_SECRET
    assert base32_decode("mzxw6yq=") == b"foob"


def test_base32_rfc_secret() -> None:
    assert base32_encode(RFC_SECRET) == RFC_SECRET_B32
    assert base32_decode(RFC_SECRET_B32) == RFC_SECRET


@pytest.mark.parametrize("size", [0, 1, 2, 3, 4, 5, 10, 16, 20, 32, 64])
def test_base32_roundtrip(size: int) -> None:
    raw = os.urandom(size)
    assert base32_decode(base32_encode(raw)) == raw


@pytest.mark.parametrize(
    "text",
    [
        "GEZDGNB1",          # '1' is not in the alphabet
        "GEZDGNB8",          # nor is '8'
        "GEZD GNBV",         # whitespace
        "MZ=XQ===",          # padding in the middle
        "MZXW6YQ!",
        "MZXW6YTBÖ",
        "ßßßß",              # uppercases to "SSSSSSSS"
        "ıııııııı",          # dotless i uppercases to "I"
        "mzxw6ytbı",
    ],
)
def test_base32_decode_invalid_characters(text: str) -> None:
    with pytest.raises(DecodingError):
        base32_decode(text)


@pytest.mark.parametrize("text", ["M", "MZX", "MZXW6Y", "MZXW6YTBO", "M======="])
def test_base32_decode_invalid_length(text: str) -> None:
    with pytest.raises(DecodingError):
        base32_decode(text)


def test_base32_decode_padding_must_fill_block() -> None:
    with pytest.raises(DecodingError):
        base32_decode("MZXQ==")


@pytest.mark.parametrize("text", ["========", "MY" + "=" * 14, "MZXW6YTB========", "MZXQ====="])
def test_base32_decode_rejects_excess_padding(text: str) -> None:
    with pytest.raises(DecodingError):
        base32_decode(text)


def test_decoding_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        base32_decode("!!!NOTBASE32!!!")


# ── Base32 normalisation ──────────────────────────────────────────────────────

def test_normalize_strips_spaces_and_dashes() -> None:
    assert normalize_base32("jbsw y3dp-ehpk 3pxp") == "JBSWY3DPEHPK3PXP"


def test_normalize_then_decode() -> None:
    spaced = " ".join(RFC_SECRET_B32[i : i + 4] for i in range(0, len(RFC_SECRET_B32), 4))
    assert base32_decode(normalize_base32(spaced.lower())) == RFC_SECRET


# ── Base64 ────────────────────────────────────────────────────────────────────

_BASE64_VECTORS = [
    (b"", ""),
    (b"f", "Zg=="),
    (b"fo", "Zm8="),
    (b"foo", "Zm9v"),
    (b"foob", "Zm9vYg=="),
    (b"fooba", "Zm9vYmE="),
    (b"foobar", "Zm9vYmFy"),
    (b"\xfb\xff", "+/8="),
]


@pytest.mark.parametrize("raw,encoded", _BASE64_VECTORS)
def test_base64_encode(raw: bytes, encoded: str) -> None:
    assert base64_encode(raw) == encoded


@pytest.mark.parametrize("raw,encoded", _BASE64_VECTORS)
def test_base64_decode(raw: bytes, encoded: str) -> None:
    assert base64_decode(encoded) == raw


def test_base64_rfc_secret() -> None:
    assert base64_encode(RFC_SECRET) == RFC_SECRET_B64
    assert base64_decode(RFC_SECRET_B64) == RFC_SECRET


@pytest.mark.parametrize("size", [0, 1, 2, 3, 20, 64])
def test_base64_roundtrip(size: int) -> None:
    raw = os.urandom(size)
    assert base64_decode(base64_encode(raw)) == raw


@pytest.mark.parametrize("text", ["Zm9v!", "Zm 9v", "Zm9v-_==", "Zg=a", "Zm9vé"])
def test_base64_decode_invalid_characters(text: str) -> None:
    with pytest.raises(DecodingError):
        base64_decode(text)


@pytest.mark.parametrize("text", ["Z", "Zm9", "Zg", "Zm9vY"])
def test_base64_decode_invalid_length(text: str) -> None:
    with pytest.raises(DecodingError):
        base64_decode(text)
