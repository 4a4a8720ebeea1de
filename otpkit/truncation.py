"""
Dynamic truncation (RFC 4226 §5.3).

The low nibble of the final digest byte selects an offset; the four bytes
starting there are read as a big-endian integer with the top bit masked off,
giving an unsigned 31-bit value.
"""

# SHA-1 is the shortest supported digest; offset 15 needs bytes 15..18.
MIN_DIGEST_SIZE = 20


def extract_integer(digest: bytes) -> int:
    """
    Extract the 31-bit integer from an HMAC digest.

    Args:
        digest: HMAC output (20, 32 or 64 bytes).

    Returns:
        Integer in ``[0, 2**31 - 1]``.
    """
    assert len(digest) >= MIN_DIGEST_SIZE, "HMAC digest is shorter than 20 bytes"

    offset = digest[-1] & 0x0F
    return (
        (digest[offset] & 0x7F) << 24
        | (digest[offset + 1] & 0xFF) << 16
        | (digest[offset + 2] & 0xFF) << 8
        | (digest[offset + 3] & 0xFF)
    )
