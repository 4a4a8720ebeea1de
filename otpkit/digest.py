"""
HMAC computation over the OTP moving factor.

The counter is serialised as an unsigned 64-bit big-endian integer and signed
with the ``cryptography`` HMAC primitive using one of the RFC 6238 hash
functions.
"""

import struct
from enum import Enum

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.hmac import HMAC

from otpkit.errors import InvalidConfiguration, InvalidTimeError

MAX_COUNTER = 2**64 - 1


class Algorithm(str, Enum):
    """Supported HMAC algorithms."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @classmethod
    def parse(cls, value: "str | Algorithm") -> "Algorithm":
        """
        Resolve an algorithm from its name.

        Accepts any case and the dashed spellings (``"sha-256"``).

        Raises:
            InvalidConfiguration: For an unsupported algorithm name.
        """
        if isinstance(value, Algorithm):
            return value
        name = str(value).upper().replace("-", "")
        try:
            return cls(name)
        except ValueError:
            raise InvalidConfiguration(
                f"Unsupported algorithm '{value}'. Supported: SHA1, SHA256, SHA512."
            ) from None

    @property
    def digest_size(self) -> int:
        return _HASH_MAP[self].digest_size


_HASH_MAP: dict[Algorithm, hashes.HashAlgorithm] = {
    Algorithm.SHA1: hashes.SHA1(),
    Algorithm.SHA256: hashes.SHA256(),
    Algorithm.SHA512: hashes.SHA512(),
}


def counter_to_bytes(counter: int) -> bytes:
    """
    Serialise a counter as the 8-byte big-endian message fed to the HMAC.

    Raises:
        InvalidTimeError: If the counter is negative or does not fit in 64 bits.
    """
    if counter < 0:
        raise InvalidTimeError(f"counter must be non-negative, got {counter}.")
    if counter > MAX_COUNTER:
        raise InvalidTimeError(f"counter {counter} does not fit in 64 bits.")
    return struct.pack(">Q", counter)


def compute_hmac(secret: bytes, counter: int, algorithm: Algorithm) -> bytes:
    """
    Compute ``HMAC(secret, counter)`` (RFC 4226 §5.2).

    Args:
        secret:    Raw secret bytes.
        counter:   Moving factor.
        algorithm: Hash function to use.

    Returns:
        The HMAC digest (20, 32 or 64 bytes).
    """
    mac = HMAC(secret, _HASH_MAP[algorithm])
    mac.update(counter_to_bytes(counter))
    return mac.finalize()
