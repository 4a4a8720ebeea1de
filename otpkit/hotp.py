"""
HOTP (HMAC-based One-Time Password) implementation following RFC 4226.

The counter is supplied by the caller; this module keeps no counter state.
"""

import logging
from typing import Optional

from cryptography.hazmat.primitives import constant_time

from otpkit.config import MIN_SECRET_BYTES
from otpkit.digest import Algorithm, compute_hmac
from otpkit.errors import InvalidConfiguration, InvalidTimeError
from otpkit.renderer import DEFAULT_DIGITS, IntegerRenderer

logger = logging.getLogger(__name__)


def check_secret(secret: bytes) -> bytes:
    """
    Return an immutable copy of ``secret``.

    Raises:
        InvalidConfiguration: If the secret is empty.
    """
    if not isinstance(secret, (bytes, bytearray, memoryview)):
        raise InvalidConfiguration("secret must be raw bytes; decode text secrets first.")
    secret = bytes(secret)
    if not secret:
        raise InvalidConfiguration("secret must not be empty.")
    if len(secret) < MIN_SECRET_BYTES:
        logger.warning(
            "Secret is only %d bytes; at least %d bytes (128 bits) are recommended.",
            len(secret),
            MIN_SECRET_BYTES,
        )
    return secret


def passwords_equal(candidate: str, expected: str) -> bool:
    """Compare two passwords in time independent of where they first differ."""
    return constant_time.bytes_eq(candidate.encode("utf-8"), expected.encode("utf-8"))


class Hotp:
    """Counter-based one-time password generator."""

    __slots__ = ("_secret", "_algorithm", "_renderer")

    def __init__(
        self,
        secret: bytes,
        algorithm: Algorithm = Algorithm.SHA1,
        digits: int = DEFAULT_DIGITS,
    ) -> None:
        """
        Args:
            secret:    Raw secret bytes.
            algorithm: HMAC algorithm.
            digits:    Password width (>= 6).

        Raises:
            InvalidConfiguration: On an empty secret or a bad digit count.
        """
        self._secret = check_secret(secret)
        self._algorithm = Algorithm.parse(algorithm)
        self._renderer = IntegerRenderer(digits)

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    @property
    def digits(self) -> int:
        return self._renderer.digits

    def password(self, counter: int) -> str:
        """
        Generate the password for ``counter``.

        Raises:
            InvalidTimeError: If the counter is negative or exceeds 64 bits.
        """
        if isinstance(counter, bool) or not isinstance(counter, int):
            raise InvalidTimeError(f"counter must be an integer, got {counter!r}.")
        digest = compute_hmac(self._secret, counter, self._algorithm)
        return self._renderer.render_digest(digest)

    def verify(self, candidate: str, counter: int, look_ahead: int = 0) -> Optional[int]:
        """
        Validate a password against ``counter`` and the following counters.

        Args:
            candidate:  Password supplied by the user.
            counter:    Next expected counter value.
            look_ahead: How many further counters to accept for resync.

        Returns:
            The matching counter, or None if nothing matched. Storing the
            next counter (match + 1) is the caller's job.

        Raises:
            InvalidConfiguration: If ``look_ahead`` is negative.
        """
        if isinstance(look_ahead, bool) or not isinstance(look_ahead, int) or look_ahead < 0:
            raise InvalidConfiguration(f"look_ahead must be an integer >= 0, got {look_ahead!r}.")
        for c in range(counter, counter + look_ahead + 1):
            if passwords_equal(candidate, self.password(c)):
                return c
        return None

    def __repr__(self) -> str:
        return f"Hotp(algorithm={self._algorithm.value}, digits={self.digits})"
