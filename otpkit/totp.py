"""
TOTP (Time-based One-Time Password) implementation following RFC 6238.

The counter is ``(now - T0) // interval`` and is fed to the RFC 4226 HOTP
computation. An engine is a pure function of its immutable settings and the
supplied time, so a single instance can be shared between threads.
"""

import logging
import math
import time
from typing import Any, Optional, Union

from otpkit.config import OtpSettings, Timestamp, to_unix_seconds
from otpkit.digest import Algorithm
from otpkit.encoding import base32_decode, base64_decode
from otpkit.errors import InvalidTimeError
from otpkit.hotp import Hotp, passwords_equal

logger = logging.getLogger(__name__)


class Totp:
    """Time-based one-time password engine."""

    __slots__ = ("_settings", "_hotp")

    def __init__(
        self,
        secret: bytes,
        algorithm: Algorithm = Algorithm.SHA1,
        interval: int = 30,
        reference_timestamp: Timestamp = 0,
        digits: int = 6,
        max_window: Optional[int] = None,
    ) -> None:
        """
        Args:
            secret:              Raw secret bytes (never text).
            algorithm:           HMAC algorithm (default SHA1).
            interval:            Time step in seconds (default 30).
            reference_timestamp: T0 as Unix seconds or a datetime (default 0).
            digits:              Password width, at least 6 (default 6).
            max_window:          Upper bound on ``verify``'s window, or None
                                 for no bound.

        Raises:
            InvalidConfiguration: If any parameter is out of range or the
                secret is empty.
        """
        settings = OtpSettings(
            algorithm=algorithm,
            interval=interval,
            reference_timestamp=reference_timestamp,
            digits=digits,
            max_window=max_window,
        )
        self._settings = settings
        self._hotp = Hotp(secret, settings.algorithm, settings.digits)

    # ── Alternate constructors ───────────────────────────────────────────

    @classmethod
    def from_settings(cls, secret: bytes, settings: OtpSettings) -> "Totp":
        return cls(
            secret,
            algorithm=settings.algorithm,
            interval=settings.interval,
            reference_timestamp=settings.reference_timestamp,
            digits=settings.digits,
            max_window=settings.max_window,
        )

    @classmethod
    def from_base32(cls, secret: str, **kwargs: Any) -> "Totp":
        """Build an engine from a Base32-encoded secret."""
        return cls(base32_decode(secret), **kwargs)

    @classmethod
    def from_base64(cls, secret: str, **kwargs: Any) -> "Totp":
        """Build an engine from a Base64-encoded secret."""
        return cls(base64_decode(secret), **kwargs)

    # ── Accessors ────────────────────────────────────────────────────────

    @property
    def settings(self) -> OtpSettings:
        return self._settings

    @property
    def algorithm(self) -> Algorithm:
        return self._settings.algorithm

    @property
    def interval(self) -> int:
        return self._settings.interval

    @property
    def reference_timestamp(self) -> int:
        return self._settings.reference_timestamp

    @property
    def digits(self) -> int:
        return self._settings.digits

    @property
    def max_window(self) -> Optional[int]:
        return self._settings.max_window

    # ── Internals ────────────────────────────────────────────────────────

    def _elapsed(self, at: Optional[Timestamp]) -> Union[int, float]:
        """Seconds between the reference timestamp and ``at`` (default: now)."""
        t = to_unix_seconds(at) if at is not None else time.time()
        if isinstance(t, float) and not math.isfinite(t):
            raise InvalidTimeError(f"timestamp must be a finite number, got {t!r}.")
        elapsed = t - self._settings.reference_timestamp
        if elapsed < 0:
            raise InvalidTimeError(
                f"timestamp {t} is before the reference timestamp "
                f"{self._settings.reference_timestamp}."
            )
        return elapsed

    # ── Public API ───────────────────────────────────────────────────────

    def counter(self, at: Optional[Timestamp] = None) -> int:
        """
        Derive the moving factor for a point in time.

        Args:
            at: Unix timestamp or datetime (uses ``time.time()`` if None).

        Returns:
            ``(at - reference_timestamp) // interval``.

        Raises:
            InvalidTimeError: If ``at`` is not finite or is earlier than the
                reference timestamp.
        """
        elapsed = self._elapsed(at)
        counter = int(elapsed // self._settings.interval)
        logger.debug("Derived counter %d for %s seconds after the reference", counter, elapsed)
        return counter

    def password(self, at: Optional[Timestamp] = None) -> str:
        """Return the password valid at ``at`` (default: now)."""
        return self._hotp.password(self.counter(at))

    def password_for_counter(self, counter: int) -> str:
        """Return the password for an explicit counter (plain HOTP use)."""
        return self._hotp.password(counter)

    def verify(self, candidate: str, at: Optional[Timestamp] = None, window: int = 0) -> bool:
        """
        Verify a user-supplied password.

        A window of 0 accepts only the current password; a window of 1 also
        accepts the one from the immediately preceding time step, and so on.
        RFC 6238 recommends a window of at most 1: every extra step widens the
        set of recently observed passwords an attacker could replay.

        Args:
            candidate: Password supplied by the user.
            at:        Verification time (uses ``time.time()`` if None).
            window:    Number of preceding time steps to accept.

        Returns:
            True if ``candidate`` matches any password in the window.

        Raises:
            InvalidConfiguration: If ``window`` is negative or above ``max_window``.
            InvalidTimeError: If ``at`` is not finite or is earlier than the
                reference timestamp.
        """
        self._settings.check_window(window)
        counter = self.counter(at)
        for c in range(max(0, counter - window), counter + 1):
            if passwords_equal(candidate, self._hotp.password(c)):
                return True
        return False

    def remaining_seconds(self, at: Optional[Timestamp] = None) -> int:
        """Return seconds until the current time step expires."""
        elapsed = self._elapsed(at)
        return self._settings.interval - (int(elapsed) % self._settings.interval)

    def __repr__(self) -> str:
        s = self._settings
        return (
            f"Totp(algorithm={s.algorithm.value}, interval={s.interval}, "
            f"reference_timestamp={s.reference_timestamp}, digits={s.digits})"
        )
