"""
Engine configuration.

:class:`OtpSettings` bundles the non-secret parameters of an OTP engine and
validates them once, at construction. Invalid values are rejected, never
clamped.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Mapping, Optional, Union

from otpkit.digest import Algorithm
from otpkit.errors import InvalidConfiguration
from otpkit.renderer import DEFAULT_DIGITS, MINIMUM_DIGITS

logger = logging.getLogger(__name__)

# ── Constants ────────────────────────────────────────────────────────────────

DEFAULT_ALGORITHM = Algorithm.SHA1
DEFAULT_INTERVAL = 30               # RFC 6238 time step X
DEFAULT_REFERENCE_TIMESTAMP = 0     # RFC 6238 T0 (Unix epoch)
RECOMMENDED_MAX_WINDOW = 1          # RFC 6238 §5.2
MIN_SECRET_BYTES = 16               # RFC 4226 §4 R6: 128-bit minimum

ENV_PREFIX = "OTP_"

Timestamp = Union[int, float, datetime]


# ── Helpers ───────────────────────────────────────────────────────────────────

def to_unix_seconds(value: Timestamp) -> Union[int, float]:
    """
    Convert a timestamp to Unix seconds.

    Naive datetimes are taken to be UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    return value


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# ── Settings ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class OtpSettings:
    """Validated, immutable OTP engine parameters."""

    algorithm: Algorithm = DEFAULT_ALGORITHM
    interval: int = DEFAULT_INTERVAL
    reference_timestamp: int = DEFAULT_REFERENCE_TIMESTAMP
    digits: int = DEFAULT_DIGITS
    max_window: Optional[int] = field(default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, "algorithm", Algorithm.parse(self.algorithm))

        if isinstance(self.reference_timestamp, datetime):
            object.__setattr__(
                self, "reference_timestamp", to_unix_seconds(self.reference_timestamp)
            )

        if not _is_int(self.interval) or self.interval < 1:
            raise InvalidConfiguration(
                f"interval must be an integer number of seconds >= 1, got {self.interval!r}."
            )
        if not _is_int(self.reference_timestamp) or self.reference_timestamp < 0:
            raise InvalidConfiguration(
                "reference_timestamp must be a non-negative integer Unix timestamp, "
                f"got {self.reference_timestamp!r}."
            )
        if not _is_int(self.digits) or self.digits < MINIMUM_DIGITS:
            raise InvalidConfiguration(
                f"digits must be an integer >= {MINIMUM_DIGITS}, got {self.digits!r}."
            )
        if self.max_window is not None and (not _is_int(self.max_window) or self.max_window < 0):
            raise InvalidConfiguration(
                f"max_window must be None or an integer >= 0, got {self.max_window!r}."
            )

    def check_window(self, window: int) -> None:
        """
        Validate a verification window against these settings.

        Raises:
            InvalidConfiguration: If ``window`` is negative or above ``max_window``.
        """
        if not _is_int(window) or window < 0:
            raise InvalidConfiguration(f"window must be an integer >= 0, got {window!r}.")
        if self.max_window is not None and window > self.max_window:
            raise InvalidConfiguration(
                f"window {window} exceeds the configured max_window of {self.max_window}."
            )
        if window > RECOMMENDED_MAX_WINDOW:
            logger.warning(
                "Verification window of %d exceeds the recommended maximum of %d.",
                window,
                RECOMMENDED_MAX_WINDOW,
            )

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        prefix: str = ENV_PREFIX,
    ) -> "OtpSettings":
        """
        Build settings from environment variables.

        Recognised keys (with the default prefix): ``OTP_ALGORITHM``,
        ``OTP_INTERVAL``, ``OTP_REFERENCE_TIMESTAMP``, ``OTP_DIGITS`` and
        ``OTP_MAX_WINDOW``. Missing keys fall back to the defaults.

        Raises:
            InvalidConfiguration: On a non-integer or out-of-range value.
        """
        env = os.environ if environ is None else environ

        def _int(name: str, default: Optional[int]) -> Optional[int]:
            raw = env.get(prefix + name)
            if raw is None or raw.strip() == "":
                return default
            try:
                return int(raw)
            except ValueError:
                raise InvalidConfiguration(
                    f"{prefix + name} must be an integer, got {raw!r}."
                ) from None

        return cls(
            algorithm=Algorithm.parse(env.get(prefix + "ALGORITHM") or DEFAULT_ALGORITHM),
            interval=_int("INTERVAL", DEFAULT_INTERVAL),
            reference_timestamp=_int("REFERENCE_TIMESTAMP", DEFAULT_REFERENCE_TIMESTAMP),
            digits=_int("DIGITS", DEFAULT_DIGITS),
            max_window=_int("MAX_WINDOW", None),
        )
