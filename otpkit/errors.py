"""
Exception hierarchy for otpkit.

All errors derive from :class:`OtpError` and from ``ValueError``, so callers
that only catch ``ValueError`` keep working.
"""


class OtpError(Exception):
    """Base class for every error raised by otpkit."""


class InvalidConfiguration(OtpError, ValueError):
    """A configuration value (digits, interval, window, secret...) is invalid."""


class InvalidTimeError(OtpError, ValueError):
    """A timestamp or counter falls outside the range the engine accepts."""


class DecodingError(OtpError, ValueError):
    """Base32 / Base64 text could not be decoded."""
