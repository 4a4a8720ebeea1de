"""
Render truncated HMAC values as fixed-width decimal passwords.

RFC 4226 mandates ``value mod 10**digits`` rather than keeping the leading
digits of the full decimal string; the result is left-padded with zeros.
"""

from otpkit.errors import InvalidConfiguration
from otpkit.truncation import extract_integer

MINIMUM_DIGITS = 6
DEFAULT_DIGITS = 6


class IntegerRenderer:
    """Render passwords with a fixed number of decimal digits."""

    __slots__ = ("_digits", "_modulus")

    def __init__(self, digits: int = DEFAULT_DIGITS) -> None:
        """
        Args:
            digits: Password width. Must be at least 6; values above 9 only
                    add extra zero padding on the left.

        Raises:
            InvalidConfiguration: If ``digits`` is not an integer >= 6.
        """
        if isinstance(digits, bool) or not isinstance(digits, int):
            raise InvalidConfiguration(f"digits must be an integer, got {digits!r}.")
        if digits < MINIMUM_DIGITS:
            raise InvalidConfiguration(
                f"digits must be at least {MINIMUM_DIGITS}, got {digits}."
            )
        self._digits = digits
        self._modulus = 10**digits

    @property
    def digits(self) -> int:
        return self._digits

    def render(self, value: int) -> str:
        """Render an extracted integer as a zero-padded decimal string."""
        return str(value % self._modulus).zfill(self._digits)

    def render_digest(self, digest: bytes) -> str:
        """Truncate an HMAC digest and render the result."""
        return self.render(extract_integer(digest))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntegerRenderer):
            return NotImplemented
        return self._digits == other._digits

    def __hash__(self) -> int:
        return hash((IntegerRenderer, self._digits))

    def __repr__(self) -> str:
        return f"IntegerRenderer(digits={self._digits})"


def six_digits() -> IntegerRenderer:
    return IntegerRenderer(6)


def eight_digits() -> IntegerRenderer:
    return IntegerRenderer(8)


def format_password(password: str, group: int = 3) -> str:
    """
    Format a password with spaces for readability.

    Example::

        >>> format_password("123456")
        '123 456'

    Args:
        password: Digit string.
        group:    Digit grouping size.

    Returns:
        Spaced password string.
    """
    return " ".join(password[i : i + group] for i in range(0, len(password), group))
