"""
otpkit – command line entry point.

Usage
-----
    python main.py password --secret GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ
    python main.py verify 287082 --secret GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ --window 1

Or, if installed as a package:
    otpkit password --secret ...

Defaults for algorithm, interval, reference timestamp, digits and the
maximum window are read from ``OTP_*`` environment variables; flags win.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from otpkit.config import OtpSettings
from otpkit.encoding import base32_decode, base64_decode, normalize_base32
from otpkit.errors import OtpError
from otpkit.totp import Totp

logger = logging.getLogger("otpkit")

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


# ── Logging setup ─────────────────────────────────────────────────────────────

def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# ── Argument parsing ──────────────────────────────────────────────────────────

def _add_engine_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--secret", required=True, help="Shared secret (Base32 unless --base64).")
    parser.add_argument("--base64", action="store_true", help="Treat --secret as Base64.")
    parser.add_argument("--algorithm", help="SHA1, SHA256 or SHA512.")
    parser.add_argument("--digits", type=int, help="Password width (>= 6).")
    parser.add_argument("--interval", type=int, help="Time step in seconds.")
    parser.add_argument("--reference", type=int, help="Reference Unix timestamp (T0).")
    parser.add_argument("--at", type=float, help="Unix timestamp to use instead of now.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="otpkit", description="RFC 6238 TOTP tool.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    password = sub.add_parser("password", help="Print the current password.")
    _add_engine_arguments(password)

    verify = sub.add_parser("verify", help="Check a password.")
    verify.add_argument("candidate", help="Password to check.")
    verify.add_argument("--window", type=int, default=0, help="Preceding time steps to accept.")
    _add_engine_arguments(verify)

    return parser


# ── Bootstrap ─────────────────────────────────────────────────────────────────

def _build_engine(args: argparse.Namespace) -> Totp:
    """Merge environment defaults with command line flags."""
    env = OtpSettings.from_env()
    settings = OtpSettings(
        algorithm=args.algorithm or env.algorithm,
        interval=args.interval if args.interval is not None else env.interval,
        reference_timestamp=(
            args.reference if args.reference is not None else env.reference_timestamp
        ),
        digits=args.digits if args.digits is not None else env.digits,
        max_window=env.max_window,
    )
    if args.base64:
        secret = base64_decode(args.secret.strip())
    else:
        secret = base32_decode(normalize_base32(args.secret))
    return Totp.from_settings(secret, settings)


# ── Main ──────────────────────────────────────────────────────────────────────

def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        engine = _build_engine(args)
        if args.command == "password":
            print(engine.password(args.at))
            return EXIT_OK

        if engine.verify(args.candidate, args.at, window=args.window):
            print("valid")
            return EXIT_OK
        print("invalid")
        return EXIT_INVALID
    except OtpError as exc:
        logger.error("%s", exc)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
