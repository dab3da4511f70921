"""TOTP time-window arithmetic (RFC 6238)."""

import time
from typing import NamedTuple, Optional

from .constants import DEFAULT_DIGITS, DEFAULT_STEP
from .errors import ConfigError
from .hotp import KeyedHash, generate, hmac_sha1


class TimeWindow(NamedTuple):
    """Counter for a timestamp and seconds left until it advances."""

    timestamp: int
    counter: int
    remaining: int


class TOTPCodes(NamedTuple):
    """Current and next code with the current code's remaining validity."""

    current: str
    next: str
    remaining: int


def _check(timestamp: int, step: int) -> None:
    if step <= 0:
        raise ConfigError("<step> must be positive")
    if timestamp < 0:
        raise ConfigError("<time> must not be negative")


def counter_at(timestamp: int, step: int = DEFAULT_STEP) -> int:
    """Number of whole time steps since the epoch."""
    _check(timestamp, step)
    return int(timestamp // step)


def remaining_seconds(timestamp: int, step: int = DEFAULT_STEP) -> int:
    """Seconds until the counter for ``timestamp`` advances."""
    return (counter_at(timestamp, step) + 1) * step - timestamp


def time_window(timestamp: Optional[int] = None, step: int = DEFAULT_STEP) -> TimeWindow:
    """Compute the time window for a timestamp (default: now)."""
    if timestamp is None:
        timestamp = int(time.time())
    counter = counter_at(timestamp, step)
    return TimeWindow(timestamp, counter, (counter + 1) * step - timestamp)


def totp(
        key: bytes,
        timestamp: Optional[int] = None,
        step: int = DEFAULT_STEP,
        digits: int = DEFAULT_DIGITS,
        hash_func: KeyedHash = hmac_sha1,
) -> str:
    """Generate the TOTP code valid at ``timestamp`` (default: now)."""
    window = time_window(timestamp, step)
    return generate(key, window.counter, digits, hash_func)


def codes(
        key: bytes,
        timestamp: Optional[int] = None,
        step: int = DEFAULT_STEP,
        digits: int = DEFAULT_DIGITS,
        hash_func: KeyedHash = hmac_sha1,
) -> TOTPCodes:
    """Generate the current and the next TOTP code.

    The next code is the one for ``counter + 1``, which lets a user get
    past small clock drift between client and verifier.
    """
    window = time_window(timestamp, step)
    current = generate(key, window.counter, digits, hash_func)
    upcoming = generate(key, window.counter + 1, digits, hash_func)
    return TOTPCodes(current, upcoming, window.remaining)
