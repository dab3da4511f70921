"""HOTP code generation (RFC 4226).

The keyed hash is injected: any callable taking ``(key, message)`` and
returning a 20-byte digest can stand in for HMAC-SHA1.
"""

import hashlib
import hmac
import logging
import struct
from typing import Callable

from .constants import DEFAULT_DIGITS, DIGEST_SIZE, MAX_DIGITS, MIN_DIGITS
from .errors import ConfigError, HashError

log = logging.getLogger(__name__)

KeyedHash = Callable[[bytes, bytes], bytes]

MAX_COUNTER = 2 ** 64 - 1


def hmac_sha1(key: bytes, message: bytes) -> bytes:
    """Compute HMAC-SHA1 of an 8-byte counter message."""
    return hmac.new(key, message, hashlib.sha1).digest()


def validate_digits(digits: int) -> None:
    """Raise ConfigError unless digits is within 1..10."""
    if not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise ConfigError(f"<digits> must be {MIN_DIGITS}..{MAX_DIGITS}")


def encode_counter(counter: int) -> bytes:
    """Encode a 64-bit unsigned counter as 8 big-endian bytes."""
    if not 0 <= counter <= MAX_COUNTER:
        raise ConfigError(f"counter out of range: {counter}")
    return struct.pack(">Q", counter)


def truncate(digest: bytes, digits: int) -> str:
    """Dynamically truncate a digest into a zero-padded decimal code.

    Args:
        digest: 20-byte HMAC-SHA1 digest
        digits: Code length, already validated to be 1..10

    Returns:
        Decimal string of exactly ``digits`` characters
    """
    if len(digest) < DIGEST_SIZE:
        raise HashError(f"digest too short: {len(digest)} bytes")
    offset = digest[DIGEST_SIZE - 1] & 0x0F
    # MSB masked so the value stays positive as a signed 32-bit int
    value = struct.unpack(">I", digest[offset:offset + 4])[0] & 0x7FFFFFFF
    return str(value % 10 ** digits).zfill(digits)


def generate(
        key: bytes,
        counter: int,
        digits: int = DEFAULT_DIGITS,
        hash_func: KeyedHash = hmac_sha1,
) -> str:
    """Generate the HOTP code for a key and counter.

    Args:
        key: Raw secret key bytes
        counter: Moving factor (time step or event counter)
        digits: Code length, 1..10
        hash_func: Keyed-hash collaborator, HMAC-SHA1 by default

    Returns:
        Decimal code of ``digits`` characters

    Raises:
        ConfigError: If digits is out of range (checked before hashing)
            or the counter does not fit in 64 bits
        HashError: If the keyed hash fails or returns a malformed digest
    """
    validate_digits(digits)
    message = encode_counter(counter)
    log.debug("T: %s", message.hex())

    try:
        digest = hash_func(key, message)
    except Exception as e:
        raise HashError(f"HMAC calculation error: {e}") from e
    if not isinstance(digest, (bytes, bytearray)) or len(digest) != DIGEST_SIZE:
        raise HashError("HMAC calculation error: unexpected digest size")
    log.debug("HMAC: %s", digest.hex())

    return truncate(digest, digits)
