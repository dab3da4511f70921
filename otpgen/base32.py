"""Lenient base32 decoding of TOTP secrets.

Secrets are accepted the way 2FA enrollment screens show them: upper case
letters ``A-Z`` and digits ``2-7`` without ``=`` padding. Decoding never
fails. It stops at the first character outside the alphabet, or once
``max_len`` bytes have been produced, and returns whatever was decoded
up to that point.
"""

from typing import NamedTuple, Optional

from .constants import MAX_KEY_LEN

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

# 8 characters of 5 bits make one 40-bit block of 5 bytes
GROUPS_PER_BLOCK = 8
BYTES_PER_BLOCK = 5
BITS_PER_GROUP = 5

_VALUES = {c: i for i, c in enumerate(ALPHABET)}


class Base32Result(NamedTuple):
    """Decoded bytes plus where decoding stopped.

    ``stop`` is the index of the first character that was not consumed,
    or None if the whole input was consumed. ``invalid`` is True when
    decoding stopped on a character outside the alphabet. ``truncated``
    is True when ``max_len`` was hit with input or decoded bytes left over.
    """

    data: bytes
    stop: Optional[int]
    invalid: bool
    truncated: bool = False


def _flush(out: bytearray, acc: int, groups: int, max_len: int) -> bool:
    """Emit the bytes held in a (possibly partial) block.

    Missing groups are treated as zero padding. Bytes that lie wholly
    inside the padding are not emitted. Returns False if ``max_len``
    cut off any of the remaining bytes.
    """
    pad_bits = (GROUPS_PER_BLOCK - groups) * BITS_PER_GROUP
    acc <<= pad_bits
    pad_bytes = (pad_bits + 7) // 8
    count = BYTES_PER_BLOCK - pad_bytes
    shift = (BYTES_PER_BLOCK - 1) * 8
    while count and len(out) < max_len:
        out.append((acc >> shift) & 0xFF)
        acc <<= 8
        count -= 1
    return count == 0


def decode_prefix(src: str, max_len: int = MAX_KEY_LEN) -> Base32Result:
    """Decode as much of ``src`` as possible.

    Args:
        src: Base32 text (``A-Z2-7``, case-sensitive, no padding needed)
        max_len: Maximum number of bytes to produce

    Returns:
        Base32Result with the decoded bytes and the stop position

    Raises:
        ValueError: If max_len is negative
    """
    if max_len < 0:
        raise ValueError("max_len must be non-negative")

    out = bytearray()
    acc = 0
    groups = 0
    stop = None
    invalid = False
    truncated = False

    for pos, char in enumerate(src or ""):
        if len(out) >= max_len:
            stop = pos
            truncated = True
            break
        value = _VALUES.get(char)
        if value is None:
            stop = pos
            invalid = True
            break
        acc = (acc << BITS_PER_GROUP) | value
        groups += 1
        if groups == GROUPS_PER_BLOCK:
            if not _flush(out, acc, groups, max_len):
                truncated = True
            acc = 0
            groups = 0

    # Pad the trailing partial block at end of input
    if groups and not _flush(out, acc, groups, max_len):
        truncated = True

    return Base32Result(bytes(out), stop, invalid, truncated)


def decode(src: str, max_len: int = MAX_KEY_LEN) -> bytes:
    """Decode base32 text into at most ``max_len`` key bytes."""
    return decode_prefix(src, max_len).data
