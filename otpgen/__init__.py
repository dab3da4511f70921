"""otpgen - TOTP/HOTP code generation.

Base32 key decoding, RFC 4226 dynamic truncation and RFC 6238 time
windows, with the keyed hash injected as a plain callable.
"""

from .base32 import Base32Result, decode, decode_prefix
from .config import (
    get_secrets,
    get_secret,
    save_secret,
    delete_secret,
    delete_all,
)
from .errors import OTPError, ConfigError, HashError
from .hotp import (
    KeyedHash,
    encode_counter,
    generate,
    hmac_sha1,
    truncate,
    validate_digits,
)
from .totp import (
    TimeWindow,
    TOTPCodes,
    codes,
    counter_at,
    remaining_seconds,
    time_window,
    totp,
)

__all__ = [
    # Base32
    "Base32Result",
    "decode",
    "decode_prefix",
    # Keyring
    "get_secrets",
    "get_secret",
    "save_secret",
    "delete_secret",
    "delete_all",
    # Errors
    "OTPError",
    "ConfigError",
    "HashError",
    # HOTP
    "KeyedHash",
    "encode_counter",
    "generate",
    "hmac_sha1",
    "truncate",
    "validate_digits",
    # TOTP
    "TimeWindow",
    "TOTPCodes",
    "codes",
    "counter_at",
    "remaining_seconds",
    "time_window",
    "totp",
]
