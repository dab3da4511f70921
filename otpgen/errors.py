"""Exceptions raised by otpgen."""


class OTPError(Exception):
    """Base error for OTP generation."""
    pass


class ConfigError(OTPError, ValueError):
    """Invalid configuration (digits, step, key source)."""
    pass


class HashError(OTPError):
    """Keyed-hash computation failed."""
    pass
