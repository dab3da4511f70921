"""Constants for otpgen."""

APP_NAME = "otpgen"

# Keyring storage
KEYRING_SERVICE = "otpgen"
SECRETS_KEY = "secrets"

# Code generation defaults
DEFAULT_DIGITS = 6
DEFAULT_STEP = 30
MIN_DIGITS = 1
MAX_DIGITS = 10

# Buffer sizes
MAX_KEY_LEN = 64
DIGEST_SIZE = 20
