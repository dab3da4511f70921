"""otpgen - TOTP codes from a base32 secret.

Usage:
    otpgen <key-file>                  (current and next code, with expiry)
    otpgen -k <key>                    (secret given inline)
    otpgen -n <name>                   (secret from the system keyring)
    otpgen -1 -t <time> -k <key>       (only the code valid at <time>)
    otpgen --save <name> -k <key>      (store a secret in the keyring)
    otpgen --list                      (list stored secrets)
    otpgen --delete <name>             (remove a stored secret)
    otpgen --delete-all                (remove all stored secrets)

<key-file> can be - to read the key from stdin.
"""

import argparse
import logging
import sys
from typing import Optional

from . import config
from .base32 import decode_prefix
from .constants import APP_NAME, DEFAULT_DIGITS, DEFAULT_STEP, MAX_KEY_LEN
from .errors import ConfigError, OTPError
from .hotp import validate_digits
from .totp import codes, totp

log = logging.getLogger(__name__)

# Colors
GREEN = "\033[32m"
RED = "\033[31m"
NC = "\033[0m"


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog=APP_NAME,
        description="Print TOTP codes (RFC 6238, HMAC-SHA1) for a base32 secret",
        epilog="By default the current and next code are printed with expiry "
               "information. <key-file> can be - for key input on stdin.",
    )
    parser.add_argument("keyfile", nargs="?", help="File with the base32 key on its first line, or -")
    parser.add_argument("-k", dest="key", metavar="<key>", help="Base32 key")
    parser.add_argument("-n", "--name", metavar="<name>", help="Use the key stored in the keyring under <name>")
    parser.add_argument("-t", dest="time", type=int, metavar="<time>", help="Time in seconds since epoch (default: now)")
    parser.add_argument("-s", dest="step", type=int, default=DEFAULT_STEP, metavar="<step>",
                        help=f"Time step in seconds (default: {DEFAULT_STEP})")
    parser.add_argument("-d", dest="digits", type=int, default=DEFAULT_DIGITS, metavar="<digits>",
                        help=f"Number of digits, 1..10 (default: {DEFAULT_DIGITS})")
    parser.add_argument("-1", dest="just_one", action="store_true", help="Only print the current code")
    parser.add_argument("-v", dest="verbose", action="count", default=0,
                        help="Show counter and HMAC (-vv also shows the decoded key)")
    parser.add_argument("--strict", action="store_true", help="Reject keys with characters outside A-Z2-7")
    parser.add_argument("--save", metavar="<name>", help="Store the key in the keyring under <name>")
    parser.add_argument("--list", action="store_true", help="List keys stored in the keyring")
    parser.add_argument("--delete", metavar="<name>", help="Delete a key from the keyring")
    parser.add_argument("--delete-all", action="store_true", help="Delete all keys from the keyring")
    return parser


def read_key_file(path: str) -> str:
    """Read the base32 key from the first line of a file (or stdin for -)."""
    try:
        if path == "-":
            line = sys.stdin.readline()
        else:
            # Undecodable bytes become U+FFFD, which ends base32 decoding
            with open(path, "r", encoding="ascii", errors="replace") as f:
                line = f.readline()
    except OSError as e:
        raise ConfigError(f"cannot open {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"cannot read key from {path}: {e.reason}") from e
    line = line.rstrip("\r\n")
    if not line:
        raise ConfigError("no key found")
    return line


def resolve_secret(args) -> str:
    """Pick the base32 secret from exactly one key source."""
    sources = [s for s in (args.keyfile, args.key, args.name) if s is not None]
    if not sources:
        raise ConfigError("missing key")
    if len(sources) > 1:
        raise ConfigError("too many key specifications, pick one")

    if args.keyfile is not None:
        return read_key_file(args.keyfile)
    if args.name is not None:
        secret = config.get_secret(args.name)
        if not secret:
            raise ConfigError(f"no key stored under '{args.name}'")
        return secret
    return args.key


def decode_key(secret: str, strict: bool = False) -> bytes:
    """Decode a base32 secret, failing if nothing usable comes out."""
    result = decode_prefix(secret, MAX_KEY_LEN)
    if result.stop is not None:
        if strict and result.invalid:
            raise ConfigError(f"invalid base32 character at position {result.stop}")
        log.info("Key decoding stopped at position %d", result.stop)
    if result.truncated:
        log.info("Key truncated to %d bytes", len(result.data))
    if not result.data:
        raise ConfigError("no key found")
    return result.data


def list_secrets():
    """Print names of stored secrets."""
    secrets = config.get_secrets()
    if not secrets:
        print("No stored keys. Use --save <name> to add one.")
        return
    for name in sorted(secrets):
        print(name)


def _setup_logging(verbose: int):
    logging.basicConfig(format="%(message)s", stream=sys.stderr)
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger(APP_NAME).setLevel(level)


def run(args):
    """Execute a parsed command line. Raises OTPError on failure."""
    if args.list:
        list_secrets()
        return

    if args.delete:
        if not config.delete_secret(args.delete):
            raise ConfigError(f"no key stored under '{args.delete}'")
        print(f"{GREEN}Deleted '{args.delete}'{NC}")
        return

    if args.delete_all:
        if not config.delete_all():
            raise ConfigError("no stored keys to delete")
        print(f"{GREEN}Deleted all stored keys{NC}")
        return

    # Configuration is checked before any key material is touched
    validate_digits(args.digits)
    if args.step <= 0:
        raise ConfigError("<step> must be positive")
    if args.time is not None and args.time < 0:
        raise ConfigError("<time> must not be negative")

    secret = resolve_secret(args)
    key = decode_key(secret, strict=args.strict)
    if args.verbose > 1:
        log.debug("Key: %s", key.hex())

    if args.save:
        if not config.save_secret(args.save, secret):
            raise ConfigError(f"failed to store key '{args.save}'")
        print(f"{GREEN}Saved key as '{args.save}'{NC}")
        return

    if args.just_one:
        print(totp(key, args.time, args.step, args.digits))
        return

    result = codes(key, args.time, args.step, args.digits)
    print(f"(valid for {result.remaining} sec)")
    print(result.current)
    print(result.next)


def main(argv: Optional[list] = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        run(args)
    except OTPError as e:
        print(f"{RED}ERROR: {e}{NC}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
