"""Named TOTP secrets stored in the system keyring."""

import json
import logging
from typing import Optional

import keyring

from .constants import KEYRING_SERVICE, SECRETS_KEY

log = logging.getLogger(__name__)


def get_secrets() -> dict:
    """Get all stored secrets.

    Returns:
        Dict of name -> base32 secret
    """
    try:
        data = keyring.get_password(KEYRING_SERVICE, SECRETS_KEY)
        if data:
            return json.loads(data)
    except Exception as e:
        log.warning("Keyring error: %s", e)
    return {}


def _save_secrets(secrets: dict) -> bool:
    """Save all secrets to keyring."""
    try:
        keyring.set_password(KEYRING_SERVICE, SECRETS_KEY, json.dumps(secrets))
        return True
    except Exception as e:
        log.error("Failed to save secrets: %s", e)
        return False


def get_secret(name: str) -> Optional[str]:
    """Get a stored secret by name, or None."""
    return get_secrets().get(name)


def save_secret(name: str, secret: str) -> bool:
    """Store a base32 secret under a name.

    Args:
        name: Identifier, e.g. the account or issuer
        secret: Base32 TOTP secret

    Returns:
        True if saved successfully
    """
    secrets = get_secrets()
    secrets[name] = secret
    return _save_secrets(secrets)


def delete_secret(name: str) -> bool:
    """Delete a stored secret.

    Returns:
        True if deleted
    """
    secrets = get_secrets()
    if name in secrets:
        del secrets[name]
        return _save_secrets(secrets)
    return False


def delete_all() -> bool:
    """Delete all stored secrets."""
    try:
        keyring.delete_password(KEYRING_SERVICE, SECRETS_KEY)
        return True
    except Exception as e:
        log.error("Failed to delete secrets: %s", e)
        return False
