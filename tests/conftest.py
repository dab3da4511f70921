"""Shared fixtures."""

import json

import pytest

from otpgen import config
from otpgen.constants import KEYRING_SERVICE, SECRETS_KEY


class MemoryKeyring:
    """In-memory stand-in for the keyring module functions."""

    def __init__(self):
        self.passwords = {}

    def get_password(self, service, key):
        return self.passwords.get((service, key))

    def set_password(self, service, key, value):
        self.passwords[(service, key)] = value

    def delete_password(self, service, key):
        del self.passwords[(service, key)]

    def secrets(self) -> dict:
        data = self.passwords.get((KEYRING_SERVICE, SECRETS_KEY))
        return json.loads(data) if data else {}


@pytest.fixture
def memory_keyring(monkeypatch):
    """Replace keyring access with an in-memory store."""
    store = MemoryKeyring()
    monkeypatch.setattr(config.keyring, "get_password", store.get_password)
    monkeypatch.setattr(config.keyring, "set_password", store.set_password)
    monkeypatch.setattr(config.keyring, "delete_password", store.delete_password)
    return store
