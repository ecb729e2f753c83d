"""API key generation and shape checks."""

from __future__ import annotations

import secrets
import string

API_KEY_LENGTH = 32
API_KEY_ALPHABET = string.ascii_letters + string.digits


def generate_api_key() -> str:
    """Return a random 32-character alphanumeric key."""

    return "".join(secrets.choice(API_KEY_ALPHABET) for _ in range(API_KEY_LENGTH))


def is_well_formed_api_key(value: str | None) -> bool:
    """Check length and alphabet before touching persistence."""

    if value is None or len(value) != API_KEY_LENGTH:
        return False
    return all(char in API_KEY_ALPHABET for char in value)
