"""
Keychain Integration

Reads the Todoist API token from the platform secret store (macOS Keychain,
Secret Service, Windows Credential Locker) through keyring.
"""

import logging
from typing import Optional

import keyring
from keyring.errors import KeyringError

from ..errors import CredentialError

KEYCHAIN_SERVICE = 'todoist'
KEYCHAIN_ACCOUNT = 'api-token'

logger = logging.getLogger("TodoStatus.Keychain")


def resolve_token(configured_token: Optional[str]) -> str:
    """
    Return the API token to use for Todoist requests

    Args:
        configured_token: Token from configuration (may be empty)

    Returns:
        The configured token if non-empty, otherwise the secret store entry

    Raises:
        CredentialError: If the secret store has no entry or cannot be read
    """
    if configured_token:
        return configured_token

    logger.debug(f"Reading API token from keychain ({KEYCHAIN_SERVICE}/{KEYCHAIN_ACCOUNT})")

    try:
        token = keyring.get_password(KEYCHAIN_SERVICE, KEYCHAIN_ACCOUNT)
    except KeyringError as e:
        raise CredentialError(f"Failed to read API token from keychain: {e}") from e

    if not token:
        raise CredentialError(
            f"No API token configured and no keychain entry for "
            f"service '{KEYCHAIN_SERVICE}', account '{KEYCHAIN_ACCOUNT}'"
        )

    return token
