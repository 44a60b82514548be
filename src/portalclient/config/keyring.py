"""Optional system keyring integration for the session token."""

import logging
from functools import lru_cache

logger = logging.getLogger(__name__)

SERVICE_NAME = "portalclient"


@lru_cache(maxsize=1)
def keyring_available() -> bool:
    """Check if keyring module is available and functional."""
    try:
        import keyring

        # Try to get the keyring backend
        backend = keyring.get_keyring()
        return backend is not None
    except Exception:
        logger.debug("System keyring unavailable", exc_info=True)
        return False


def keyring_key(name: str) -> str:
    """Generate a keyring key for storage."""
    return f"{SERVICE_NAME}:{name}"


def store_in_keyring(name: str, value: str) -> bool:
    """Store a secret in the system keyring.

    Returns:
        True if stored successfully, False otherwise
    """
    if not keyring_available():
        return False

    try:
        import keyring

        keyring.set_password(SERVICE_NAME, keyring_key(name), value)
        return True
    except Exception:
        logger.warning("Could not store %s in keyring", name, exc_info=True)
        return False


def get_from_keyring(name: str) -> str | None:
    """Retrieve a secret from the system keyring.

    Returns:
        Secret value if found, None otherwise
    """
    if not keyring_available():
        return None

    try:
        import keyring

        return keyring.get_password(SERVICE_NAME, keyring_key(name))
    except Exception:
        logger.warning("Could not read %s from keyring", name, exc_info=True)
        return None


def delete_from_keyring(name: str) -> bool:
    """Delete a secret from the system keyring.

    Returns:
        True if deleted successfully, False otherwise
    """
    if not keyring_available():
        return False

    try:
        import keyring

        keyring.delete_password(SERVICE_NAME, keyring_key(name))
        return True
    except Exception:
        # PasswordDeleteError when nothing was stored
        logger.debug("Could not delete %s from keyring", name, exc_info=True)
        return False
