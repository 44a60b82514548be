"""Persisted session storage for portalclient."""

from __future__ import annotations

import logging
import stat
from pathlib import Path

import msgspec

from portalclient.config.keyring import (
    delete_from_keyring,
    get_from_keyring,
    store_in_keyring,
)
from portalclient.config.paths import session_file
from portalclient.models import UserIdentity

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"


class StoredSession(msgspec.Struct, omit_defaults=True):
    """On-disk form of the session."""

    token: str | None = None
    user: UserIdentity | None = None


def write_credential(path: Path, content: bytes) -> None:
    """Securely write credential to file with 0o600 permissions."""
    path.parent.mkdir(parents=True, exist_ok=True)

    # Write to temp file first, then rename for atomicity
    temp_path = path.with_suffix(".tmp")
    temp_path.write_bytes(content)

    # Set restrictive permissions
    temp_path.chmod(stat.S_IRUSR | stat.S_IWUSR)  # 0o600

    # Atomic rename
    temp_path.replace(path)


def check_credential_permissions(path: Path) -> bool:
    """Verify credential file has secure permissions (0o600 or stricter)."""
    if not path.exists():
        return True  # No file is secure

    mode = path.stat().st_mode
    # Check that only owner has read/write
    return not (mode & (stat.S_IRGRP | stat.S_IWGRP | stat.S_IROTH | stat.S_IWOTH))


def read_credential(path: Path) -> bytes | None:
    """Read credential file if it exists and has secure permissions."""
    if not path.exists():
        return None

    if not check_credential_permissions(path):
        logger.warning("Ignoring %s: readable by group or others", path)
        return None

    return path.read_bytes()


def delete_credential(path: Path) -> bool:
    """Delete credential file.

    Returns:
        True if deleted, False if didn't exist
    """
    if not path.exists():
        return False

    path.unlink()
    return True


class SessionStore:
    """Reads and writes the persisted session.

    With ``use_keyring`` the token lives in the system keyring and only the
    user identity is written to the session file.
    """

    def __init__(self, path: Path | None = None, use_keyring: bool = False) -> None:
        self.path = path or session_file()
        self.use_keyring = use_keyring

    def load(self) -> StoredSession:
        """Load the stored session, or an empty one."""
        data = read_credential(self.path)
        stored = StoredSession()
        if data:
            try:
                stored = msgspec.json.decode(data, type=StoredSession)
            except msgspec.DecodeError:
                logger.warning("Ignoring unreadable session file %s", self.path)

        if self.use_keyring and stored.token is None:
            token = get_from_keyring(TOKEN_KEY)
            if token:
                stored = msgspec.structs.replace(stored, token=token)

        return stored

    def save(self, token: str, user: UserIdentity | None) -> None:
        """Persist token and user identity."""
        stored = StoredSession(token=token, user=user)
        if self.use_keyring and store_in_keyring(TOKEN_KEY, token):
            stored = StoredSession(user=user)
        write_credential(self.path, msgspec.json.encode(stored))

    def clear(self) -> None:
        """Remove token and user identity from every backend."""
        if self.use_keyring:
            delete_from_keyring(TOKEN_KEY)
        delete_credential(self.path)
