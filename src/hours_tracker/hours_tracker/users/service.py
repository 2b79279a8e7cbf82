from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from werkzeug.security import check_password_hash

from ..core.enums import Role
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    def password_hash_for(self, username: str) -> Optional[str]:
        raise NotImplementedError


@dataclass(frozen=True)
class ConfiguredCredentialStore:
    """Single admin account taken from settings (``ADMIN_USERNAME`` / ``ADMIN_PASSWORD_HASH``)."""

    admin_username: str
    admin_password_hash: str

    def password_hash_for(self, username: str) -> Optional[str]:
        if not self.admin_username or not self.admin_password_hash:
            return None
        if username != self.admin_username:
            return None
        return self.admin_password_hash


class AuthService:
    """Use case: admin login, returns the role claim for the session."""

    def __init__(self, credentials: CredentialStore):
        self._credentials = credentials

    def authenticate(self, username: str, password: str) -> Role:
        password_hash = self._credentials.password_hash_for((username or "").strip())
        if not password_hash:
            raise AuthenticationError("Invalid credentials. Access denied.")

        try:
            ok = check_password_hash(password_hash, password or "")
        except (TypeError, ValueError):
            # e.g. a placeholder or corrupted hash in settings
            logger.warning("Configured admin password hash is not usable")
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials. Access denied.")
        return Role.ADMIN
