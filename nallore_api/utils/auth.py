"""
Admin authentication for write and admin-only read endpoints.

The admin client sends a shared secret in the X-Admin-Token header. Checks
go through an Authenticator so the shared-secret model can be replaced
(e.g. per-user credentials) without touching any route.
Uses bcrypt for the optional hashed login password.
"""
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Optional
import hmac
import logging

import bcrypt
from fastapi import Depends, Header

from nallore_api.config import settings
from nallore_api.errors import Unauthorized

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.
    Used for generating the ADMIN_PASSWORD_HASH value.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def verify_password(password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hashed password.

    Args:
        password: Plain text password to verify
        hashed_password: Hashed password to compare against

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    try:
        return bcrypt.checkpw(
            password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError:
        logger.error("ADMIN_PASSWORD_HASH is not a valid bcrypt hash")
        return False


def _same_secret(supplied: Optional[str], secret: str) -> bool:
    """Constant-time comparison; an unset secret matches nothing."""
    if not supplied or not secret:
        return False
    return hmac.compare_digest(supplied.encode('utf-8'), secret.encode('utf-8'))


class Authenticator(ABC):
    """Decides whether a caller may perform admin operations."""

    @abstractmethod
    def authorize(self, credential: Optional[str]) -> bool:
        """Return True if the credential grants admin access."""

    @abstractmethod
    def login(self, password: Optional[str]) -> Optional[str]:
        """Exchange a password for a credential, or None if it is wrong."""


class SharedSecretAuthenticator(Authenticator):
    """
    Single process-wide shared secret.
    No identity, expiry or rotation: the token returned by login is the
    secret itself.
    """

    def __init__(self, secret: str, password_hash: str = ""):
        self._secret = secret
        self._password_hash = password_hash

    def authorize(self, credential: Optional[str]) -> bool:
        return _same_secret(credential, self._secret)

    def login(self, password: Optional[str]) -> Optional[str]:
        if not password or not self._secret:
            return None
        if self._password_hash:
            accepted = verify_password(password, self._password_hash)
        else:
            accepted = _same_secret(password, self._secret)
        return self._secret if accepted else None


@lru_cache
def get_authenticator() -> Authenticator:
    """FastAPI dependency returning the configured authenticator."""
    if not settings.ADMIN_TOKEN:
        logger.warning("ADMIN_TOKEN not configured - admin endpoints will reject every request")
    return SharedSecretAuthenticator(settings.ADMIN_TOKEN, settings.ADMIN_PASSWORD_HASH)


def require_admin(
    x_admin_token: Optional[str] = Header(None, alias="X-Admin-Token", description="Admin token"),
    authenticator: Authenticator = Depends(get_authenticator),
) -> bool:
    """
    FastAPI dependency gating admin endpoints.

    Args:
        x_admin_token: Token provided in request header (X-Admin-Token)
        authenticator: Configured authenticator (injected by dependency)

    Returns:
        True if authenticated

    Raises:
        Unauthorized: If the token is missing or invalid
    """
    if not authenticator.authorize(x_admin_token):
        logger.warning("Rejected admin request: missing or invalid token")
        raise Unauthorized()
    return True
