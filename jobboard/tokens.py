"""
Token Store Definitions

Holds the two session tokens (access_token / refresh_token) issued by the
API. The store is handed to the HTTP client explicitly so tests can swap
the cookie-backed implementation for an in-memory one.

Implementations:
- SessionTokenStore: Flask session cookie (signed, permanent, shared by all tabs)
- MemoryTokenStore: plain attributes, for tests and scripts
"""

from abc import ABC, abstractmethod
from typing import Optional

from flask import session


ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"


class TokenStore(ABC):
    """
    Abstract interface for session token persistence.

    No expiry tracking: presence of an access token alone means
    "authenticated" for page gating. The API stays the authority.
    """

    @abstractmethod
    def get(self) -> Optional[str]:
        """Return the stored access token, if any."""
        pass

    @abstractmethod
    def get_refresh(self) -> Optional[str]:
        """Return the stored refresh token, if any."""
        pass

    @abstractmethod
    def set(self, access: str, refresh: Optional[str]) -> None:
        """Persist a fresh token pair."""
        pass

    @abstractmethod
    def set_access(self, access: str) -> None:
        """Replace the access token, keeping the refresh token."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Forget both tokens."""
        pass

    def is_authenticated(self) -> bool:
        return bool(self.get())


class SessionTokenStore(TokenStore):
    """Token store backed by the Flask session cookie of the current request."""

    def get(self) -> Optional[str]:
        return session.get(ACCESS_TOKEN_KEY)

    def get_refresh(self) -> Optional[str]:
        return session.get(REFRESH_TOKEN_KEY)

    def set(self, access: str, refresh: Optional[str]) -> None:
        session[ACCESS_TOKEN_KEY] = access
        if refresh:
            session[REFRESH_TOKEN_KEY] = refresh
        else:
            session.pop(REFRESH_TOKEN_KEY, None)
        session.permanent = True

    def set_access(self, access: str) -> None:
        session[ACCESS_TOKEN_KEY] = access
        session.permanent = True

    def clear(self) -> None:
        session.pop(ACCESS_TOKEN_KEY, None)
        session.pop(REFRESH_TOKEN_KEY, None)


class MemoryTokenStore(TokenStore):
    """In-process token store."""

    def __init__(self, access: Optional[str] = None, refresh: Optional[str] = None):
        self.access = access
        self.refresh = refresh

    def get(self) -> Optional[str]:
        return self.access

    def get_refresh(self) -> Optional[str]:
        return self.refresh

    def set(self, access: str, refresh: Optional[str]) -> None:
        self.access = access
        self.refresh = refresh

    def set_access(self, access: str) -> None:
        self.access = access

    def clear(self) -> None:
        self.access = None
        self.refresh = None
