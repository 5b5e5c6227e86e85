"""
Session context.

Holds the bearer credential and user identity for the persistence API.
A session is passed explicitly to every client; there is no global
credential store.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from vellum.contexts.storage.exceptions import UnauthorizedError
from vellum.contexts.storage.logger import _log_debug, _log_info

load_dotenv()
VELLUM_TOKEN = os.getenv("VELLUM_TOKEN", "")


@dataclass
class SessionContext:
    """
    Credential and identity of the logged-in user.

    Attributes:
        token: Opaque bearer token (None once the session has ended)
        user: User record returned by the auth API, if known
    """

    token: Optional[str] = None
    user: Optional[Dict[str, Any]] = None

    @classmethod
    def start(cls, token: str, user: Optional[Dict[str, Any]] = None) -> "SessionContext":
        """
        Begin a session with a credential.

        Raises:
            UnauthorizedError: If token is empty
        """
        if not token:
            raise UnauthorizedError("Cannot start a session without a token")
        _log_info(f"Session started for {_describe_user(user)}")
        return cls(token=token, user=user)

    @classmethod
    def from_env(cls) -> "SessionContext":
        """
        Session from VELLUM_TOKEN.

        Returns an inactive session when the variable is unset; the first
        API call then fails with UnauthorizedError.
        """
        if not VELLUM_TOKEN:
            _log_debug("VELLUM_TOKEN not set; session is inactive")
            return cls()
        return cls.start(VELLUM_TOKEN)

    @property
    def is_active(self) -> bool:
        return bool(self.token)

    def end(self) -> None:
        """Discard the credential and identity (logout)."""
        if self.is_active:
            _log_info(f"Session ended for {_describe_user(self.user)}")
        self.token = None
        self.user = None

    def require_session(self) -> str:
        """
        Return the token, or fail when there is no active session.

        Raises:
            UnauthorizedError: If the session is inactive
        """
        if not self.is_active:
            raise UnauthorizedError("No active session; log in first")
        return self.token

    def auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.require_session()}"}


def _describe_user(user: Optional[Dict[str, Any]]) -> str:
    if not user:
        return "(unknown user)"
    return str(user.get("email") or user.get("name") or user.get("id") or "(unknown user)")
