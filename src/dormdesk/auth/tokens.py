"""In-memory bearer tokens that carry a session across HTTP requests.

Tokens never expire; logging out deletes the token. They identify a
session, they do not protect anything beyond that.
"""

import hashlib
import secrets
import threading
from typing import Dict, Optional, Tuple

from .session import Session


def generate_session_token() -> Tuple[str, str]:
    """
    Generate a session token and its SHA-256 hash.

    Returns:
        tuple[str, str]: (token, token_hash) where token is handed to the
        client and token_hash is the registry key.
    """
    token = secrets.token_urlsafe(24)  # 24 bytes -> ~32 chars
    token_hash = hashlib.sha256(token.encode()).hexdigest()
    return token, token_hash


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


class SessionRegistry:
    """Maps token hashes to sessions."""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def issue(self, session: Session) -> str:
        """Register a session and return its plain token."""
        token, token_hash = generate_session_token()
        with self._lock:
            self._sessions[token_hash] = session
        return token

    def get(self, token: str) -> Optional[Session]:
        if not token:
            return None
        with self._lock:
            return self._sessions.get(hash_token(token))

    def revoke(self, token: str) -> bool:
        """Forget a token. Returns False if it was not registered."""
        with self._lock:
            return self._sessions.pop(hash_token(token), None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
