"""Per-account session identifiers for prompt caching continuity.

The upstream client mints one session id at launch and keeps it for the
life of the process. A long-running proxy reproduces that by minting one id
per account on first use and reusing it until the process exits or the
store is reset.
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


def generate_session_id() -> str:
    """Return a new session id: canonical UUID4 text followed by epoch millis."""
    return str(uuid.uuid4()) + str(time.time_ns() // 1_000_000)


class SessionIdentityStore:
    """Process-lifetime cache of session ids keyed by account.

    Lookups for the same account always return the same id. Requests with no
    account get a fresh id every time, since there is nothing to key on.

    Thread Safety:
        The get-or-create path holds a lock, so concurrent first calls for
        one account all receive the single id that was stored.

    Example:
        >>> store = SessionIdentityStore()
        >>> first = store.derive_session_id(request, "a@example.com")
        >>> store.derive_session_id(request, "a@example.com") == first
        True
    """

    def __init__(self, id_factory: Callable[[], str] | None = None):
        """Initialize an empty store.

        Args:
            id_factory: Callable producing new session ids (default: generate_session_id).
        """
        self._id_factory = id_factory or generate_session_id
        self._sessions: dict[str, str] = {}
        self._lock = threading.Lock()

    def derive_session_id(self, request_context: Any, account_id: str | None) -> str:
        """Get or create the session id for an account.

        Args:
            request_context: The outgoing request. Not used to derive the id.
            account_id: Account the request is sent as; may be None or empty.

        Returns:
            The session id for the account, or a fresh one if there is no account.
        """
        if not account_id:
            return self._id_factory()

        with self._lock:
            session_id = self._sessions.get(account_id)
            if session_id is None:
                session_id = self._id_factory()
                self._sessions[account_id] = session_id
                logger.debug(f"Created session id ({len(self._sessions)} accounts cached)")
            return session_id

    def get(self, account_id: str) -> str | None:
        """Return the cached session id for an account without creating one."""
        with self._lock:
            return self._sessions.get(account_id)

    def reset(self) -> None:
        """Forget every cached session id."""
        with self._lock:
            count = len(self._sessions)
            self._sessions.clear()
        logger.debug(f"Cleared {count} session ids")

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, account_id: object) -> bool:
        with self._lock:
            return account_id in self._sessions
