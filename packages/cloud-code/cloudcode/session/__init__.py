"""Cloud Code session identity.

Provides process-lifetime session ids per account:
- SessionIdentityStore: get-or-create cache keyed by account
- generate_session_id: mints a new id

Usage:
    from cloudcode.session import SessionIdentityStore

    store = SessionIdentityStore()
    session_id = store.derive_session_id(request, account_email)
"""

from cloudcode.session.store import SessionIdentityStore, generate_session_id

__all__ = [
    "SessionIdentityStore",
    "generate_session_id",
]
