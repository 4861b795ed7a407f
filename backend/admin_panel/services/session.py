from __future__ import annotations
"""Session context for the authenticated super admin.

``SessionStore`` is the durable key-value store (fixed keys ``access_token``,
``user_id``, ``organization_id``). ``SessionContext`` is the explicit object
handed to every component that needs the identity or upstream token; it is
initialized from the store at process start and torn down on logout.
"""
import logging
import threading
from typing import Callable, Dict, Optional

from sqlalchemy import select, delete

from admin_panel.models.session_store import (
    SessionEntry, KEY_ACCESS_TOKEN, KEY_USER_ID, KEY_ORGANIZATION_ID, ALL_SESSION_KEYS,
)
from admin_panel.models.user import AdminUser

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, session_factory: Callable):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        session = self.session_factory()
        entry = session.execute(select(SessionEntry).where(SessionEntry.key == key)).scalar_one_or_none()
        return entry.value if entry else None

    def replace(self, values: Dict[str, Optional[str]]):
        """Write several keys in one transaction; a None value removes the key."""
        session = self.session_factory()
        try:
            for key, value in values.items():
                entry = session.get(SessionEntry, key)
                if value is None:
                    if entry:
                        session.delete(entry)
                elif entry:
                    entry.value = value
                else:
                    session.add(SessionEntry(key=key, value=value))
            session.commit()
        except Exception:
            session.rollback()
            raise

    def clear(self):
        session = self.session_factory()
        session.execute(delete(SessionEntry).where(SessionEntry.key.in_(ALL_SESSION_KEYS)))
        session.commit()

    def snapshot(self) -> Dict[str, str]:
        session = self.session_factory()
        rows = session.execute(select(SessionEntry).where(SessionEntry.key.in_(ALL_SESSION_KEYS))).scalars().all()
        return {r.key: r.value for r in rows}


class SessionContext:
    def __init__(self, store: SessionStore):
        self.store = store
        self._lock = threading.Lock()
        self.access_token: Optional[str] = None
        self.user_id: Optional[int] = None
        self.organization_id: Optional[int] = None
        self.user: Optional[AdminUser] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token) and self.user_id is not None

    def load(self) -> 'SessionContext':
        """Restore from the durable store. Full identity is not persisted, only its id."""
        data = self.store.snapshot()
        with self._lock:
            self.access_token = data.get(KEY_ACCESS_TOKEN)
            self.user_id = _as_int(data.get(KEY_USER_ID))
            self.organization_id = _as_int(data.get(KEY_ORGANIZATION_ID))
            self.user = None
        if self.is_authenticated:
            logger.info('restored admin session for user %s', self.user_id)
        return self

    def establish(self, user: AdminUser, access_token: str):
        self.store.replace({
            KEY_ACCESS_TOKEN: access_token,
            KEY_USER_ID: str(user.s_no),
            KEY_ORGANIZATION_ID: str(user.organization_id) if user.organization_id else None,
        })
        with self._lock:
            self.access_token = access_token
            self.user_id = user.s_no
            self.organization_id = user.organization_id or None
            self.user = user
        logger.info('admin session established for user %s', user.s_no)

    def clear(self):
        self.store.clear()
        with self._lock:
            self.access_token = None
            self.user_id = None
            self.organization_id = None
            self.user = None
        logger.info('admin session cleared')

    def token(self) -> Optional[str]:
        return self.access_token


def _as_int(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None

__all__ = ['SessionStore', 'SessionContext']
