from __future__ import annotations
from sqlalchemy.orm import declarative_base, Mapped, mapped_column
from sqlalchemy import String, Text, DateTime, func

Base = declarative_base()

# Fixed key names of the durable session store
KEY_ACCESS_TOKEN = 'access_token'
KEY_USER_ID = 'user_id'
KEY_ORGANIZATION_ID = 'organization_id'
ALL_SESSION_KEYS = (KEY_ACCESS_TOKEN, KEY_USER_ID, KEY_ORGANIZATION_ID)


class SessionEntry(Base):
    __tablename__ = 'session_entries'
    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[str] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

__all__ = ['Base', 'SessionEntry', 'KEY_ACCESS_TOKEN', 'KEY_USER_ID', 'KEY_ORGANIZATION_ID', 'ALL_SESSION_KEYS']
