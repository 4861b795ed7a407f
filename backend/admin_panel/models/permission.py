"""Permission entity as returned by the remote registry.

The composite key (``ticket_create``) is derived on demand and never stored;
``PermissionKeyEntry`` is the flat projection served by ``/permissions/simple``.
"""
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

ACTION_CREATE = 'CREATE'
ACTION_EDIT = 'EDIT'
ACTION_VIEW = 'VIEW'
ACTION_DELETE = 'DELETE'
ALL_ACTIONS = (ACTION_CREATE, ACTION_EDIT, ACTION_VIEW, ACTION_DELETE)


def derive_permission_key(screen_name: str, action: str) -> str:
    """``screen_name + '_' + lower(action)``. Lowercasing happens only here."""
    return f"{screen_name}_{action.lower()}"


@dataclass
class Permission:
    id: int
    screen_name: str
    action: str
    description: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def key(self) -> str:
        return derive_permission_key(self.screen_name, self.action)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Permission':
        return cls(
            id=data.get('s_no'),
            screen_name=data.get('screen_name') or '',
            action=data.get('action') or '',
            description=data.get('description') or '',
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at'),
        )

    def to_json(self) -> Dict[str, Any]:
        body = asdict(self)
        body['key'] = self.key
        return body


@dataclass
class PermissionKeyEntry:
    id: int
    permission_key: str
    description: str = ''

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'PermissionKeyEntry':
        return cls(id=data.get('s_no'), permission_key=data.get('permission_key') or '', description=data.get('description') or '')

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)

__all__ = ['ACTION_CREATE', 'ACTION_EDIT', 'ACTION_VIEW', 'ACTION_DELETE', 'ALL_ACTIONS',
           'derive_permission_key', 'Permission', 'PermissionKeyEntry']
