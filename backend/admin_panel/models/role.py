from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional


@dataclass
class Role:
    STATUS_ACTIVE = 'ACTIVE'
    STATUS_INACTIVE = 'INACTIVE'
    ALL_STATUSES = (STATUS_ACTIVE, STATUS_INACTIVE)

    id: int
    role_name: str
    status: str = STATUS_ACTIVE
    permissions: Dict[str, bool] = field(default_factory=dict)
    users_count: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def grants(self, key: str) -> bool:
        # absent keys read as ungranted
        return bool(self.permissions.get(key, False))

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Role':
        return cls(
            id=data.get('s_no'),
            role_name=data.get('role_name') or '',
            status=data.get('status') or cls.STATUS_ACTIVE,
            permissions={k: v is True for k, v in (data.get('permissions') or {}).items()},
            users_count=data.get('users_count'),
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at'),
        )

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)

__all__ = ['Role']
