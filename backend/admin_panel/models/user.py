from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class AdminUser:
    """Identity returned by ``/auth/verify-otp``."""
    s_no: int
    name: str = ''
    email: Optional[str] = None
    phone: Optional[str] = None
    role_name: Optional[str] = None
    organization_id: Optional[int] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'AdminUser':
        return cls(
            s_no=data.get('s_no'),
            name=data.get('name') or '',
            email=data.get('email'),
            phone=data.get('phone'),
            role_name=data.get('role_name'),
            organization_id=data.get('organization_id'),
        )

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)

__all__ = ['AdminUser']
