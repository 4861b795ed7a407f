from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass
class OrganizationAdmin:
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[str] = None


@dataclass
class PGLocation:
    id: int
    location_name: str
    address: Optional[str] = None
    status: Optional[str] = None


@dataclass
class Organization:
    id: int
    name: str
    status: Optional[str] = None
    created_at: Optional[str] = None
    pg_locations: List[PGLocation] = field(default_factory=list)
    admins: List[OrganizationAdmin] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Organization':
        return cls(
            id=data.get('s_no'),
            name=data.get('name') or '',
            status=data.get('status'),
            created_at=data.get('created_at'),
            pg_locations=[
                PGLocation(id=p.get('s_no'), location_name=p.get('location_name') or '', address=p.get('address'), status=p.get('status'))
                for p in data.get('pg_locations') or []
            ],
            admins=[
                OrganizationAdmin(id=a.get('s_no'), name=a.get('name') or '', email=a.get('email'), phone=a.get('phone'), status=a.get('status'))
                for a in data.get('admins') or data.get('users') or []
            ],
        )

    def find_location(self, pg_id: Optional[int]) -> Optional[PGLocation]:
        if pg_id is None:
            return None
        return next((p for p in self.pg_locations if p.id == pg_id), None)

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)

__all__ = ['Organization', 'PGLocation', 'OrganizationAdmin']
