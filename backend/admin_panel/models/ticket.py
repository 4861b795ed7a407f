from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass
class Ticket:
    STATUS_OPEN = 'OPEN'
    STATUS_IN_PROGRESS = 'IN_PROGRESS'
    STATUS_RESOLVED = 'RESOLVED'
    STATUS_CLOSED = 'CLOSED'
    ALL_STATUSES = (STATUS_OPEN, STATUS_IN_PROGRESS, STATUS_RESOLVED, STATUS_CLOSED)

    PRIORITY_LOW = 'LOW'
    PRIORITY_MEDIUM = 'MEDIUM'
    PRIORITY_HIGH = 'HIGH'
    PRIORITY_CRITICAL = 'CRITICAL'
    ALL_PRIORITIES = (PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_HIGH, PRIORITY_CRITICAL)

    id: int
    title: str
    status: str
    priority: Optional[str] = None
    description: Optional[str] = None
    organization_id: Optional[int] = None
    pg_id: Optional[int] = None
    reported_by: Optional[str] = None
    comments: List[Dict[str, Any]] = field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Ticket':
        reporter = data.get('users_issue_tickets_reported_byTousers') or {}
        return cls(
            id=data.get('s_no'),
            title=data.get('title') or '',
            status=data.get('status') or cls.STATUS_OPEN,
            priority=data.get('priority'),
            description=data.get('description'),
            organization_id=data.get('organization_id'),
            pg_id=data.get('pg_id'),
            reported_by=reporter.get('name'),
            comments=list(data.get('comments') or data.get('issue_ticket_comments') or []),
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at'),
        )

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)

__all__ = ['Ticket']
