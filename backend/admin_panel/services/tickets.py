from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from admin_panel.config.pagination import TICKETS_PAGE_SIZE
from admin_panel.errors import ValidationError
from admin_panel.models.ticket import Ticket
from admin_panel.services.api_client import ApiClient, unwrap
from admin_panel.utils.validation import require_text, validate_status

logger = logging.getLogger(__name__)


class TicketService:
    def __init__(self, api: ApiClient):
        self.api = api

    def list_tickets(self, page: int = 1, limit: int = TICKETS_PAGE_SIZE, search: Optional[str] = None, status: Optional[str] = None):
        if status:
            validate_status(status, Ticket.ALL_STATUSES)
        payload = self.api.get('/tickets', params={'page': page, 'limit': limit, 'search': search, 'status': status})
        tickets: List[Ticket] = [Ticket.from_api(t) for t in unwrap(payload) or []]
        return tickets, payload.get('pagination') or {}

    def get_ticket(self, ticket_id: int) -> Ticket:
        return Ticket.from_api(unwrap(self.api.get(f'/tickets/{ticket_id}')) or {})

    def stats(self) -> Dict[str, Any]:
        data = unwrap(self.api.get('/tickets/stats')) or {}
        by_status = data.get('byStatus') or {}
        return {
            'total': data.get('total') or 0,
            'open': by_status.get('open') or 0,
            'in_progress': by_status.get('inProgress') or 0,
            'resolved': by_status.get('resolved') or 0,
        }

    def update_status(self, ticket_id: int, status: str, current_status: Optional[str] = None) -> Dict[str, Any]:
        validate_status(status, Ticket.ALL_STATUSES)
        if current_status is None:
            current_status = self.get_ticket(ticket_id).status
        if status == current_status:
            raise ValidationError({'status': 'status unchanged'})
        self.api.patch(f'/tickets/{ticket_id}', json={'status': status})
        logger.info('ticket %s status %s -> %s', ticket_id, current_status, status)
        return {'id': ticket_id, 'status': status}

    def add_comment(self, ticket_id: int, comment: str) -> Dict[str, Any]:
        comment = require_text(comment, 'comment', 'Comment is required')
        payload = self.api.post(f'/tickets/{ticket_id}/comments', json={'comment': comment})
        return unwrap(payload) or {'comment': comment}

__all__ = ['TicketService']
