from flask import Blueprint, request, abort
from admin_panel.config.pagination import normalize_pagination, TICKETS_PAGE_SIZE
from admin_panel.decorators.auth import require_admin, single_submission
from admin_panel.extensions import get_ticket_service, get_organization_service
from admin_panel.services.organizations import index_by_id, resolve_location

tickets_bp = Blueprint('tickets', __name__)


@tickets_bp.get('')
@require_admin
def list_tickets():
    try:
        page, limit = normalize_pagination(request.args.get('page'), request.args.get('limit'), TICKETS_PAGE_SIZE)
    except ValueError as e:
        abort(400, description=str(e))
    tickets, pagination = get_ticket_service().list_tickets(page, limit, request.args.get('search'), request.args.get('status'))
    rows = [t.to_json() for t in tickets]
    if request.args.get('expand') == 'organization':
        orgs = get_organization_service().list_organizations()
        by_id = index_by_id(orgs)
        for row, t in zip(rows, tickets):
            org = by_id.get(t.organization_id)
            location = resolve_location(orgs, t.organization_id, t.pg_id)
            row['organization_name'] = org.name if org else None
            row['pg_location'] = location.location_name if location else None
    return {'data': rows, 'pagination': pagination}


@tickets_bp.get('/stats')
@require_admin
def ticket_stats():
    return {'data': get_ticket_service().stats()}


@tickets_bp.get('/<int:ticket_id>')
@require_admin
def get_ticket(ticket_id: int):
    return get_ticket_service().get_ticket(ticket_id).to_json()


@tickets_bp.patch('/<int:ticket_id>')
@require_admin
@single_submission('ticket.update', 'ticket_id')
def update_ticket_status(ticket_id: int):
    data = request.json or {}
    return get_ticket_service().update_status(ticket_id, data.get('status'), data.get('current_status'))


@tickets_bp.post('/<int:ticket_id>/comments')
@require_admin
@single_submission('ticket.comment', 'ticket_id')
def add_comment(ticket_id: int):
    data = request.json or {}
    return {'data': get_ticket_service().add_comment(ticket_id, data.get('comment'))}, 201
