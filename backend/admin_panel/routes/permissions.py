from flask import Blueprint, request, abort
from admin_panel.config.pagination import normalize_pagination, PERMISSIONS_PAGE_SIZE
from admin_panel.decorators.auth import require_admin, single_submission
from admin_panel.extensions import get_permission_registry
from admin_panel.services.permission_registry import group_by_screen, preview_key, new_bulk_rows

perms_bp = Blueprint('permissions', __name__)


@perms_bp.get('')
@require_admin
def list_permissions():
    try:
        page, limit = normalize_pagination(request.args.get('page'), request.args.get('limit'), PERMISSIONS_PAGE_SIZE)
    except ValueError as e:
        abort(400, description=str(e))
    items, pagination = get_permission_registry().list_permissions(page, limit, request.args.get('search'))
    payload = {'data': [p.to_json() for p in items], 'pagination': pagination}
    if request.args.get('group') == 'screen':
        payload['groups'] = {
            screen: [p.to_json() for p in perms]
            for screen, perms in group_by_screen(items).items()
        }
    return payload


@perms_bp.get('/simple')
@require_admin
def list_simple():
    return {'data': [e.to_json() for e in get_permission_registry().list_simple()]}


@perms_bp.post('/preview-key')
@require_admin
def preview_permission_key():
    data = request.json or {}
    return {'key': preview_key(data.get('screen_name'), data.get('action'))}


@perms_bp.get('/bulk/template')
@require_admin
def bulk_template():
    return {'data': new_bulk_rows()}


@perms_bp.post('')
@require_admin
@single_submission('permission.create')
def create_permission():
    created = get_permission_registry().create_permission(request.json or {})
    return created.to_json(), 201


@perms_bp.post('/bulk')
@require_admin
@single_submission('permission.bulk_create')
def bulk_create_permissions():
    rows = request.json
    if isinstance(rows, dict):
        rows = rows.get('permissions')
    if rows is not None and not isinstance(rows, list):
        abort(400, description='permissions must be a list')
    created = get_permission_registry().bulk_create(rows or [])
    return {'data': [p.to_json() for p in created], 'count': len(created)}, 201


@perms_bp.patch('/<int:permission_id>')
@require_admin
@single_submission('permission.update', 'permission_id')
def update_permission(permission_id: int):
    updated = get_permission_registry().update_permission(permission_id, request.json or {})
    return updated.to_json()


@perms_bp.delete('/<int:permission_id>')
@require_admin
def delete_permission(permission_id: int):
    get_permission_registry().delete_permission(permission_id)
    return {'status': 'deleted'}
