from flask import Blueprint, request, abort
from admin_panel.config.pagination import normalize_pagination, ROLES_PAGE_SIZE
from admin_panel.decorators.auth import require_admin, single_submission
from admin_panel.extensions import get_role_service, get_permission_registry
from admin_panel.services.role_assignment import RoleForm

roles_bp = Blueprint('roles', __name__)


@roles_bp.get('')
@require_admin
def list_roles():
    try:
        page, limit = normalize_pagination(request.args.get('page'), request.args.get('limit'), ROLES_PAGE_SIZE)
    except ValueError as e:
        abort(400, description=str(e))
    roles, pagination = get_role_service().list_roles(page, limit, request.args.get('search'), request.args.get('status'))
    return {'data': [r.to_json() for r in roles], 'pagination': pagination}


@roles_bp.get('/<int:role_id>')
@require_admin
def get_role(role_id: int):
    return get_role_service().get_role(role_id).to_json()


@roles_bp.get('/<int:role_id>/assignment')
@require_admin
def role_assignment(role_id: int):
    role = get_role_service().get_role(role_id)
    snapshot = get_permission_registry().list_simple()
    view = RoleForm.from_role(role).assignment_view(snapshot)
    view.update({'id': role.id, 'role_name': role.role_name, 'status': role.status})
    return view


@roles_bp.post('')
@require_admin
@single_submission('role.create')
def create_role():
    form = RoleForm.from_payload(request.json or {})
    return get_role_service().create_role(form).to_json(), 201


@roles_bp.patch('/<int:role_id>')
@require_admin
@single_submission('role.update', 'role_id')
def update_role(role_id: int):
    return get_role_service().patch_role(role_id, request.json or {}).to_json()


@roles_bp.put('/<int:role_id>/permissions/<permission_key>')
@require_admin
@single_submission('role.update', 'role_id')
def set_role_permission(role_id: int, permission_key: str):
    data = request.json or {}
    granted = data.get('granted')
    if not isinstance(granted, bool):
        abort(400, description='granted must be boolean')
    return get_role_service().set_role_permission(role_id, permission_key, granted).to_json()


@roles_bp.delete('/<int:role_id>')
@require_admin
def delete_role(role_id: int):
    get_role_service().delete_role(role_id)
    return {'status': 'deleted'}
