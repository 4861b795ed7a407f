from __future__ import annotations
"""Role-permission assignment.

A role's ``permissions`` is a boolean projection over permission keys. Edits
are pure merges: setting one key never clears or alters another, and keys the
current registry snapshot does not know about are carried through untouched.
Keys are deliberately not checked against the registry.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from admin_panel.config.pagination import ROLES_PAGE_SIZE
from admin_panel.errors import ValidationError
from admin_panel.models.permission import PermissionKeyEntry
from admin_panel.models.role import Role
from admin_panel.services.api_client import ApiClient, unwrap
from admin_panel.utils.validation import is_blank

logger = logging.getLogger(__name__)


def merge_permission(mapping: Optional[Mapping[str, bool]], key: str, granted: bool) -> Dict[str, bool]:
    """Return a copy of ``mapping`` with ``key`` set to ``granted``."""
    if is_blank(key):
        raise ValidationError({'permission_key': 'Permission key is required'})
    merged = dict(mapping or {})
    merged[key] = bool(granted)
    return merged


def _permissions_from_payload(raw: Any) -> Dict[str, bool]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ValidationError({'permissions': 'permissions must be an object of key -> boolean'})
    bad = [str(k) for k, v in raw.items() if not isinstance(v, bool)]
    if bad:
        raise ValidationError({'permissions': f"non-boolean value for: {', '.join(bad)}"})
    return {str(k): v for k, v in raw.items()}


@dataclass
class RoleForm:
    role_name: str = ''
    status: str = Role.STATUS_ACTIVE
    permissions: Dict[str, bool] = field(default_factory=dict)

    @classmethod
    def from_role(cls, role: Role) -> 'RoleForm':
        return cls(role_name=role.role_name, status=role.status, permissions=dict(role.permissions))

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> 'RoleForm':
        return cls(
            role_name=data.get('role_name') or '',
            status=data.get('status') or Role.STATUS_ACTIVE,
            permissions=_permissions_from_payload(data.get('permissions')),
        )

    def overlay(self, data: Mapping[str, Any]) -> 'RoleForm':
        """Apply only the fields present in ``data``; absent fields keep their current value."""
        if 'role_name' in data:
            self.role_name = data.get('role_name') or ''
        if 'status' in data:
            self.status = data.get('status')
        if 'permissions' in data:
            self.permissions = _permissions_from_payload(data.get('permissions'))
        return self

    def toggle(self, key: str, granted: bool) -> 'RoleForm':
        self.permissions = merge_permission(self.permissions, key, granted)
        return self

    def validate(self) -> Dict[str, Any]:
        errors = {}
        if is_blank(self.role_name):
            errors['role_name'] = 'Role name is required'
        if self.status not in Role.ALL_STATUSES:
            errors['status'] = 'status invalid'
        if errors:
            raise ValidationError(errors)
        return {
            'role_name': str(self.role_name).strip(),
            'status': self.status,
            'permissions': dict(self.permissions),
        }

    def assignment_view(self, snapshot: Iterable[PermissionKeyEntry]) -> Dict[str, Any]:
        """Registry keys with their current flag, plus preserved keys outside the snapshot."""
        known = []
        seen = set()
        for entry in snapshot:
            seen.add(entry.permission_key)
            known.append({
                'permission_key': entry.permission_key,
                'description': entry.description,
                'granted': bool(self.permissions.get(entry.permission_key, False)),
            })
        extra = {k: v for k, v in self.permissions.items() if k not in seen}
        return {'permissions': known, 'extra_keys': extra}


class RoleService:
    def __init__(self, api: ApiClient):
        self.api = api

    def list_roles(self, page: int = 1, limit: int = ROLES_PAGE_SIZE, search: Optional[str] = None, status: Optional[str] = None):
        if status and status != 'ALL' and status not in Role.ALL_STATUSES:
            raise ValidationError({'status': 'status invalid'})
        params = {'page': page, 'limit': limit, 'search': search, 'status': status if status != 'ALL' else None}
        payload = self.api.get('/roles', params=params)
        roles: List[Role] = [Role.from_api(r) for r in unwrap(payload) or []]
        return roles, payload.get('pagination') or {}

    def get_role(self, role_id: int) -> Role:
        return Role.from_api(unwrap(self.api.get(f'/roles/{role_id}')) or {})

    def create_role(self, form: RoleForm) -> Role:
        body = form.validate()
        created = unwrap(self.api.post('/roles', json=body))
        logger.info('role created: %s', body['role_name'])
        return Role.from_api(created or {})

    def update_role(self, role_id: int, form: RoleForm) -> Role:
        body = form.validate()
        updated = unwrap(self.api.patch(f'/roles/{role_id}', json=body))
        logger.info('role %s updated', role_id)
        return Role.from_api(updated or {})

    def patch_role(self, role_id: int, data: Mapping[str, Any]) -> Role:
        """Partial edit: the current role seeds the form, ``data`` overrides what it names."""
        form = RoleForm.from_role(self.get_role(role_id)).overlay(data)
        return self.update_role(role_id, form)

    def delete_role(self, role_id: int):
        self.api.delete(f'/roles/{role_id}')
        logger.info('role %s deleted', role_id)

    def set_role_permission(self, role_id: int, key: str, granted: bool) -> Role:
        """Fetch the role, merge one flag, and write the whole mapping back."""
        form = RoleForm.from_role(self.get_role(role_id)).toggle(key, granted)
        return self.update_role(role_id, form)

__all__ = ['merge_permission', 'RoleForm', 'RoleService']
