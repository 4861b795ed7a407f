from __future__ import annotations
"""Permission registry: validation, key derivation and remote CRUD.

Validation runs locally and never contacts the registry. Uniqueness of the
``(screen_name, action)`` pair is enforced by the remote registry only.
"""
import logging
import re
from typing import Any, Dict, Iterable, List, Optional

from admin_panel.config.pagination import PERMISSIONS_PAGE_SIZE
from admin_panel.errors import ApiError, BatchValidationError, NoValidRowsError, ValidationError
from admin_panel.models.permission import (
    ACTION_CREATE, ALL_ACTIONS, Permission, PermissionKeyEntry, derive_permission_key,
)
from admin_panel.services.api_client import ApiClient, unwrap
from admin_panel.utils.validation import is_blank

logger = logging.getLogger(__name__)

SCREEN_NAME_RE = re.compile(r'[A-Za-z][A-Za-z0-9_]*')

MSG_SCREEN_REQUIRED = 'Screen name is required'
MSG_SCREEN_PATTERN = 'Screen name must start with a letter and contain only letters, numbers, and underscores'
MSG_ACTION_REQUIRED = 'Action is required'
MSG_ACTION_INVALID = 'Action must be one of CREATE, EDIT, VIEW, DELETE'
MSG_DESCRIPTION_REQUIRED = 'Description is required'

IMMUTABLE_FIELDS = ('screen_name', 'action')


def permission_errors(row: Dict[str, Any]) -> Dict[str, str]:
    """Return field -> message for one candidate row (empty when valid)."""
    errors: Dict[str, str] = {}
    screen_name = row.get('screen_name')
    if is_blank(screen_name):
        errors['screen_name'] = MSG_SCREEN_REQUIRED
    elif not isinstance(screen_name, str) or not SCREEN_NAME_RE.fullmatch(screen_name):
        errors['screen_name'] = MSG_SCREEN_PATTERN

    action = row.get('action')
    if is_blank(action):
        errors['action'] = MSG_ACTION_REQUIRED
    elif action not in ALL_ACTIONS:
        errors['action'] = MSG_ACTION_INVALID

    if is_blank(row.get('description')):
        errors['description'] = MSG_DESCRIPTION_REQUIRED
    return errors


def validate_permission(row: Dict[str, Any]) -> Dict[str, str]:
    errors = permission_errors(row)
    if errors:
        raise ValidationError(errors)
    return {
        'screen_name': row['screen_name'],
        'action': row['action'],
        'description': str(row['description']).strip(),
    }


def bulk_errors(rows: Iterable[Dict[str, Any]]) -> Dict[int, Dict[str, str]]:
    """Validate every row; no fail-fast so all problems surface in one pass."""
    out: Dict[int, Dict[str, str]] = {}
    for index, row in enumerate(rows):
        errors = permission_errors(row)
        if errors:
            out[index] = errors
    return out


def is_blank_row(row: Dict[str, Any]) -> bool:
    # action has a default so it does not count towards "filled in"
    return is_blank(row.get('screen_name')) and is_blank(row.get('description'))


def filter_complete_rows(rows: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        r for r in rows
        if not is_blank(r.get('screen_name')) and not is_blank(r.get('action')) and not is_blank(r.get('description'))
    ]


def new_bulk_rows() -> List[Dict[str, str]]:
    """Initial bulk form: one blank row defaulting to CREATE."""
    return [{'screen_name': '', 'action': ACTION_CREATE, 'description': ''}]


def prepare_bulk(rows: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Validate and filter a bulk batch without touching the network."""
    rows = list(rows or [])
    errors = bulk_errors(rows)
    if not rows or all(is_blank_row(r) for r in rows):
        raise NoValidRowsError(errors)
    if errors:
        raise ValidationError(errors, message=f'{len(errors)} invalid row(s)')
    complete = filter_complete_rows(rows)
    if not complete:
        raise NoValidRowsError()
    return [validate_permission(r) for r in complete]


def group_by_screen(permissions: Iterable[Permission]) -> Dict[str, List[Permission]]:
    groups: Dict[str, List[Permission]] = {}
    for p in permissions:
        groups.setdefault(p.screen_name, []).append(p)
    return groups


def preview_key(screen_name: Optional[str], action: Optional[str]) -> Optional[str]:
    if is_blank(screen_name) or is_blank(action):
        return None
    return derive_permission_key(screen_name, action)


class PermissionRegistry:
    def __init__(self, api: ApiClient):
        self.api = api

    def list_permissions(self, page: int = 1, limit: int = PERMISSIONS_PAGE_SIZE, search: Optional[str] = None):
        payload = self.api.get('/permissions', params={'page': page, 'limit': limit, 'search': search})
        items = [Permission.from_api(p) for p in unwrap(payload) or []]
        return items, payload.get('pagination') or {}

    def list_simple(self) -> List[PermissionKeyEntry]:
        payload = self.api.get('/permissions/simple')
        return [PermissionKeyEntry.from_api(p) for p in unwrap(payload) or []]

    def create_permission(self, data: Dict[str, Any]) -> Permission:
        body = validate_permission(data)
        created = unwrap(self.api.post('/permissions', json=body))
        logger.info('permission created: %s', derive_permission_key(body['screen_name'], body['action']))
        return Permission.from_api(created or {})

    def update_permission(self, permission_id: int, data: Dict[str, Any]) -> Permission:
        present = [f for f in IMMUTABLE_FIELDS if f in data]
        if present:
            raise ValidationError({f: f'{f} cannot be changed after creation' for f in present})
        if is_blank(data.get('description')):
            raise ValidationError({'description': MSG_DESCRIPTION_REQUIRED})
        updated = unwrap(self.api.patch(f'/permissions/{permission_id}', json={'description': str(data['description']).strip()}))
        logger.info('permission %s description updated', permission_id)
        return Permission.from_api(updated or {})

    def delete_permission(self, permission_id: int):
        # roles referencing the key keep it; it simply becomes inert
        self.api.delete(f'/permissions/{permission_id}')
        logger.info('permission %s deleted', permission_id)

    def bulk_create(self, rows: List[Dict[str, Any]]) -> List[Permission]:
        batch = prepare_bulk(rows)
        try:
            payload = self.api.post('/permissions/bulk', json=batch)
        except ApiError as e:
            raise BatchValidationError(e.message, e.status_code if e.status_code < 500 else 400) from e
        logger.info('bulk created %d permission(s)', len(batch))
        created = unwrap(payload)
        if isinstance(created, dict):
            created = created.get('created') or created.get('permissions') or []
        return [Permission.from_api(p) for p in created or []]

__all__ = [
    'SCREEN_NAME_RE', 'permission_errors', 'validate_permission', 'bulk_errors', 'is_blank_row',
    'filter_complete_rows', 'new_bulk_rows', 'prepare_bulk', 'group_by_screen', 'preview_key',
    'PermissionRegistry',
]
