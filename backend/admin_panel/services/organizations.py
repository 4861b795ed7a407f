from __future__ import annotations
from typing import Dict, List, Optional

from admin_panel.config.pagination import ORGANIZATIONS_PAGE_SIZE
from admin_panel.models.organization import Organization, PGLocation
from admin_panel.services.api_client import ApiClient, unwrap


class OrganizationService:
    def __init__(self, api: ApiClient):
        self.api = api

    def list_organizations(self, limit: int = ORGANIZATIONS_PAGE_SIZE) -> List[Organization]:
        payload = self.api.get('/organizations', params={'limit': limit})
        return [Organization.from_api(o) for o in unwrap(payload) or []]


def index_by_id(organizations: List[Organization]) -> Dict[int, Organization]:
    return {o.id: o for o in organizations}


def resolve_location(organizations: List[Organization], org_id: Optional[int], pg_id: Optional[int]) -> Optional[PGLocation]:
    """PG location of a ticket, or None when either id is missing or unknown."""
    if not org_id or not pg_id:
        return None
    org = index_by_id(organizations).get(org_id)
    return org.find_location(pg_id) if org else None

__all__ = ['OrganizationService', 'index_by_id', 'resolve_location']
