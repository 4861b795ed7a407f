from flask import Blueprint
from admin_panel.decorators.auth import require_admin
from admin_panel.extensions import get_organization_service

orgs_bp = Blueprint('organizations', __name__)


@orgs_bp.get('')
@require_admin
def list_organizations():
    orgs = get_organization_service().list_organizations()
    return {'data': [o.to_json() for o in orgs]}
