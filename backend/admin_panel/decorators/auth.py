from functools import wraps
from flask import abort, current_app
from flask_jwt_extended import verify_jwt_in_request, get_jwt, get_jwt_identity
from admin_panel.extensions import get_session_context, get_inflight_guard


def require_admin(fn):
    """Panel JWT must carry the admin role and match the live session context."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        if get_jwt().get('role_name') != current_app.config['ADMIN_ROLE_NAME']:
            abort(403, description='Missing admin role')
        ctx = get_session_context()
        if not ctx.is_authenticated or str(ctx.user_id) != get_jwt_identity():
            abort(401, description='Session expired, please log in again')
        return fn(*args, **kwargs)
    return wrapper


def single_submission(operation: str, entity_arg: str = None):
    """Reject a second submission of the same form while the first is in flight."""
    def outer(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            entity_id = kwargs.get(entity_arg) if entity_arg else None
            with get_inflight_guard().submit(operation, entity_id):
                return fn(*args, **kwargs)
        return wrapper
    return outer
