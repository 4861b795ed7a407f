from flask import Blueprint, request, current_app
from flask_jwt_extended import create_access_token
from admin_panel.extensions import get_login_flow
from admin_panel.decorators.auth import require_admin, single_submission

auth_bp = Blueprint('auth', __name__)


@auth_bp.get('/state')
def login_state():
    return get_login_flow().snapshot()


@auth_bp.post('/send-otp')
@single_submission('auth.send_otp')
def send_otp():
    data = request.json or {}
    flow = get_login_flow()
    flow.submit_phone(data.get('phone'))
    return flow.snapshot()


@auth_bp.post('/verify-otp')
@single_submission('auth.verify_otp')
def verify_otp():
    data = request.json or {}
    flow = get_login_flow()
    user, _upstream_token = flow.submit_code(data.get('otp'))
    # JWT identity must be a string (flask-jwt-extended v4 requirement)
    token = create_access_token(identity=str(user.s_no), additional_claims={'role_name': user.role_name})
    current_app.logger.info('super admin %s logged in', user.s_no)
    body = flow.snapshot()
    body.update({'access_token': token, 'user': user.to_json()})
    return body


@auth_bp.post('/change-number')
def change_number():
    flow = get_login_flow()
    flow.change_number()
    return flow.snapshot()


@auth_bp.post('/logout')
@require_admin
def logout():
    flow = get_login_flow()
    flow.logout()
    return flow.snapshot()
