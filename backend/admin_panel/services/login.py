from __future__ import annotations
"""Phone / one-time-passcode login flow.

    AWAITING_PHONE --submit_phone--> AWAITING_CODE
    AWAITING_CODE  --submit_code--->  AUTHENTICATED   (verified AND admin role)
    AWAITING_CODE  --change_number-> AWAITING_PHONE
    AUTHENTICATED  --logout-------->  AWAITING_PHONE

A verified passcode whose identity lacks the admin role is an authorization
failure, not an authentication one: nothing is persisted and the flow stays
on AWAITING_CODE.
"""
import logging
import threading
from typing import Any, Dict, Optional, Tuple

from admin_panel.errors import ApiError, AuthenticationError, AuthorizationError, NetworkError
from admin_panel.models.user import AdminUser
from admin_panel.services.api_client import ApiClient
from admin_panel.services.session import SessionContext
from admin_panel.utils.fsm import TransitionValidator
from admin_panel.utils.validation import require_text

logger = logging.getLogger(__name__)

AWAITING_PHONE = 'AWAITING_PHONE'
AWAITING_CODE = 'AWAITING_CODE'
AUTHENTICATED = 'AUTHENTICATED'

DEFAULT_ADMIN_ROLE = 'SUPER_ADMIN'
ACCESS_DENIED_MESSAGE = 'Access denied. Super Admin privileges required.'

LOGIN_FSM = TransitionValidator({
    AWAITING_PHONE: {AWAITING_CODE},
    AWAITING_CODE: {AWAITING_PHONE, AUTHENTICATED},
    AUTHENTICATED: {AWAITING_PHONE},
}, field_name='login state')


class LoginFlow:
    def __init__(self, api: ApiClient, session: SessionContext, admin_role: str = DEFAULT_ADMIN_ROLE):
        self.api = api
        self.session = session
        self.admin_role = admin_role
        self._lock = threading.Lock()
        self.state = AUTHENTICATED if session.is_authenticated else AWAITING_PHONE
        self.phone: Optional[str] = None
        self.code: Optional[str] = None
        self.error: Optional[str] = None

    def snapshot(self) -> Dict[str, Any]:
        return {
            'state': self.state,
            'phone': self.phone,
            'error': self.error,
            'authenticated': self.state == AUTHENTICATED,
        }

    def _move(self, target: str):
        LOGIN_FSM.assert_can_transition(self.state, target)
        logger.info('login %s -> %s', self.state, target)
        self.state = target

    def submit_phone(self, phone: str):
        with self._lock:
            LOGIN_FSM.assert_can_transition(self.state, AWAITING_CODE)
            phone = require_text(phone, 'phone', 'Phone number is required')
            self.error = None
            try:
                self.api.post('/auth/send-otp', json={'phone': phone})
            except ApiError as e:
                self.error = e.message
                raise
            except NetworkError:
                self.error = 'Failed to send OTP'
                raise
            self.phone = phone
            self._move(AWAITING_CODE)

    def submit_code(self, code: str) -> Tuple[AdminUser, str]:
        with self._lock:
            LOGIN_FSM.assert_can_transition(self.state, AUTHENTICATED)
            code = require_text(code, 'otp', 'OTP is required')
            self.code = code
            self.error = None
            try:
                payload = self.api.post('/auth/verify-otp', json={'phone': self.phone, 'otp': code})
            except ApiError as e:
                self.error = e.message
                raise AuthenticationError(e.message) from e
            except NetworkError:
                self.error = 'Failed to verify OTP'
                raise

            user_data = payload.get('user') or {}
            token = payload.get('access_token')
            if not user_data or not token:
                self.error = 'Failed to verify OTP'
                raise AuthenticationError(self.error)
            user = AdminUser.from_api(user_data)
            if user.role_name != self.admin_role:
                self.error = ACCESS_DENIED_MESSAGE
                logger.warning('login denied for user %s with role %s', user.s_no, user.role_name)
                raise AuthorizationError(ACCESS_DENIED_MESSAGE)

            self.session.establish(user, token)
            self.code = None
            self._move(AUTHENTICATED)
            return user, token

    def change_number(self):
        with self._lock:
            self._move(AWAITING_PHONE)
            self.code = None
            self.error = None

    def logout(self):
        with self._lock:
            self.session.clear()
            self.state = AWAITING_PHONE
            self.phone = None
            self.code = None
            self.error = None
            logger.info('logged out')

__all__ = ['AWAITING_PHONE', 'AWAITING_CODE', 'AUTHENTICATED', 'DEFAULT_ADMIN_ROLE',
           'ACCESS_DENIED_MESSAGE', 'LOGIN_FSM', 'LoginFlow']
