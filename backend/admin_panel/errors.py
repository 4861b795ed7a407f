from __future__ import annotations
"""Error taxonomy shared by services and routes.

Every error carries the HTTP status the panel answers with; the app factory
renders them in the same ``{"error": {...}}`` shape as werkzeug exceptions.
"""
from typing import Any, Dict, Optional


class PanelError(Exception):
    status_code = 500
    title = 'Panel Error'

    def __init__(self, message: str = '', status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_payload(self) -> Dict[str, Any]:
        return {
            'error': {
                'status': self.status_code,
                'title': self.title,
                'detail': self.message,
            }
        }


class ValidationError(PanelError):
    """Local, field-scoped failure. Never reaches the remote API.

    ``errors`` maps field -> message for single forms, or row index ->
    {field: message} for bulk forms.
    """
    status_code = 400
    title = 'Validation Failed'

    def __init__(self, errors: Dict[Any, Any], message: str = 'validation failed'):
        super().__init__(message)
        self.errors = errors

    def to_payload(self):
        payload = super().to_payload()
        payload['error']['fields'] = {str(k): v for k, v in self.errors.items()}
        return payload


class NoValidRowsError(ValidationError):
    title = 'No Valid Rows'

    def __init__(self, errors: Optional[Dict[Any, Any]] = None, message: str = 'Please add at least one permission'):
        errors = dict(errors or {})
        errors['general'] = {'message': message}
        super().__init__(errors, message)


class BatchValidationError(PanelError):
    """Registry rejected a bulk batch as a whole."""
    status_code = 400
    title = 'Batch Rejected'


class AuthenticationError(PanelError):
    status_code = 401
    title = 'Authentication Failed'


class AuthorizationError(PanelError):
    status_code = 403
    title = 'Access Denied'


class InvalidTransitionError(PanelError):
    status_code = 409
    title = 'Invalid Transition'


class DuplicateSubmissionError(PanelError):
    status_code = 409
    title = 'Submission In Progress'


class ApiError(PanelError):
    """Remote API answered non-2xx with a structured ``message``."""
    title = 'Upstream Error'

    def __init__(self, message: str, status_code: int, payload: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code)
        self.payload = payload or {}


class NetworkError(PanelError):
    """Remote API unreachable, or non-2xx without a usable message. Retryable."""
    status_code = 502
    title = 'Bad Gateway'


__all__ = [
    'PanelError', 'ValidationError', 'NoValidRowsError', 'BatchValidationError',
    'AuthenticationError', 'AuthorizationError', 'InvalidTransitionError',
    'DuplicateSubmissionError', 'ApiError', 'NetworkError',
]
