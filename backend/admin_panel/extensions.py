from __future__ import annotations
"""Accessors for the per-app collaborators registered by ``create_app``.

Everything lives under ``app.extensions['admin_panel']`` so tests can build
several apps side by side.
"""
from flask import current_app

EXTENSION_KEY = 'admin_panel'


def _ext():
    return current_app.extensions[EXTENSION_KEY]


def get_session_context():
    return _ext()['session']


def get_login_flow():
    return _ext()['login_flow']


def get_inflight_guard():
    return _ext()['inflight']


def get_permission_registry():
    return _ext()['permissions']


def get_role_service():
    return _ext()['roles']


def get_ticket_service():
    return _ext()['tickets']


def get_organization_service():
    return _ext()['organizations']
