"""
Admin Auth Module
=================

Single-admin authentication for the back-office:
- Login / logout (session flag)
- Password change
- Route gate decorators for protected views
- ``flask create-admin`` to seed the credential record
"""

from flask import Blueprint

auth_bp = Blueprint(
    'auth',
    __name__,
    url_prefix='/admin',
    template_folder='templates',
    cli_group=None
)

from . import routes, commands
from .gate import AuthGate, admin_required, admin_api_required, resolve_gate, get_auth_gate

__all__ = ['auth_bp', 'AuthGate', 'admin_required', 'admin_api_required', 'resolve_gate', 'get_auth_gate']
