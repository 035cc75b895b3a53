"""
Admin Dashboard Module
======================

Tabbed back-office page. Each tab reads only the tables it shows; all
mutations go through the module JSON APIs and the page reloads its data
afterwards.
"""

from flask import Blueprint

dashboard_bp = Blueprint(
    'dashboard',
    __name__,
    url_prefix='/admin',
    template_folder='templates',
    cli_group=None
)

from . import routes, commands

__all__ = ['dashboard_bp']
