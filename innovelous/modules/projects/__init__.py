"""
Projects Admin Module
=====================

Portfolio management for the admin dashboard.

Provides:
- Project creation with required images
- Editing of text fields, category, technologies and pinned flag
- Adding and removing individual images
- Deletion with best-effort image cleanup
"""

from flask import Blueprint

projects_bp = Blueprint(
    'projects',
    __name__,
    url_prefix='/admin'
)

from . import routes
from .manager import project_manager, parse_technologies

__all__ = ['projects_bp', 'project_manager', 'parse_technologies']
