"""
Public Read API Module
======================

Read-only JSON for the public catalog, CORS-enabled so a separate frontend
can fetch it.

Provides:
- /api/public/projects
- /api/public/categories
- /api/public/services
- /api/public/downloads
"""

from flask import Blueprint

public_api_bp = Blueprint(
    'public_api',
    __name__,
    url_prefix='/api/public'
)

from . import routes

__all__ = ['public_api_bp']
