"""
Public Site Module
==================

Visitor-facing pages: home, portfolio, downloads and the order form.
Also holds the shared page layout used by every other module's templates.
"""

from flask import Blueprint

public_bp = Blueprint(
    'public',
    __name__,
    template_folder='templates'
)

from . import routes

__all__ = ['public_bp']
