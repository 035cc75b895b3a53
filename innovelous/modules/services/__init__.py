"""
Services Admin Module
=====================

The agency's service offerings shown on the home page.
"""

from flask import Blueprint

services_bp = Blueprint(
    'services',
    __name__,
    url_prefix='/admin'
)

from . import routes
from .manager import service_manager

__all__ = ['services_bp', 'service_manager']
