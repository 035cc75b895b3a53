"""
Categories Admin Module
=======================

Portfolio categories: a display name, a unique lowercase key that projects
refer to, and an icon.
"""

from flask import Blueprint

categories_bp = Blueprint(
    'categories',
    __name__,
    url_prefix='/admin'
)

from . import routes
from .manager import category_manager, category_display, slugify_key

__all__ = ['categories_bp', 'category_manager', 'category_display', 'slugify_key']
