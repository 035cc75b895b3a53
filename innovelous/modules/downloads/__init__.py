"""
Downloads Admin Module
======================

Downloadable project files: one file per entry, stored in the downloads
bucket with its size and type recorded alongside.
"""

from flask import Blueprint

downloads_bp = Blueprint(
    'downloads',
    __name__,
    url_prefix='/admin'
)

from . import routes
from .manager import download_manager, format_file_size

__all__ = ['downloads_bp', 'download_manager', 'format_file_size']
