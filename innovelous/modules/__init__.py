"""
Innovelous Modules
==================

Flask blueprint modules for the public site and the admin back-office.
"""

__all__ = [
    'auth', 'dashboard', 'projects', 'categories', 'services',
    'downloads', 'orders', 'public', 'public_api',
]
