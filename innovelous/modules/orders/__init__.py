"""
Orders Admin Module
===================

Client orders submitted through the public form. The admin reviews them,
moves them through pending / in-progress / completed and deletes them.
"""

from flask import Blueprint

orders_bp = Blueprint(
    'orders',
    __name__,
    url_prefix='/admin'
)

from . import routes
from .manager import order_manager, ORDER_STATUSES, can_mark, set_order_status

__all__ = ['orders_bp', 'order_manager', 'ORDER_STATUSES', 'can_mark', 'set_order_status']
