"""
Orders Admin Routes
===================
"""

from flask import request, jsonify
from . import orders_bp
from .manager import order_manager, set_order_status
from ..auth import admin_api_required
from ...core.errors import InnovelousError, error_response
from ...core.remote import get_remote_client
from ...core.resources import ERROR


@orders_bp.route('/api/orders', methods=['GET'])
@admin_api_required
def get_orders():
    """All orders, most recently submitted first"""
    manager = order_manager(get_remote_client())
    manager.fetch_all()
    if manager.status == ERROR:
        return jsonify({'error': manager.error}), 502
    return jsonify(manager.items)


@orders_bp.route('/api/orders/<record_id>/status', methods=['PUT'])
@admin_api_required
def update_order_status(record_id):
    data = request.get_json(silent=True) or request.form.to_dict()
    manager = order_manager(get_remote_client())
    try:
        status = set_order_status(manager, record_id, data.get('status'))
    except InnovelousError as e:
        return error_response(e)
    return jsonify({'success': True, 'status': status, 'message': f'Order marked as {status}'})


@orders_bp.route('/api/orders/<record_id>', methods=['DELETE'])
@admin_api_required
def delete_order(record_id):
    """Delete the order record; attached files stay in storage"""
    manager = order_manager(get_remote_client())
    confirmed = request.args.get('confirm', '').lower() == 'true'
    try:
        manager.delete(record_id, confirmed=confirmed)
    except InnovelousError as e:
        return error_response(e)
    return jsonify({'success': True})
