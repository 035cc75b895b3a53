"""
Services Admin Routes
=====================
"""

from flask import request, jsonify
from . import services_bp
from .manager import service_manager
from ..auth import admin_api_required
from ...core.errors import InnovelousError, error_response
from ...core.remote import get_remote_client
from ...core.resources import ERROR

EDITABLE_FIELDS = ('icon', 'title', 'description', 'long_description')


def _payload():
    data = request.get_json(silent=True) or request.form.to_dict()
    return {k: v for k, v in data.items() if k in EDITABLE_FIELDS}


@services_bp.route('/api/services', methods=['GET'])
@admin_api_required
def get_services():
    manager = service_manager(get_remote_client())
    manager.fetch_all()
    if manager.status == ERROR:
        return jsonify({'error': manager.error}), 502
    return jsonify(manager.items)


@services_bp.route('/api/services', methods=['POST'])
@admin_api_required
def create_service():
    manager = service_manager(get_remote_client())
    try:
        manager.create(_payload())
    except InnovelousError as e:
        return error_response(e)
    return jsonify({'success': True, 'message': 'Service added successfully', 'services': manager.items}), 201


@services_bp.route('/api/services/<record_id>', methods=['PUT'])
@admin_api_required
def update_service(record_id):
    manager = service_manager(get_remote_client())
    try:
        manager.update(record_id, _payload())
    except InnovelousError as e:
        return error_response(e)
    return jsonify({'success': True, 'message': 'Service updated successfully', 'services': manager.items})


@services_bp.route('/api/services/<record_id>', methods=['DELETE'])
@admin_api_required
def delete_service(record_id):
    manager = service_manager(get_remote_client())
    confirmed = request.args.get('confirm', '').lower() == 'true'
    try:
        manager.delete(record_id, confirmed=confirmed)
    except InnovelousError as e:
        return error_response(e)
    return jsonify({'success': True})
