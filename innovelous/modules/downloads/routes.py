"""
Downloads Admin Routes
======================
"""

from flask import request, jsonify
from . import downloads_bp
from .manager import download_manager
from ..auth import admin_api_required
from ...core.errors import InnovelousError, error_response
from ...core.remote import get_remote_client
from ...core.resources import ERROR

EDITABLE_FIELDS = ('title', 'description', 'category')


@downloads_bp.route('/api/downloads', methods=['GET'])
@admin_api_required
def get_downloads():
    manager = download_manager(get_remote_client())
    manager.fetch_all()
    if manager.status == ERROR:
        return jsonify({'error': manager.error}), 502
    return jsonify(manager.items)


@downloads_bp.route('/api/downloads', methods=['POST'])
@admin_api_required
def create_download():
    """Multipart form: title, description, category and a ``file``"""
    fields = {k: request.form.get(k) for k in ('title', 'description', 'category')}
    manager = download_manager(get_remote_client())
    try:
        manager.create(fields, [request.files.get('file')])
    except InnovelousError as e:
        return error_response(e)
    return jsonify({'success': True, 'message': 'Download added successfully', 'downloads': manager.items}), 201


@downloads_bp.route('/api/downloads/<record_id>', methods=['PUT'])
@admin_api_required
def update_download(record_id):
    """Edit title, description and category"""
    data = request.get_json(silent=True) or request.form.to_dict()
    manager = download_manager(get_remote_client())
    try:
        manager.update(record_id, {k: v for k, v in data.items() if k in EDITABLE_FIELDS})
    except InnovelousError as e:
        return error_response(e)
    return jsonify({'success': True, 'message': 'Download updated successfully', 'downloads': manager.items})


@downloads_bp.route('/api/downloads/<record_id>', methods=['DELETE'])
@admin_api_required
def delete_download(record_id):
    manager = download_manager(get_remote_client())
    confirmed = request.args.get('confirm', '').lower() == 'true'
    try:
        manager.delete(record_id, confirmed=confirmed)
    except InnovelousError as e:
        return error_response(e)
    return jsonify({'success': True})
