"""
Categories Admin Routes
=======================
"""

from flask import request, jsonify
from . import categories_bp
from .manager import category_manager
from ..auth import admin_api_required
from ...core.errors import InnovelousError, error_response
from ...core.icons import icon_choices
from ...core.remote import get_remote_client
from ...core.resources import ERROR


@categories_bp.route('/api/categories', methods=['GET'])
@admin_api_required
def get_categories():
    manager = category_manager(get_remote_client())
    manager.fetch_all()
    if manager.status == ERROR:
        return jsonify({'error': manager.error}), 502
    return jsonify(manager.items)


@categories_bp.route('/api/categories', methods=['POST'])
@admin_api_required
def create_category():
    """Create a category; the key is normalised and must be unused"""
    data = request.get_json(silent=True) or request.form.to_dict()
    manager = category_manager(get_remote_client())
    # uniqueness is checked against the current list
    manager.fetch_all()
    try:
        manager.create({k: data.get(k) for k in ('name', 'key', 'icon')})
    except InnovelousError as e:
        return error_response(e)
    return jsonify({'success': True, 'message': 'Category added successfully', 'categories': manager.items}), 201


@categories_bp.route('/api/categories/<record_id>', methods=['DELETE'])
@admin_api_required
def delete_category(record_id):
    """Projects keep the deleted key and fall back to the default label"""
    manager = category_manager(get_remote_client())
    confirmed = request.args.get('confirm', '').lower() == 'true'
    try:
        manager.delete(record_id, confirmed=confirmed)
    except InnovelousError as e:
        return error_response(e)
    return jsonify({'success': True})


@categories_bp.route('/api/icons', methods=['GET'])
@admin_api_required
def get_icons():
    """Icon names accepted for categories and services"""
    return jsonify([value for value, _ in icon_choices()])
