"""
Projects Admin Routes
=====================
"""

from flask import request, jsonify
from . import projects_bp
from .manager import project_manager
from ..auth import admin_api_required
from ...core.errors import InnovelousError, error_response
from ...core.remote import get_remote_client
from ...core.resources import ERROR

EDITABLE_FIELDS = ('name', 'description', 'demo_url', 'category', 'technologies', 'pinned')


def _payload():
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()
    return {k: v for k, v in data.items() if k in EDITABLE_FIELDS}


@projects_bp.route('/api/projects', methods=['GET'])
@admin_api_required
def get_projects():
    """Get all projects, newest first"""
    manager = project_manager(get_remote_client())
    manager.fetch_all()
    if manager.status == ERROR:
        return jsonify({'error': manager.error}), 502
    return jsonify(manager.items)


@projects_bp.route('/api/projects', methods=['POST'])
@admin_api_required
def create_project():
    """Create a project from multipart form data with ``images`` files"""
    manager = project_manager(get_remote_client())
    try:
        manager.create(_payload(), request.files.getlist('images'))
    except InnovelousError as e:
        return error_response(e)
    return jsonify({'success': True, 'message': 'Project added successfully', 'projects': manager.items}), 201


@projects_bp.route('/api/projects/<record_id>', methods=['PUT'])
@admin_api_required
def update_project(record_id):
    manager = project_manager(get_remote_client())
    fields = _payload()
    if request.get_json(silent=True) is None and 'pinned' not in fields:
        # unchecked checkboxes are not submitted
        fields['pinned'] = False
    try:
        manager.update(record_id, fields)
    except InnovelousError as e:
        return error_response(e)
    return jsonify({'success': True, 'message': 'Project updated successfully', 'projects': manager.items})


@projects_bp.route('/api/projects/<record_id>/images', methods=['POST'])
@admin_api_required
def add_project_images(record_id):
    manager = project_manager(get_remote_client())
    try:
        image_urls = manager.add_files(record_id, request.files.getlist('images'))
    except InnovelousError as e:
        return error_response(e)
    return jsonify({'success': True, 'image_urls': image_urls})


@projects_bp.route('/api/projects/<record_id>/images', methods=['DELETE'])
@admin_api_required
def remove_project_image(record_id):
    """Remove one image (``url`` in the JSON body)"""
    data = request.get_json(silent=True) or {}
    manager = project_manager(get_remote_client())
    try:
        image_urls = manager.remove_file(record_id, data.get('url'))
    except InnovelousError as e:
        return error_response(e)
    return jsonify({'success': True, 'image_urls': image_urls})


@projects_bp.route('/api/projects/<record_id>', methods=['DELETE'])
@admin_api_required
def delete_project(record_id):
    """Delete a project and its images. Requires ``confirm=true``."""
    manager = project_manager(get_remote_client())
    confirmed = request.args.get('confirm', '').lower() == 'true'
    try:
        manager.delete(record_id, confirmed=confirmed)
    except InnovelousError as e:
        return error_response(e)
    return jsonify({'success': True})
