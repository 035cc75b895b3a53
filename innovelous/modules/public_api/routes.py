"""
Public catalog API.

GET /api/public/projects?category=web&pinned=true

Every endpoint returns ``{"success": true, "<name>": [...], "count": N}`` or
``{"success": false, "error": "..."}`` with a 502 when the backend read fails.
"""

import logging
from flask import jsonify, request
from flask_cors import cross_origin
from . import public_api_bp
from ..categories.manager import category_manager
from ..downloads.manager import download_manager
from ..projects.manager import project_manager, filter_by_category, pinned_first
from ..services.manager import service_manager
from ...core.config import Config
from ...core.remote import get_remote_client
from ...core.resources import ERROR, as_bool

logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = Config.CORS_ORIGINS


def _listing(name, manager, select=None):
    manager.fetch_all()
    if manager.status == ERROR:
        logger.error(f"Public {name} read failed: {manager.error}")
        return jsonify({'success': False, 'error': manager.error, name: []}), 502
    items = select(manager.items) if select else manager.items
    return jsonify({'success': True, name: items, 'count': len(items)})


@public_api_bp.route('/projects', methods=['GET', 'OPTIONS'])
@cross_origin(origins=ALLOWED_ORIGINS, supports_credentials=False)
def projects():
    """
    Query params:
        category: only projects with this category key
        pinned: only pinned projects when true
    """
    category = request.args.get('category', '').strip().lower()
    pinned_only = as_bool(request.args.get('pinned'))

    def select(items):
        items = pinned_first(filter_by_category(items, category))
        if pinned_only:
            items = [p for p in items if p.get('pinned')]
        return items

    return _listing('projects', project_manager(get_remote_client()), select)


@public_api_bp.route('/categories', methods=['GET', 'OPTIONS'])
@cross_origin(origins=ALLOWED_ORIGINS, supports_credentials=False)
def categories():
    return _listing('categories', category_manager(get_remote_client()))


@public_api_bp.route('/services', methods=['GET', 'OPTIONS'])
@cross_origin(origins=ALLOWED_ORIGINS, supports_credentials=False)
def services():
    return _listing('services', service_manager(get_remote_client()))


@public_api_bp.route('/downloads', methods=['GET', 'OPTIONS'])
@cross_origin(origins=ALLOWED_ORIGINS, supports_credentials=False)
def downloads():
    return _listing('downloads', download_manager(get_remote_client()))
