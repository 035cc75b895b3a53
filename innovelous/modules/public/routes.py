"""
Public Site Routes
==================

Pages read straight from the backend on every request. A failed read shows
the error with a retry link instead of an empty page.
"""

from flask import render_template, request
from . import public_bp
from ..categories.manager import category_manager, category_display
from ..downloads.manager import download_manager
from ..orders.manager import order_manager, ORDER_FIELDS, BUDGET_OPTIONS, TIMELINE_OPTIONS
from ..projects.manager import project_manager, plain_excerpt, pinned_first, filter_by_category
from ..services.manager import service_manager
from ...core.errors import InnovelousError, ValidationError
from ...core.icons import resolve_icon
from ...core.remote import get_remote_client

FEATURED_LIMIT = 3


@public_bp.app_template_filter('excerpt')
def excerpt_filter(html):
    return plain_excerpt(html)


@public_bp.app_template_filter('icon_slug')
def icon_slug_filter(name):
    """Icon name -> css/svg slug, unknown names get the default icon"""
    return resolve_icon(name).slug


@public_bp.route('/')
def home():
    """Landing page: services and featured work"""
    client = get_remote_client()
    services = service_manager(client)
    projects = project_manager(client)
    services.fetch_all()
    projects.fetch_all()

    featured = [p for p in projects.items if p.get('pinned')] or projects.items
    return render_template(
        'public/home.html',
        services=services,
        projects=projects,
        featured=featured[:FEATURED_LIMIT],
    )


@public_bp.route('/portfolio')
def portfolio():
    """All projects, pinned first, optionally filtered by ?category=key"""
    client = get_remote_client()
    projects = project_manager(client)
    categories = category_manager(client)
    projects.fetch_all()
    categories.fetch_all()

    selected = request.args.get('category', '').strip().lower()
    shown = pinned_first(filter_by_category(projects.items, selected))
    return render_template(
        'public/portfolio.html',
        projects=projects,
        categories=categories,
        shown=shown,
        selected=selected,
        category_display=category_display,
    )


@public_bp.route('/downloads')
def downloads():
    manager = download_manager(get_remote_client())
    manager.fetch_all()
    return render_template('public/downloads.html', downloads=manager)


def _order_form(**context):
    return render_template(
        'public/place_order.html',
        budget_options=BUDGET_OPTIONS,
        timeline_options=TIMELINE_OPTIONS,
        **context
    )


@public_bp.route('/place-order', methods=['GET', 'POST'])
def place_order():
    """Order intake form; files are optional"""
    if request.method == 'GET':
        return _order_form(form={}, invalid=[])

    form = {k: request.form.get(k, '') for k in ORDER_FIELDS}
    manager = order_manager(get_remote_client())
    try:
        manager.create(form, request.files.getlist('files'))
    except ValidationError as e:
        return _order_form(form=form, invalid=e.fields, error=e.message), 400
    except InnovelousError as e:
        return _order_form(form=form, invalid=[], error=e.message), e.status_code

    return render_template('public/order_submitted.html', name=form['name'])
