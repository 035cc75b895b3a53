"""
Admin Dashboard Routes
======================
"""

from flask import render_template, request, redirect, url_for
from . import dashboard_bp
from ..auth import admin_required
from ..categories.manager import category_manager, category_display
from ..downloads.manager import download_manager
from ..orders.manager import order_manager, ORDER_STATUSES, can_mark
from ..projects.manager import project_manager
from ..services.manager import service_manager
from ...core.icons import icon_choices
from ...core.logging_service import LoggingService
from ...core.remote import get_remote_client

DEFAULT_TAB = 'orders'

# tab -> managers it needs, keyed by template variable
TABS = {
    'orders': {'orders': order_manager},
    'portfolio': {'projects': project_manager, 'categories': category_manager},
    'services': {'services': service_manager},
    'downloads': {'downloads': download_manager},
    'categories': {'categories': category_manager},
    'settings': {},
    'logs': {},
}

LOG_LIMIT = 200


def load_tab(tab, client):
    """Build and fetch the managers for one tab"""
    managers = {}
    for name, factory in TABS[tab].items():
        manager = factory(client)
        manager.fetch_all()
        managers[name] = manager
    return managers


@dashboard_bp.route('/dashboard')
@admin_required
def dashboard():
    """Admin dashboard, one tab at a time"""
    tab = request.args.get('tab', DEFAULT_TAB)
    if tab not in TABS:
        return redirect(url_for('dashboard.dashboard', tab=DEFAULT_TAB))

    managers = load_tab(tab, get_remote_client())
    errors = [m.error for m in managers.values() if m.error]
    logs = LoggingService.recent(LOG_LIMIT, request.args.get('source') or None) if tab == 'logs' else []

    return render_template(
        'dashboard/dashboard.html',
        tab=tab,
        tabs=list(TABS),
        managers=managers,
        errors=errors,
        logs=logs,
        order_statuses=ORDER_STATUSES,
        can_mark=can_mark,
        category_display=category_display,
        icons=[value for value, _ in icon_choices()],
    )
