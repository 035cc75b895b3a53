"""
Per-entity rules: projects, categories, services, downloads, orders, icons.
"""

import re

import pytest

from innovelous.core.errors import ValidationError
from innovelous.core.icons import Icon, DEFAULT_ICON, resolve_icon, is_known_icon
from innovelous.core.resources import Upload
from innovelous.modules.categories.manager import category_manager, category_display, slugify_key
from innovelous.modules.downloads.manager import download_manager, format_file_size
from innovelous.modules.orders.manager import (
    order_manager, can_mark, set_order_status, ORDER_STATUSES,
)
from innovelous.modules.projects.manager import (
    parse_technologies, plain_excerpt, pinned_first, filter_by_category,
)
from innovelous.modules.services.manager import service_manager


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

def test_parse_technologies():
    assert parse_technologies(' React , Flask,,React, ') == ['React', 'Flask']
    assert parse_technologies(['Go', ' Go ', 'Rust']) == ['Go', 'Rust']
    assert parse_technologies(None) == []


def test_plain_excerpt():
    html = '<p>Fleet tracking for <b>logistics</b></p><p>Second paragraph</p>'
    assert plain_excerpt(html) == 'Fleet tracking for logistics....'
    assert plain_excerpt('<p>One line</p>') == 'One line'
    assert plain_excerpt(None) == ''


def test_pinned_first_and_category_filter():
    projects = [
        {'name': 'a', 'category': 'web'},
        {'name': 'b', 'category': 'iot', 'pinned': True},
        {'name': 'c', 'category': 'web', 'pinned': True},
    ]
    assert [p['name'] for p in pinned_first(projects)] == ['b', 'c', 'a']
    assert [p['name'] for p in filter_by_category(projects, 'web')] == ['a', 'c']
    assert len(filter_by_category(projects, '')) == 3


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

def test_category_key_is_normalised_and_icon_resolved(backend):
    categories = category_manager(backend)
    categories.create({'name': 'Mobile Apps', 'key': ' Mobile Apps ', 'icon': 'not-an-icon'})

    row = backend.table('categories').rows[0]
    assert row['key'] == 'mobile-apps'
    assert row['icon'] == DEFAULT_ICON.value


def test_category_key_must_be_unique(backend):
    backend.table('categories').seed(name='Web', key='web', icon='Globe')
    categories = category_manager(backend)
    categories.fetch_all()

    with pytest.raises(ValidationError) as exc:
        categories.create({'name': 'Websites', 'key': 'WEB'})
    assert exc.value.fields == ['key']


def test_deleted_category_falls_back_to_default_display(backend):
    """A project keeps a dangling key after its category is removed"""
    table = backend.table('categories')
    row = table.seed(name='Web Apps', key='webapp', icon='Wifi')
    categories = category_manager(backend)
    categories.fetch_all()

    assert category_display('webapp', categories.items) == {'name': 'Web Apps', 'icon': Icon.WIFI}

    categories.delete(row['id'], confirmed=True)
    display = category_display('webapp', categories.items)
    assert display['name'] == 'Other'
    assert display['icon'] is DEFAULT_ICON


def test_slugify_key():
    assert slugify_key('AI / ML') == 'ai-ml'
    assert slugify_key('!!!') == ''


# ---------------------------------------------------------------------------
# Services and icons
# ---------------------------------------------------------------------------

def test_service_requires_icon_title_description(backend):
    with pytest.raises(ValidationError) as exc:
        service_manager(backend).create({'title': 'Web'})
    assert exc.value.fields == ['icon', 'description']


def test_icons():
    assert resolve_icon('cpu') is Icon.CPU
    assert resolve_icon('') is DEFAULT_ICON
    assert resolve_icon('Unknown') is DEFAULT_ICON
    assert DEFAULT_ICON.slug == 'grid-3x3'
    assert Icon.FILE_TEXT.slug == 'file-text'
    assert is_known_icon('Brain') and not is_known_icon('Dragon')


# ---------------------------------------------------------------------------
# Downloads
# ---------------------------------------------------------------------------

def test_download_records_size_type_and_path(backend):
    downloads = download_manager(backend)
    payload = Upload('Brochure.pdf', b'x' * (3 * 1024 * 1024 + 200 * 1024), 'application/pdf')

    downloads.create({'title': 'Brochure', 'description': 'Company profile', 'category': 'docs'}, [payload])

    row = backend.table('downloads').rows[0]
    assert row['file_size'] == '3.2 MB'
    assert row['file_type'] == 'PDF'
    [path] = backend.bucket('downloads').objects
    assert re.fullmatch(r'projects/\d{13}\.pdf', path)
    assert row['file_url'].endswith(path)


def test_download_requires_file(backend):
    with pytest.raises(ValidationError) as exc:
        download_manager(backend).create({'title': 't', 'description': 'd', 'category': 'c'}, [])
    assert exc.value.fields == ['file']


def test_download_delete_removes_file(backend):
    downloads = download_manager(backend)
    downloads.create({'title': 't', 'description': 'd', 'category': 'c'}, [Upload('a.zip', b'1', None)])

    downloads.delete(downloads.items[0]['id'], confirmed=True)

    assert backend.bucket('downloads').objects == {}


def test_format_file_size():
    assert format_file_size(0) == '0.0 MB'
    assert format_file_size(1024 * 1024) == '1.0 MB'


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

ORDER = {
    'name': 'Ada',
    'email': 'Ada@Example.com',
    'project_title': 'Inventory app',
    'description': 'Track stock across two shops',
    'budget': '5k-10k',
}


def test_new_order_is_pending(backend):
    orders = order_manager(backend)
    orders.create(dict(ORDER), [Upload('brief.docx', b'doc', None)])

    row = backend.table('orders').rows[0]
    assert row['status'] == 'pending'
    assert row['submitted_at']
    assert row['email'] == 'ada@example.com'
    assert row['timeline'] is None
    [path] = backend.bucket('order-files').objects
    assert path.startswith('orders/') and path.endswith('.docx')


def test_order_rejects_bad_email(backend):
    with pytest.raises(ValidationError) as exc:
        order_manager(backend).create(dict(ORDER, email='ada@@example'))
    assert exc.value.fields == ['email']
    assert backend.table('orders').calls == []


def test_order_status_buttons():
    assert ORDER_STATUSES == ('pending', 'in-progress', 'completed')
    assert can_mark('pending', 'in-progress')
    assert can_mark('pending', 'completed')
    assert not can_mark('in-progress', 'in-progress')
    assert not can_mark('completed', 'pending')


def test_status_can_move_backwards(backend):
    """Forward-only is a button rule, not enforced on write"""
    row = backend.table('orders').seed(status='completed', submitted_at='2026-01-01T00:00:00')
    orders = order_manager(backend)

    set_order_status(orders, row['id'], 'pending')

    assert backend.table('orders').rows[0]['status'] == 'pending'
    assert orders.items[0]['status'] == 'pending'


def test_unknown_status_rejected(backend):
    row = backend.table('orders').seed(status='pending')
    with pytest.raises(ValidationError):
        set_order_status(order_manager(backend), row['id'], 'shipped')


def test_order_delete_keeps_files(backend):
    orders = order_manager(backend)
    orders.create(dict(ORDER), [Upload('brief.pdf', b'doc', None)])

    orders.delete(orders.items[0]['id'], confirmed=True)

    assert backend.table('orders').rows == []
    assert len(backend.bucket('order-files').objects) == 1
