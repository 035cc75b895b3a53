"""
Resource manager behaviour against the in-memory backend.
"""

import pytest

from innovelous.core.errors import ValidationError, StorageError, RemoteWriteError, NotFoundError
from innovelous.core.resources import Upload, ERROR, READY, IDLE, as_bool, file_extension, uuid_path
from innovelous.modules.projects.manager import project_manager
from innovelous.modules.services.manager import service_manager


def png(name='shot.png'):
    return Upload(name, b'\x89PNG fake', 'image/png')


@pytest.fixture
def projects(backend):
    return project_manager(backend)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def test_fetch_all_orders_newest_first(backend, projects):
    table = backend.table('projects')
    table.seed(name='Old', created_at='2025-01-01T00:00:00')
    table.seed(name='New', created_at='2025-06-01T00:00:00')

    assert projects.status == IDLE
    projects.fetch_all()

    assert projects.status == READY
    assert [p['name'] for p in projects.items] == ['New', 'Old']


def test_failed_fetch_keeps_previous_items(backend, projects):
    backend.table('projects').seed(name='Kept')
    projects.fetch_all()

    backend.table('projects').fail.add('select')
    projects.fetch_all()

    assert projects.status == ERROR
    assert 'Could not load projects' in projects.error
    assert [p['name'] for p in projects.items] == ['Kept']


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

def test_create_without_image_is_rejected_before_any_call(backend, projects):
    """A project named Demo with no image never reaches the backend."""
    with pytest.raises(ValidationError) as exc:
        projects.create({'name': 'Demo', 'description': 'x'}, files=[])

    assert exc.value.fields == ['image']
    assert backend.table('projects').calls == []
    assert backend.bucket('project-images').calls == []


def test_create_reports_every_missing_field(backend, projects):
    with pytest.raises(ValidationError) as exc:
        projects.create({'name': '   ', 'description': ''}, files=[])
    assert exc.value.fields == ['name', 'description', 'image']


def test_create_uploads_then_inserts_and_refetches(backend, projects):
    projects.create({
        'name': 'Smart Farm',
        'description': '<p>IoT sensors</p>',
        'technologies': 'Python, MQTT, Python ,',
        'pinned': 'on',
    }, files=[png('a.png'), png('b.jpg')])

    bucket = backend.bucket('project-images')
    assert len(bucket.objects) == 2
    assert all(path.endswith(('.png', '.jpg')) for path in bucket.objects)

    [row] = backend.table('projects').rows
    assert row['technologies'] == ['Python', 'MQTT']
    assert row['pinned'] is True
    assert row['category'] == 'website'
    assert len(row['image_urls']) == 2

    assert backend.table('projects').calls == ['insert', 'select']
    assert projects.items == backend.table('projects').select(order_by='created_at')


def test_upload_failure_stops_before_insert(backend, projects):
    backend.bucket('project-images').fail.add('upload')

    with pytest.raises(StorageError):
        projects.create({'name': 'P', 'description': 'd'}, files=[png()])

    assert backend.table('projects').rows == []


def test_insert_failure_leaves_uploaded_files(backend, projects):
    backend.table('projects').fail.add('insert')

    with pytest.raises(RemoteWriteError):
        projects.create({'name': 'P', 'description': 'd'}, files=[png()])

    # no compensation: the object stays in storage
    assert len(backend.bucket('project-images').objects) == 1


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

def test_update_cannot_blank_required_field(backend, projects):
    row = backend.table('projects').seed(name='P', description='d', image_urls=[])

    with pytest.raises(ValidationError):
        projects.update(row['id'], {'name': ''})

    assert 'update' not in backend.table('projects').calls


def test_update_ignores_attachment_field(backend, projects):
    row = backend.table('projects').seed(name='P', description='d', image_urls=['u'])

    projects.update(row['id'], {'name': 'Q', 'image_urls': []})

    assert backend.table('projects').rows[0]['image_urls'] == ['u']
    assert projects.items[0]['name'] == 'Q'


def test_service_update_stamps_updated_at(backend):
    services = service_manager(backend)
    row = backend.table('services').seed(icon='Code', title='Web', description='Sites')

    services.update(row['id'], {'title': 'Web Apps'})

    assert backend.table('services').rows[0]['updated_at']
    assert services.items[0]['title'] == 'Web Apps'


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def test_add_and_remove_image(backend, projects):
    projects.create({'name': 'P', 'description': 'd'}, files=[png()])
    project = projects.items[0]

    urls = projects.add_files(project['id'], [png('extra.png')])
    assert len(urls) == 2

    projects.remove_file(project['id'], urls[0])
    assert projects.items[0]['image_urls'] == [urls[1]]
    assert len(backend.bucket('project-images').objects) == 1


def test_remove_unknown_file_is_rejected(backend, projects):
    row = backend.table('projects').seed(name='P', description='d', image_urls=[])
    with pytest.raises(ValidationError):
        projects.remove_file(row['id'], 'https://elsewhere/x.png')


def test_add_files_to_missing_record(backend, projects):
    with pytest.raises(NotFoundError):
        projects.add_files('nope', [png()])


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

def test_delete_requires_confirmation(backend, projects):
    row = backend.table('projects').seed(name='P', description='d', image_urls=[])

    with pytest.raises(ValidationError):
        projects.delete(row['id'])

    assert len(backend.table('projects').rows) == 1


def test_delete_removes_all_images_in_one_call(backend, projects):
    projects.create({'name': 'P', 'description': 'd'}, files=[png('1.png'), png('2.png'), png('3.png')])
    project_id = projects.items[0]['id']

    projects.delete(project_id, confirmed=True)

    removes = [call for call in backend.bucket('project-images').calls if call[0] == 'remove']
    assert len(removes) == 1
    assert len(removes[0][1]) == 3
    assert backend.table('projects').rows == []
    assert projects.items == []


def test_delete_proceeds_when_storage_removal_fails(backend, projects):
    projects.create({'name': 'P', 'description': 'd'}, files=[png()])
    backend.bucket('project-images').fail.add('remove')

    projects.delete(projects.items[0]['id'], confirmed=True)

    assert backend.table('projects').rows == []


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def test_helpers():
    assert file_extension('Report.Final.PDF') == 'pdf'
    assert file_extension('README') == ''
    assert uuid_path(png('x.jpeg'), prefix='orders/').startswith('orders/')
    assert uuid_path(png('x.jpeg')).endswith('.jpeg')
    assert as_bool('on') and as_bool(True) and not as_bool(None) and not as_bool('')


def test_update_missing_record(backend, projects):
    with pytest.raises(NotFoundError):
        projects.update('nope', {'name': 'Q'})
    assert backend.table('projects').calls == ['update']
