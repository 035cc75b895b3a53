"""
Shared fixtures: an in-memory stand-in for the hosted backend and a fully
initialised app wired to it.
"""

import copy
import itertools
import uuid
from datetime import datetime, timedelta

import pytest
from flask import Flask

from innovelous import Innovelous
from innovelous.core.config import Config
from innovelous.core.remote import RemoteError
from innovelous.modules.auth.gate import hash_password, CREDENTIALS_KEY

ADMIN_EMAIL = 'admin@innovelous.tech'
ADMIN_PASSWORD = 'secret123'


# ---------------------------------------------------------------------------
# Fake backend
# ---------------------------------------------------------------------------

_clock = itertools.count()


def _timestamp():
    return (datetime(2026, 1, 1) + timedelta(seconds=next(_clock))).isoformat()


class FakeTable:
    """Rows kept in a list; ``fail`` names operations that raise RemoteError"""

    def __init__(self, name):
        self.name = name
        self.rows = []
        self.fail = set()
        self.calls = []

    def _check(self, op):
        self.calls.append(op)
        if op in self.fail:
            raise RemoteError(f"{op} on {self.name} failed", status_code=500)

    def seed(self, **row):
        row.setdefault('id', str(uuid.uuid4()))
        row.setdefault('created_at', _timestamp())
        self.rows.append(row)
        return row

    def select(self, order_by=None, descending=True, **filters):
        self._check('select')
        rows = [r for r in self.rows if all(r.get(k) == v for k, v in filters.items())]
        if order_by:
            rows.sort(key=lambda r: r.get(order_by) or '', reverse=descending)
        return copy.deepcopy(rows)

    def first(self, **filters):
        self._check('first')
        for row in self.rows:
            if all(row.get(k) == v for k, v in filters.items()):
                return copy.deepcopy(row)
        return None

    def insert(self, row):
        self._check('insert')
        return copy.deepcopy(self.seed(**copy.deepcopy(row)))

    def update(self, record_id, fields):
        self._check('update')
        for row in self.rows:
            if str(row['id']) == str(record_id):
                row.update(copy.deepcopy(fields))
                return copy.deepcopy(row)
        return None

    def delete(self, record_id):
        self._check('delete')
        self.rows = [r for r in self.rows if str(r['id']) != str(record_id)]
        return True

    def upsert(self, row, on_conflict):
        self._check('upsert')
        for existing in self.rows:
            if existing.get(on_conflict) == row.get(on_conflict):
                existing.update(copy.deepcopy(row))
                return copy.deepcopy(existing)
        return copy.deepcopy(self.seed(**copy.deepcopy(row)))


class FakeBucket:
    def __init__(self, name):
        self.name = name
        self.objects = {}
        self.fail = set()
        self.calls = []

    def _check(self, op, arg):
        self.calls.append((op, arg))
        if op in self.fail:
            raise RemoteError(f"{op} in {self.name} failed", status_code=500)

    def upload(self, path, data, content_type=None):
        self._check('upload', path)
        self.objects[path] = data
        return path

    def get_public_url(self, path):
        return f"https://backend.test/storage/v1/object/public/{self.name}/{path}"

    def remove(self, paths):
        self._check('remove', list(paths))
        for path in paths:
            self.objects.pop(path, None)
        return [{'name': p} for p in paths]

    def path_from_url(self, url):
        marker = f"/{self.name}/"
        if not url or marker not in url:
            return None
        return url.split(marker, 1)[1]


class FakeClient:
    def __init__(self):
        self.tables = {}
        self.buckets = {}

    def table(self, name):
        return self.tables.setdefault(name, FakeTable(name))

    def bucket(self, name):
        return self.buckets.setdefault(name, FakeBucket(name))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def log_db(tmp_path, monkeypatch):
    """Keep the local log store out of the working directory"""
    path = str(tmp_path / 'app_logs.db')
    monkeypatch.setattr(Config, 'LOG_DB', path)
    return path


@pytest.fixture
def backend():
    return FakeClient()


@pytest.fixture
def app(backend, log_db):
    """Fully initialised Flask app talking to the fake backend."""
    app = Flask(__name__)
    app.config['TESTING'] = True
    app.config['SECRET_KEY'] = 'test-secret'
    app.config['LOG_DB'] = log_db
    Innovelous(app, client=backend)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def credentials(backend):
    """Seed the admin credential record; returns the plain login"""
    backend.table('admin_settings').seed(
        setting_name=CREDENTIALS_KEY,
        setting_value={'email': ADMIN_EMAIL, 'password_hash': hash_password(ADMIN_PASSWORD)},
    )
    return {'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD}


@pytest.fixture
def admin_client(client):
    """Test client with the admin session flag already set"""
    with client.session_transaction() as sess:
        sess['admin_authenticated'] = True
    return client
