"""
Remote Backend Client
=====================

Thin client for the hosted backend: a Postgres REST API for tables and an
object storage API for buckets. All persistence lives there; this module
only translates calls into HTTP requests and HTTP failures into RemoteError.
"""

import logging
from urllib.parse import quote, unquote

import requests

logger = logging.getLogger(__name__)


class RemoteError(Exception):
    """Raised for any failed request to the backend"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self):
        if self.status_code:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class RemoteClient:
    """Gateway to backend tables and storage buckets"""

    def __init__(self, url, key, timeout=15, session=None):
        if not url or not key:
            raise ValueError(
                "Backend URL and key must be configured. "
                "Set SUPABASE_URL and SUPABASE_KEY environment variables."
            )
        self.url = url.rstrip('/')
        self.key = key
        self.timeout = timeout
        self.session = session or requests.Session()
        self.rest_url = f"{self.url}/rest/v1"
        self.storage_url = f"{self.url}/storage/v1"

    def _headers(self, extra=None):
        headers = {
            'apikey': self.key,
            'Authorization': f'Bearer {self.key}',
        }
        if extra:
            headers.update(extra)
        return headers

    def request(self, method, url, headers=None, **kwargs):
        """Send a request and return the decoded JSON body (or None)"""
        try:
            response = self.session.request(
                method, url,
                headers=self._headers(headers),
                timeout=self.timeout,
                **kwargs
            )
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise RemoteError(f"Could not reach backend: {e}") from e

        if response.status_code >= 400:
            try:
                body = response.json()
                if isinstance(body, dict):
                    message = body.get('message') or body.get('error') or response.text
                else:
                    message = response.text or response.reason
            except ValueError:
                message = response.text or response.reason
            logger.error(f"{method} {url} -> {response.status_code}: {message}")
            raise RemoteError(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def table(self, name):
        return Table(self, name)

    def bucket(self, name):
        return Bucket(self, name)


class Table:
    """One backend table, addressed by its primary key column ``id``"""

    def __init__(self, client, name):
        self.client = client
        self.name = name
        self.url = f"{client.rest_url}/{name}"

    @staticmethod
    def _eq(filters):
        return {column: f'eq.{value}' for column, value in filters.items()}

    def select(self, order_by=None, descending=True, **filters):
        """Read all rows, optionally ordered and filtered by column equality"""
        params = {'select': '*'}
        if order_by:
            params['order'] = f"{order_by}.{'desc' if descending else 'asc'}"
        params.update(self._eq(filters))
        return self.client.request('GET', self.url, params=params) or []

    def first(self, **filters):
        """Return the first matching row or None"""
        params = {'select': '*', 'limit': 1}
        params.update(self._eq(filters))
        rows = self.client.request('GET', self.url, params=params) or []
        return rows[0] if rows else None

    def insert(self, row):
        rows = self.client.request(
            'POST', self.url,
            headers={'Prefer': 'return=representation'},
            json=[row]
        ) or []
        return rows[0] if rows else None

    def update(self, record_id, fields):
        rows = self.client.request(
            'PATCH', self.url,
            headers={'Prefer': 'return=representation'},
            params=self._eq({'id': record_id}),
            json=fields
        ) or []
        return rows[0] if rows else None

    def delete(self, record_id):
        self.client.request('DELETE', self.url, params=self._eq({'id': record_id}))
        return True

    def upsert(self, row, on_conflict):
        rows = self.client.request(
            'POST', self.url,
            headers={'Prefer': 'resolution=merge-duplicates,return=representation'},
            params={'on_conflict': on_conflict},
            json=[row]
        ) or []
        return rows[0] if rows else None


class Bucket:
    """One object storage bucket with public read URLs"""

    def __init__(self, client, name):
        self.client = client
        self.name = name

    def upload(self, path, data, content_type=None):
        url = f"{self.client.storage_url}/object/{self.name}/{quote(path)}"
        self.client.request(
            'POST', url,
            headers={
                'Content-Type': content_type or 'application/octet-stream',
                'x-upsert': 'false',
            },
            data=data
        )
        return path

    def get_public_url(self, path):
        return f"{self.client.storage_url}/object/public/{self.name}/{quote(path)}"

    def remove(self, paths):
        """Remove several objects in one call"""
        paths = [p for p in paths if p]
        if not paths:
            return []
        url = f"{self.client.storage_url}/object/{self.name}"
        return self.client.request('DELETE', url, json={'prefixes': paths}) or []

    def path_from_url(self, url):
        """Recover the object path from one of this bucket's public URLs"""
        if not url:
            return None
        marker = f"/{self.name}/"
        if marker not in url:
            return None
        return unquote(url.split(marker, 1)[1])


def get_remote_client():
    """The application's shared backend client"""
    from flask import current_app
    return current_app.extensions['innovelous'].client
