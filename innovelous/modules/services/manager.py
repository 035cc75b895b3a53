"""
Services
========
"""

from datetime import datetime, timezone

from ...core.config import Config
from ...core.icons import resolve_icon
from ...core.resources import ResourceManager


def _prepare_service(record, uploads, creating=True):
    if creating or 'icon' in record:
        record['icon'] = resolve_icon(record.get('icon')).value
    if not creating:
        record['updated_at'] = datetime.now(timezone.utc).isoformat()
    return record


def service_manager(client):
    return ResourceManager(
        client,
        Config.SERVICES_TABLE,
        required=('icon', 'title', 'description'),
        order_by='created_at',
        prepare=_prepare_service,
        source='services',
        noun='service',
    )
