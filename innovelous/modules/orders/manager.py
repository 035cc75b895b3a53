"""
Client Orders
=============

Orders arrive from the public intake form and are advanced by the admin:
pending -> in-progress -> completed. The forward-only rule is a presentation
guard (``can_mark``); ``set_order_status`` accepts any known status.

Attachments are not owned: deleting an order leaves its files in storage.
"""

import re
from datetime import datetime, timezone
from functools import partial

from ...core.config import Config, get_config_value
from ...core.errors import ValidationError
from ...core.resources import ResourceManager, Attachments, uuid_path

ORDER_STATUSES = ('pending', 'in-progress', 'completed')
ORDER_FIELDS = ('name', 'email', 'phone', 'project_title', 'description', 'budget', 'timeline')

BUDGET_OPTIONS = [
    ('under-5k', 'Under $5,000'),
    ('5k-10k', '$5,000 - $10,000'),
    ('10k-25k', '$10,000 - $25,000'),
    ('25k-50k', '$25,000 - $50,000'),
    ('over-50k', 'Over $50,000'),
    ('discuss', "Let's discuss"),
]

TIMELINE_OPTIONS = [
    ('asap', 'ASAP'),
    ('1-month', 'Within 1 month'),
    ('2-3-months', '2-3 months'),
    ('3-6-months', '3-6 months'),
    ('flexible', "I'm flexible"),
]

# Rejects consecutive dots and leading or trailing dots
EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9_%+-]+(\.[a-zA-Z0-9_%+-]+)*@[a-zA-Z0-9-]+(\.[a-zA-Z0-9-]+)*\.[a-zA-Z]{2,}$')


def _prepare_order(record, uploads, creating=True):
    if 'email' in record:
        record['email'] = record['email'].lower()
        if not EMAIL_REGEX.match(record['email']):
            raise ValidationError("Please enter a valid email address", fields=['email'])
    if creating:
        record = {k: record.get(k) or None for k in ORDER_FIELDS}
        record['status'] = 'pending'
        record['submitted_at'] = datetime.now(timezone.utc).isoformat()
    return record


def order_manager(client):
    return ResourceManager(
        client,
        Config.ORDERS_TABLE,
        required=('name', 'email', 'project_title', 'description'),
        order_by='submitted_at',
        attachments=Attachments(
            get_config_value('ORDER_FILES_BUCKET', 'order-files'),
            'file_urls',
            many=True,
            required=False,
            owned=False,
            path_for=partial(uuid_path, prefix='orders/'),
            label='files',
        ),
        prepare=_prepare_order,
        source='orders',
        noun='order',
    )


def status_rank(status):
    return ORDER_STATUSES.index(status) if status in ORDER_STATUSES else 0


def can_mark(current, target):
    """Whether the dashboard offers moving an order from *current* to *target*"""
    return status_rank(current) < status_rank(target)


def set_order_status(manager, order_id, status):
    """Write a new status. Does not enforce forward-only transitions."""
    if status not in ORDER_STATUSES:
        raise ValidationError(f"Unknown order status: {status}", fields=['status'])
    manager.update(order_id, {'status': status})
    return status
