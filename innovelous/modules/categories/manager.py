"""
Portfolio Categories
====================

Projects reference categories by ``key`` with no enforced foreign key, so a
deleted category leaves projects pointing at nothing. Display helpers fall
back to a default label and icon for such keys.
"""

import re

from ...core.config import Config
from ...core.errors import ValidationError
from ...core.icons import resolve_icon, DEFAULT_ICON
from ...core.resources import ResourceManager

DEFAULT_CATEGORY_LABEL = 'Other'


def slugify_key(value):
    return re.sub(r'[^a-z0-9]+', '-', (value or '').lower()).strip('-')


def category_manager(client):
    manager = ResourceManager(
        client,
        Config.CATEGORIES_TABLE,
        required=('name', 'key'),
        order_by='created_at',
        source='categories',
        noun='category',
    )

    def prepare(record, uploads, creating=True):
        if 'key' in record:
            record['key'] = slugify_key(record['key'])
            if not record['key']:
                raise ValidationError("Key must contain letters or digits", fields=['key'])
            taken = [c for c in manager.items if c.get('key') == record['key']]
            if creating and taken:
                raise ValidationError(f"A category with key '{record['key']}' already exists", fields=['key'])
        if creating or 'icon' in record:
            record['icon'] = resolve_icon(record.get('icon')).value
        return record

    manager.prepare = prepare
    return manager


def category_display(key, categories):
    """Label and Icon for a project's category key"""
    for category in categories or []:
        if category.get('key') == key:
            return {
                'name': category.get('name') or DEFAULT_CATEGORY_LABEL,
                'icon': resolve_icon(category.get('icon')),
            }
    return {'name': DEFAULT_CATEGORY_LABEL, 'icon': DEFAULT_ICON}
