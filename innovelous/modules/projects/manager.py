"""
Portfolio Projects
==================

Projects own their images: at least one is required on create, and deleting
a project removes its images from the bucket (best-effort).
"""

import re

from ...core.config import Config, get_config_value
from ...core.resources import ResourceManager, Attachments, as_bool

DEFAULT_CATEGORY = 'website'


def parse_technologies(value):
    """Comma-separated text or a list -> trimmed, de-duplicated list in order"""
    if value is None:
        return []
    parts = value.split(',') if isinstance(value, str) else value
    technologies = []
    for part in parts:
        tech = str(part).strip()
        if tech and tech not in technologies:
            technologies.append(tech)
    return technologies


def _prepare_project(record, uploads, creating=True):
    if creating or 'technologies' in record:
        record['technologies'] = parse_technologies(record.get('technologies'))
    if creating or 'pinned' in record:
        record['pinned'] = as_bool(record.get('pinned'))
    if creating and not record.get('category'):
        record['category'] = DEFAULT_CATEGORY
    if 'demo_url' in record:
        record['demo_url'] = record['demo_url'] or None
    return record


def project_manager(client):
    return ResourceManager(
        client,
        Config.PROJECTS_TABLE,
        required=('name', 'description'),
        order_by='created_at',
        attachments=Attachments(
            get_config_value('PROJECT_IMAGES_BUCKET', 'project-images'),
            'image_urls',
            many=True,
            required=True,
            owned=True,
            label='image',
        ),
        prepare=_prepare_project,
        source='projects',
        noun='project',
    )


def plain_excerpt(html):
    """First line of a rich-text description as plain text"""
    if not html:
        return ''
    text = re.sub(r'<(br|/p|/div|/li|/h[1-6])\s*/?>', '\n', html, flags=re.IGNORECASE)
    text = re.sub(r'<[^>]+>', '', text).strip()
    first_line = text.split('\n', 1)[0].strip()
    return first_line + ('....' if len(text) > len(first_line) else '')


def pinned_first(projects):
    """Stable sort: pinned projects ahead of the rest"""
    return sorted(projects, key=lambda p: not p.get('pinned'))


def filter_by_category(projects, category_key):
    if not category_key:
        return list(projects)
    return [p for p in projects if p.get('category') == category_key]
