"""
Downloads Catalog
=================

Each download owns exactly one file in the downloads bucket. Size and type
are taken from the uploaded file itself.
"""

import time

from ...core.config import Config, get_config_value
from ...core.resources import ResourceManager, Attachments, file_extension


def download_path(upload):
    ext = file_extension(upload.filename)
    stamp = int(time.time() * 1000)
    return f"projects/{stamp}.{ext}" if ext else f"projects/{stamp}"


def format_file_size(num_bytes):
    return f"{num_bytes / (1024 * 1024):.1f} MB"


def _prepare_download(record, uploads, creating=True):
    if creating and uploads:
        upload = uploads[0]
        record['file_size'] = format_file_size(len(upload.data))
        record['file_type'] = file_extension(upload.filename).upper()
    return record


def download_manager(client):
    return ResourceManager(
        client,
        Config.DOWNLOADS_TABLE,
        required=('title', 'description', 'category'),
        order_by='created_at',
        attachments=Attachments(
            get_config_value('DOWNLOADS_BUCKET', 'downloads'),
            'file_url',
            many=False,
            required=True,
            owned=True,
            path_for=download_path,
            label='file',
        ),
        prepare=_prepare_download,
        source='downloads',
        noun='download',
    )
