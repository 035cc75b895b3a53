"""
Resource Manager
================

One component for every backend table the site manages: projects,
categories, services, downloads and orders all go through the same
fetch / create / update / delete / refetch cycle.

The in-memory list is only ever replaced by a fresh read; mutations never
patch it locally. Multi-step mutations (upload then insert, remove file then
patch record) are independent remote calls with no rollback; partial
failures are logged so orphaned files can be found later.
"""

import uuid
from collections import namedtuple

from .errors import ValidationError, NotFoundError, RemoteWriteError, StorageError
from .logging_service import LoggingService
from .remote import RemoteError

IDLE = 'idle'
LOADING = 'loading'
ERROR = 'error'
READY = 'ready'

Upload = namedtuple('Upload', ['filename', 'data', 'content_type'])


def file_extension(filename):
    return filename.rsplit('.', 1)[-1].lower() if filename and '.' in filename else ''


def uuid_path(upload, prefix=''):
    """Random object name keeping the original extension"""
    ext = file_extension(upload.filename)
    name = f"{uuid.uuid4()}.{ext}" if ext else str(uuid.uuid4())
    return f"{prefix}{name}"


def as_upload(file):
    """Read a werkzeug FileStorage (or anything file-like with a filename)"""
    if isinstance(file, Upload):
        return file
    data = file.read()
    content_type = getattr(file, 'mimetype', None) or getattr(file, 'content_type', None)
    return Upload(file.filename, data, content_type or 'application/octet-stream')


def is_blank(value):
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


class Attachments:
    """Describes the files a record owns in a storage bucket.

    bucket: storage bucket name
    field: record column holding the public URL(s)
    many: list of URLs (True) or a single URL (False)
    required: at least one file must accompany a create
    owned: remove the files when the record is deleted
    path_for: callable(Upload) -> object path inside the bucket
    """

    def __init__(self, bucket, field, many=True, required=False, owned=True,
                 path_for=uuid_path, label=None):
        self.bucket = bucket
        self.field = field
        self.many = many
        self.required = required
        self.owned = owned
        self.path_for = path_for
        self.label = label or field

    def urls_of(self, record):
        value = (record or {}).get(self.field)
        if not value:
            return []
        if isinstance(value, str):
            return [value]
        return list(value)


class ResourceManager:
    """Keeps an in-memory list in step with one backend table.

    prepare: optional callable(record, uploads, creating) -> record, run after
    required-field validation and before any remote call. It may raise
    ValidationError.
    """

    def __init__(self, client, table, required=(), order_by='created_at',
                 attachments=None, prepare=None, source=None, noun=None):
        self.client = client
        self.table_name = table
        self.table = client.table(table)
        self.required = tuple(required)
        self.order_by = order_by
        self.attachments = attachments
        self.bucket = client.bucket(attachments.bucket) if attachments else None
        self.prepare = prepare
        self.source = source or table
        self.noun = noun or table.rstrip('s')

        self.items = []
        self.status = IDLE
        self.error = None

    # ===== Reads =====

    def fetch_all(self):
        """Replace the list with a fresh ordered read; keep it on failure"""
        self.status = LOADING
        try:
            rows = self.table.select(order_by=self.order_by)
        except RemoteError as e:
            self.status = ERROR
            self.error = f"Could not load {self.table_name}: {e}"
            LoggingService.error(self.source, self.error, {'status_code': e.status_code})
            return self.items

        self.items = list(rows)
        self.status = READY
        self.error = None
        return self.items

    def get(self, record_id):
        for item in self.items:
            if str(item.get('id')) == str(record_id):
                return item
        return None

    def _require(self, record_id):
        record = self.get(record_id)
        if record is None:
            self.fetch_all()
            record = self.get(record_id)
        if record is None:
            raise NotFoundError(f"{self.noun.capitalize()} not found")
        return record

    # ===== Validation =====

    def validate(self, fields, uploads=(), partial=False):
        """Raise ValidationError listing every missing required field"""
        missing = []
        for name in self.required:
            if partial and name not in fields:
                continue
            if is_blank(fields.get(name)):
                missing.append(name)

        if self.attachments and self.attachments.required and not partial and not uploads:
            missing.append(self.attachments.label)

        if missing:
            raise ValidationError(
                f"Please fill in the required fields: {', '.join(missing)}",
                fields=missing
            )

    @staticmethod
    def _clean(fields):
        return {k: v.strip() if isinstance(v, str) else v for k, v in (fields or {}).items()}

    # ===== Storage steps =====

    def _upload(self, uploads):
        urls = []
        for upload in uploads:
            path = self.attachments.path_for(upload)
            try:
                self.bucket.upload(path, upload.data, upload.content_type)
            except RemoteError as e:
                LoggingService.error(self.source, f"Upload failed: {upload.filename}", {
                    'bucket': self.bucket.name,
                    'path': path,
                    'error': str(e),
                    'already_uploaded': urls,
                })
                raise StorageError(f"Upload failed for {upload.filename}: {e}") from e
            urls.append(self.bucket.get_public_url(path))
        return urls

    def _report_orphans(self, urls, reason):
        if urls:
            LoggingService.warning(self.source, f"Files left in storage: {reason}", {
                'bucket': self.bucket.name,
                'urls': urls,
            })

    # ===== Mutations =====

    def create(self, fields, files=()):
        """Validate, upload attachments, insert, then refetch"""
        record = self._clean(fields)
        uploads = [as_upload(f) for f in (files or []) if f and getattr(f, 'filename', None)]

        self.validate(record, uploads)
        if self.prepare:
            record = self.prepare(record, uploads, creating=True)

        urls = []
        if self.attachments:
            if self.attachments.many:
                urls = self._upload(uploads)
                record[self.attachments.field] = urls
            else:
                urls = self._upload(uploads[:1])
                record[self.attachments.field] = urls[0] if urls else None

        try:
            self.table.insert(record)
        except RemoteError as e:
            self._report_orphans(urls, f"insert into {self.table_name} failed")
            raise RemoteWriteError(f"Could not save {self.noun}: {e}") from e

        LoggingService.log_action(self.source, f"create {self.noun}", {
            'files': len(urls),
        })
        self.fetch_all()
        return record

    def update(self, record_id, fields):
        """Patch fields by id, then refetch"""
        patch = self._clean(fields)
        if self.attachments:
            patch.pop(self.attachments.field, None)

        self.validate(patch, partial=True)
        if self.prepare:
            patch = self.prepare(patch, (), creating=False)

        try:
            updated = self.table.update(record_id, patch)
        except RemoteError as e:
            raise RemoteWriteError(f"Could not update {self.noun}: {e}") from e
        if updated is None:
            raise NotFoundError(f"{self.noun.capitalize()} not found")

        LoggingService.log_action(self.source, f"update {self.noun} {record_id}", {
            'fields': sorted(patch.keys()),
        })
        self.fetch_all()
        return patch

    def add_files(self, record_id, files):
        """Upload more files and append their URLs to the record"""
        if not self.attachments or not self.attachments.many:
            raise ValidationError(f"{self.noun.capitalize()} does not hold a file list")

        uploads = [as_upload(f) for f in (files or []) if f and getattr(f, 'filename', None)]
        if not uploads:
            raise ValidationError("Select at least one file", fields=[self.attachments.label])

        record = self._require(record_id)
        urls = self._upload(uploads)
        updated = self.attachments.urls_of(record) + urls

        try:
            self.table.update(record_id, {self.attachments.field: updated})
        except RemoteError as e:
            self._report_orphans(urls, f"patch of {self.noun} {record_id} failed")
            raise RemoteWriteError(f"Could not attach files: {e}") from e

        LoggingService.log_action(self.source, f"add {len(urls)} files to {self.noun} {record_id}")
        self.fetch_all()
        return updated

    def remove_file(self, record_id, url):
        """Delete one file from storage, then drop its URL from the record"""
        if not self.attachments or not self.attachments.many:
            raise ValidationError(f"{self.noun.capitalize()} does not hold a file list")

        record = self._require(record_id)
        current = self.attachments.urls_of(record)
        if url not in current:
            raise ValidationError("That file is not attached to this record")

        path = self.bucket.path_from_url(url)
        if not path:
            raise StorageError("Invalid file URL")

        try:
            self.bucket.remove([path])
        except RemoteError as e:
            raise StorageError(f"Could not delete file: {e}") from e

        updated = list(current)
        updated.remove(url)
        try:
            self.table.update(record_id, {self.attachments.field: updated})
        except RemoteError as e:
            LoggingService.error(self.source, f"{self.noun} {record_id} still references a deleted file", {
                'url': url,
                'error': str(e),
            })
            raise RemoteWriteError(f"File deleted but record not updated: {e}") from e

        LoggingService.log_action(self.source, f"remove file from {self.noun} {record_id}", {'url': url})
        self.fetch_all()
        return updated

    def delete(self, record_id, confirmed=False):
        """Delete a record after confirmation; owned files go first, best-effort"""
        if not confirmed:
            raise ValidationError("Please confirm the deletion", fields=['confirm'])

        if self.attachments and self.attachments.owned:
            record = self.get(record_id)
            if record is None:
                self.fetch_all()
                record = self.get(record_id)
            urls = self.attachments.urls_of(record)
            paths = [p for p in (self.bucket.path_from_url(u) for u in urls) if p]
            if paths:
                try:
                    self.bucket.remove(paths)
                except RemoteError as e:
                    LoggingService.warning(self.source, f"Could not remove files of {self.noun} {record_id}", {
                        'paths': paths,
                        'error': str(e),
                    })

        try:
            self.table.delete(record_id)
        except RemoteError as e:
            raise RemoteWriteError(f"Could not delete {self.noun}: {e}") from e

        LoggingService.log_action(self.source, f"delete {self.noun} {record_id}")
        self.fetch_all()
        return True


def as_bool(value):
    """Checkbox and JSON friendly truthiness"""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in ('1', 'true', 'on', 'yes')
