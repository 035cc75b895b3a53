"""
Error Taxonomy
==============

Every failure a visitor or admin can trigger maps to one of these.
Views catch ``InnovelousError`` and flash its message; nothing is retried
automatically.
"""


class InnovelousError(Exception):
    """Base class for user-visible failures"""

    status_code = 500

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        return self.message


class ValidationError(InnovelousError):
    """Missing or malformed input, raised before any remote call"""

    status_code = 400

    def __init__(self, message, fields=None):
        super().__init__(message, {'fields': list(fields or [])})
        self.fields = list(fields or [])


class RemoteReadError(InnovelousError):
    """A table read failed"""

    status_code = 502


class NotFoundError(RemoteReadError):
    """The record is not in the table"""

    status_code = 404


class RemoteWriteError(InnovelousError):
    """An insert, update or delete failed"""

    status_code = 502


class StorageError(InnovelousError):
    """An upload or removal in object storage failed"""

    status_code = 502

def error_response(error):
    """JSON body and status code for an API view"""
    from flask import jsonify
    body = {'error': error.message}
    if isinstance(error, ValidationError):
        body['fields'] = error.fields
    return jsonify(body), error.status_code
