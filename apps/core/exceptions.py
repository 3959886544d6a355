"""
Exceptions shared by every app.

Raised by the data-access layer and mapped to HTTP responses by DRF.
"""
from rest_framework.exceptions import APIException


class StoreFailedError(APIException):
    """The relational store rejected or failed an operation."""
    status_code = 500
    default_detail = 'Internal server error.'
    default_code = 'store_failed'
