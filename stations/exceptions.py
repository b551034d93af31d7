"""
Custom exception handler following HackSoft Django Styleguide (Approach 1).

Converts Django's ValidationError into DRF's ValidationError and rewrites
every DRF error response into the ``{"error": ...}`` envelope the mobile
client reads.
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import exceptions
from rest_framework.serializers import as_serializer_error
from rest_framework.views import exception_handler


def custom_exception_handler(exc, ctx):
    """
    1. Convert Django ValidationError -> DRF ValidationError.
    2. Replace ``response.data`` with ``{"error": <message>}``; field errors
       of a ValidationError go under ``fields``.
    """
    if isinstance(exc, DjangoValidationError):
        exc = exceptions.ValidationError(as_serializer_error(exc))

    response = exception_handler(exc, ctx)

    if response is None:
        return response

    if isinstance(exc, exceptions.ValidationError):
        response.data = {"error": "Invalid request.", "fields": response.data}
    elif isinstance(response.data, dict) and "detail" in response.data:
        response.data = {"error": str(response.data["detail"])}
    else:
        response.data = {"error": response.data}

    return response
