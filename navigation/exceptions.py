# navigation/exceptions.py
import logging
from contextlib import contextmanager

from django.db import DatabaseError
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class PersistenceError(APIException):
    status_code = 500
    default_detail = "Failed to complete the navigation request."
    default_code = "persistence_error"


@contextmanager
def store_operation(action: str, **context):
    """
    Wrap a store call. Database errors are logged with ``context`` and
    re-raised as a PersistenceError whose message never carries driver text.
    """
    try:
        yield
    except DatabaseError:
        logger.exception("Store failure while trying to %s %s", action, context)
        raise PersistenceError(f"Failed to {action}")


def _first_message(detail):
    if isinstance(detail, dict):
        for value in detail.values():
            message = _first_message(value)
            if message:
                return message
        return None
    if isinstance(detail, (list, tuple)):
        for value in detail:
            message = _first_message(value)
            if message:
                return message
        return None
    return str(detail) if detail else None


def envelope_exception_handler(exc, context):
    """
    DRF exception handler that renders every error as
    ``{"isSuccess": false, "message": ...}`` (plus ``errors`` for 400s).
    """
    if isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.exception("Unhandled store failure in %s", view.__class__.__name__ if view else "unknown view")
        exc = PersistenceError()

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        errors = exc.detail if isinstance(exc.detail, dict) else {"non_field_errors": exc.detail}
        response.data = {
            "isSuccess": False,
            "message": _first_message(exc.detail) or "Invalid request",
            "errors": errors,
        }
    else:
        detail = getattr(exc, "detail", None)
        response.data = {
            "isSuccess": False,
            "message": _first_message(detail) or "Request failed",
        }
    return response
