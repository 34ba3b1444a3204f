"""Exception handling that keeps every error in the API envelope."""

from typing import Any

from django.conf import settings
from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed, NotAuthenticated
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from articles.exceptions import (
    ArticleEditError,
    CoAuthorResolutionError,
    LockConflict,
    NotFound,
    PersistenceFailure,
)
from authentication.services import BlocklistUnavailable

# Most specific class first; the first isinstance match wins.
ARTICLE_ERROR_STATUS: list[tuple[type[ArticleEditError], int]] = [
    (NotFound, status.HTTP_404_NOT_FOUND),
    (LockConflict, status.HTTP_423_LOCKED),
    (CoAuthorResolutionError, status.HTTP_400_BAD_REQUEST),
    (PersistenceFailure, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def _normalize_errors(payload: Any) -> list[Any]:
    """Convert DRF's response.data into a list for the envelope."""

    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and "detail" in payload:
        return [payload["detail"]]
    if isinstance(payload, dict) and list(payload) == ["non_field_errors"]:
        return list(payload["non_field_errors"])
    return [payload]


def _envelope_error(message: str, status_code: int) -> Response:
    return Response({"data": None, "errors": [message]}, status=status_code)


def custom_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """Wrap errors in the ``{"data": null, "errors": [...]}`` shape.

    Article edit failures each get their own status so the client can tell a
    lock conflict from an unknown co-author. Blocklist and database outages
    fail closed with 503. Everything else goes through DRF's default handler.
    """

    if isinstance(exc, ArticleEditError):
        for error_class, status_code in ARTICLE_ERROR_STATUS:
            if isinstance(exc, error_class):
                return _envelope_error(str(exc), status_code)
        return _envelope_error(str(exc), status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, BlocklistUnavailable):
        return _envelope_error(
            "Authentication service unavailable (blocklist).", status.HTTP_503_SERVICE_UNAVAILABLE
        )

    if isinstance(exc, DatabaseError):
        return _envelope_error("Service temporarily unavailable.", status.HTTP_503_SERVICE_UNAVAILABLE)

    response = drf_exception_handler(exc, context)

    if response is None:
        return response

    if isinstance(exc, (AuthenticationFailed, NotAuthenticated)):
        response.status_code = status.HTTP_401_UNAUTHORIZED

    if response.status_code >= 400:
        if response.status_code == status.HTTP_401_UNAUTHORIZED and not getattr(
            settings, "DEBUG_AUTH_ERRORS", False
        ):
            errors = ["Authentication credentials were not provided or are invalid."]
        else:
            errors = _normalize_errors(response.data)
        response.data = {"data": None, "errors": errors}

    return response
