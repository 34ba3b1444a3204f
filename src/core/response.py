"""Response helpers keeping every JSON body in the ``{data, errors}`` envelope."""

from typing import Any

from rest_framework.response import Response
from rest_framework.views import APIView


def api_response(data: Any, status: int = 200) -> Response:
    """Wrap a successful payload as ``{"data": data, "errors": []}``."""

    return Response({"data": data, "errors": []}, status=status)


def _is_enveloped(payload: Any) -> bool:
    return isinstance(payload, dict) and "data" in payload and "errors" in payload


class EnvelopeMixin:
    """Wrap successful responses that were not built with ``api_response``."""

    def finalize_response(self, request, response, *args, **kwargs):  # type: ignore[override]
        if hasattr(response, "data") and response.status_code and response.status_code < 400:
            if response.status_code != 204 and not _is_enveloped(response.data):
                response.data = {"data": response.data, "errors": []}
        return super().finalize_response(request, response, *args, **kwargs)  # type: ignore[attr-defined]


class BaseAPIView(EnvelopeMixin, APIView):
    """APIView whose successful responses always use the standard envelope."""


__all__ = ["api_response", "BaseAPIView"]
