"""Middleware resolving ``request.user`` from a bearer access token."""

from typing import Optional

from django.contrib.auth.models import AnonymousUser
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed

from authentication.models import User
from authentication.services import BlocklistUnavailable, TokenService


class JWTAuthMiddleware(MiddlewareMixin):
    """Decode the access JWT, consult the blocklist, and attach the user.

    Requests without a bearer header stay anonymous; endpoints decide on
    their own whether that is acceptable. A header that is present but
    invalid, revoked, or bound to an inactive user is rejected with 401.
    """

    def process_request(self, request):  # type: ignore[override]
        auth_header = request.META.get("HTTP_AUTHORIZATION", "")
        if not auth_header or not auth_header.startswith("Bearer "):
            request.user = AnonymousUser()
            return None

        token = auth_header.split(" ", 1)[1]

        try:
            payload = TokenService.decode_token(token)
            jti = payload.get("jti")
            if not jti or TokenService.is_token_blocked(jti):
                return _unauthorized()

            user = self._get_user(payload.get("sub"))
            if not user or not user.is_active:
                return _unauthorized()

            request.user = user
            return None

        except AuthenticationFailed:
            return _unauthorized()
        except BlocklistUnavailable:
            return _service_unavailable()

    @staticmethod
    def _get_user(user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        return User.objects.filter(pk=user_id).first()


def _unauthorized() -> JsonResponse:
    return JsonResponse(
        {
            "data": None,
            "errors": ["Authentication credentials are invalid, revoked, or belong to an inactive user."],
        },
        status=status.HTTP_401_UNAUTHORIZED,
    )


def _service_unavailable() -> JsonResponse:
    return JsonResponse(
        {"data": None, "errors": ["Authentication service unavailable (blocklist)."]},
        status=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


__all__ = ["JWTAuthMiddleware"]
