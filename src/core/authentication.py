"""DRF authenticator that trusts the user resolved by ``JWTAuthMiddleware``.

Bearer tokens are decoded once, in middleware, so that plain Django views
and DRF views see the same ``request.user``. This class only hands that user
over to DRF's ``Request``.
"""

from typing import Any, Optional, Tuple

from django.contrib.auth.models import AnonymousUser
from rest_framework.authentication import BaseAuthentication


class MiddlewareUserAuthentication(BaseAuthentication):
    """Surface ``request._request.user`` to DRF, or skip when anonymous."""

    def authenticate(self, request) -> Optional[Tuple[Any, None]]:
        django_request = getattr(request, "_request", None)
        if django_request is None:
            return None

        user = getattr(django_request, "user", None)
        if user is None or isinstance(user, AnonymousUser):
            return None
        if not getattr(user, "is_authenticated", False):
            return None

        return user, None

    def authenticate_header(self, request) -> str:
        return "Bearer"


__all__ = ["MiddlewareUserAuthentication"]
