"""Authentication endpoints: register, login, logout, and current user."""

from typing import Any

from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.response import BaseAPIView, api_response
from .serializers import LoginSerializer, ProfileSerializer, RegisterSerializer
from .services import TokenService


class RegisterView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Register a new user and return their profile."""
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return api_response(ProfileSerializer(user).data, status=status.HTTP_201_CREATED)


class LoginView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Authenticate and issue an access token."""
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        return api_response({"access": TokenService.generate_access_token(user)})


class LogoutView(APIView):
    """Invalidate the current access token by blocklisting its jti."""

    permission_classes = [IsAuthenticated]

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        token = _get_bearer_token(request)
        if not token:
            raise AuthenticationFailed("Missing token.")

        payload = TokenService.decode_token(token)
        TokenService.block_token(payload["jti"], payload["exp"])
        return Response(status=status.HTTP_204_NO_CONTENT)


class MeView(BaseAPIView):
    permission_classes = [IsAuthenticated]

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        """Return the current user's profile."""
        return api_response(ProfileSerializer(request.user).data)


def _get_bearer_token(request) -> str | None:
    auth_header = request.META.get("HTTP_AUTHORIZATION", "")
    if auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1]
    return None
