"""Shared helpers for tests (users, articles, authenticated clients, fake Redis)."""

from __future__ import annotations

from typing import Dict

from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from articles.models import Article
from authentication.managers import UserManager
from authentication.services import TokenService

User = get_user_model()


class FakeRedis:
    """Minimal Redis stub supporting the commands used by TokenService."""

    def __init__(self):
        self._store: Dict[str, str] = {}

    def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        """Mimic Redis SETEX; TTL is ignored in tests, value stored in-memory."""
        self._store[key] = value

    def get(self, key: str):
        return self._store.get(key)


def create_user(email: str, username: str, password: str = "Password123", **extra):
    """Create a user with a bcrypt-hashed password for tests."""

    return User.objects.create(
        email=email,
        username=username,
        password_hash=UserManager.hash_password(password),
        **extra,
    )


def create_article(author, title: str = "Old", slug: str = "x-slug", **extra) -> Article:
    extra.setdefault("description", "About the article")
    extra.setdefault("body", "Original body")
    return Article.objects.create(author=author, title=title, slug=slug, **extra)


def auth_client(user) -> APIClient:
    """Return an APIClient carrying a fresh access token for ``user``."""
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {TokenService.generate_access_token(user)}")
    return client
