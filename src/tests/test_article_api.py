"""HTTP behaviour of the article and edit-lock endpoints."""

from __future__ import annotations

from datetime import timedelta
from unittest import mock

from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from articles.locks import ArticleLockService
from articles.models import Article, ArticleLock
from tests.utils import FakeRedis, auth_client, create_article, create_user


class ArticleApiTests(TestCase):
    """Status codes and envelopes for read, update, and lock operations."""

    @classmethod
    def setUpClass(cls):
        """Patch Redis clients to use the in-memory fake."""
        super().setUpClass()
        cls.fake_redis = FakeRedis()
        cls.patchers = [
            mock.patch("core.redis_client.get_redis_client", return_value=cls.fake_redis),
            mock.patch("authentication.services.get_redis_client", return_value=cls.fake_redis),
        ]
        for patcher in cls.patchers:
            patcher.start()

    @classmethod
    def tearDownClass(cls):
        for patcher in cls.patchers:
            patcher.stop()
        super().tearDownClass()

    @classmethod
    def setUpTestData(cls):
        cls.author = create_user("author@x.com", "author")
        cls.editor = create_user("editor@x.com", "editor")
        cls.article = create_article(cls.author)
        cls.article.co_authors.add(cls.editor)

    def setUp(self):
        self.author_client = auth_client(self.author)
        self.editor_client = auth_client(self.editor)

    def test_get_article_is_public(self):
        response = APIClient().get("/articles/x-slug/")
        body = response.json()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["errors"], [])
        self.assertEqual(body["data"]["title"], "Old")
        self.assertEqual(body["data"]["author"]["username"], "author")
        self.assertEqual([p["email"] for p in body["data"]["coAuthors"]], ["editor@x.com"])

    def test_get_unknown_article_returns_404(self):
        response = APIClient().get("/articles/missing/")

        self.assertEqual(response.status_code, 404)
        self.assertIsNone(response.json()["data"])

    def test_update_requires_authentication(self):
        response = APIClient().put("/articles/x-slug/", {"title": "New"}, format="json")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(Article.objects.get(pk=self.article.pk).title, "Old")

    def test_update_returns_representation(self):
        response = self.author_client.put("/articles/x-slug/", {"title": "New"}, format="json")
        body = response.json()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["data"]["title"], "New")
        self.assertFalse(ArticleLock.objects.exists())

    def test_update_accepts_nested_article_payload(self):
        response = self.author_client.patch(
            "/articles/x-slug/", {"article": {"body": "Nested", "coAuthors": ""}}, format="json"
        )
        body = response.json()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["data"]["body"], "Nested")
        self.assertEqual(body["data"]["coAuthors"], [])

    def test_update_while_locked_by_other_returns_423(self):
        ArticleLockService.acquire("x-slug", self.author.pk)

        response = self.editor_client.put("/articles/x-slug/", {"title": "Mine"}, format="json")
        body = response.json()

        self.assertEqual(response.status_code, 423)
        self.assertIsNone(body["data"])
        self.assertIn("being edited", body["errors"][0])

    def test_unknown_co_author_returns_400_naming_email(self):
        response = self.author_client.put(
            "/articles/x-slug/", {"title": "New", "coAuthors": "ghost@x.com"}, format="json"
        )
        body = response.json()

        self.assertEqual(response.status_code, 400)
        self.assertEqual(body["errors"], ["User with email ghost@x.com not found"])
        self.assertEqual(Article.objects.get(pk=self.article.pk).title, "Old")

    def test_unknown_field_returns_400(self):
        response = self.author_client.put("/articles/x-slug/", {"favoritesCount": 99}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertTrue(response.json()["errors"])

    def test_update_unknown_article_returns_404(self):
        response = self.author_client.put("/articles/missing/", {"title": "New"}, format="json")

        self.assertEqual(response.status_code, 404)

    def test_lock_lifecycle(self):
        lock_response = self.author_client.post("/articles/x-slug/lock/")
        self.assertEqual(lock_response.status_code, 200)
        self.assertTrue(lock_response.json()["data"]["locked"])
        self.assertEqual(lock_response.json()["data"]["lock"]["lockedBy"], "author")

        conflict = self.editor_client.post("/articles/x-slug/lock/")
        self.assertEqual(conflict.status_code, 423)

        status_response = self.editor_client.get("/articles/x-slug/lock/")
        self.assertEqual(status_response.status_code, 200)
        self.assertEqual(status_response.json()["data"]["lock"]["lockedBy"], "author")

        self.assertEqual(self.author_client.delete("/articles/x-slug/lock/").status_code, 204)
        self.assertEqual(self.author_client.delete("/articles/x-slug/lock/").status_code, 204)

        unlocked = self.editor_client.get("/articles/x-slug/lock/").json()["data"]
        self.assertEqual(unlocked, {"locked": False, "lock": None})

    def test_non_holder_cannot_release_valid_lock(self):
        ArticleLockService.acquire("x-slug", self.author.pk)

        response = self.editor_client.delete("/articles/x-slug/lock/")

        self.assertEqual(response.status_code, 423)
        self.assertIsNone(response.json()["data"])
        self.assertEqual(ArticleLock.objects.get(article=self.article).locked_by, self.author)

        blocked = self.editor_client.put("/articles/x-slug/", {"title": "Hijacked"}, format="json")
        self.assertEqual(blocked.status_code, 423)
        self.assertEqual(Article.objects.get(pk=self.article.pk).title, "Old")

    def test_expired_lock_of_other_user_can_be_released(self):
        ArticleLockService.acquire("x-slug", self.author.pk)
        ArticleLock.objects.filter(article=self.article).update(
            lock_expiration=timezone.now() - timedelta(minutes=1)
        )

        response = self.editor_client.delete("/articles/x-slug/lock/")

        self.assertEqual(response.status_code, 204)
        self.assertFalse(ArticleLock.objects.exists())

    def test_lock_renewal_by_holder_succeeds(self):
        self.assertEqual(self.author_client.post("/articles/x-slug/lock/").status_code, 200)
        self.assertEqual(self.author_client.post("/articles/x-slug/lock/").status_code, 200)
        self.assertEqual(ArticleLock.objects.count(), 1)

    def test_lock_endpoints_on_unknown_article_return_404(self):
        self.assertEqual(self.author_client.post("/articles/missing/lock/").status_code, 404)
        self.assertEqual(self.author_client.delete("/articles/missing/lock/").status_code, 404)

    def test_lock_requires_authentication(self):
        response = APIClient().post("/articles/x-slug/lock/")

        self.assertEqual(response.status_code, 401)
        self.assertFalse(ArticleLock.objects.exists())
