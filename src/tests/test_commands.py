"""Management commands: demo seeding and expired-lock purging."""

from __future__ import annotations

from datetime import timedelta
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase
from django.utils import timezone

from articles.models import Article, ArticleLock
from tests.utils import create_article, create_user


class SeedDemoCommandTests(TestCase):
    def test_seed_is_idempotent(self):
        call_command("seed_demo", stdout=StringIO())
        call_command("seed_demo", stdout=StringIO())

        self.assertEqual(get_user_model().objects.count(), 3)
        self.assertEqual(Article.objects.count(), 3)
        shared = Article.objects.get(title="Locking for editors")
        self.assertEqual(list(shared.co_authors.values_list("username", flat=True)), ["bob"])

    def test_reset_recreates_demo_data(self):
        call_command("seed_demo", stdout=StringIO())
        first_ids = set(Article.objects.values_list("pk", flat=True))

        call_command("seed_demo", "--reset", stdout=StringIO())

        self.assertEqual(Article.objects.count(), 3)
        self.assertTrue(first_ids.isdisjoint(Article.objects.values_list("pk", flat=True)))


class PurgeExpiredLocksCommandTests(TestCase):
    def test_purges_only_expired_locks(self):
        user = create_user("holder@x.com", "holder")
        stale = create_article(user, title="Stale", slug="stale")
        live = create_article(user, title="Live", slug="live")
        now = timezone.now()
        ArticleLock.objects.create(article=stale, locked_by=user, lock_expiration=now - timedelta(minutes=1))
        ArticleLock.objects.create(article=live, locked_by=user, lock_expiration=now + timedelta(minutes=4))

        out = StringIO()
        call_command("purge_expired_locks", stdout=out)

        self.assertIn("Purged 1 expired lock(s).", out.getvalue())
        self.assertEqual(list(ArticleLock.objects.values_list("article__slug", flat=True)), ["live"])
