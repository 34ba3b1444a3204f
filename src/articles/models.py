"""Article, its co-authors, and the per-article edit lock."""

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.text import slugify


class Article(models.Model):
    """Article owned by one author and optionally shared with co-authors.

    The author is never also a co-author; ``ArticleService`` strips the
    author out before the co-author set is written.
    """

    slug = models.SlugField(max_length=255, unique=True)
    title = models.CharField(max_length=255)
    description = models.CharField(max_length=255, blank=True)
    body = models.TextField()
    tag_list = models.JSONField(default=list, blank=True)
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="articles")
    co_authors = models.ManyToManyField(
        settings.AUTH_USER_MODEL, related_name="co_authored_articles", blank=True
    )
    favorites_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = f"{slugify(self.title)[:240]}-{uuid.uuid4().hex[:6]}"
        super().save(*args, **kwargs)


class ArticleLock(models.Model):
    """Exclusive edit intent on one article until ``lock_expiration``.

    Rows are created, renewed, and deleted only by ``ArticleLockService``.
    The one-to-one link gives the at-most-one-lock-per-article guarantee a
    database unique constraint.
    """

    article = models.OneToOneField(Article, on_delete=models.CASCADE, related_name="edit_lock")
    locked_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="article_locks")
    lock_expiration = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.article_id} locked by {self.locked_by_id} until {self.lock_expiration:%Y-%m-%d %H:%M:%S}"

    def is_expired(self, now=None) -> bool:
        """True once the expiration lies strictly in the past."""
        return self.lock_expiration < (now or timezone.now())


__all__ = ["Article", "ArticleLock"]
