"""Time-boxed per-article edit locks.

Every decision runs inside one transaction that holds a row lock on the
article, so two concurrent acquires on the same article are serialized and
cannot both observe "no valid lock". On databases without row locks the
one-to-one constraint on ``ArticleLock.article`` rejects the second insert.
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.utils import timezone

from .models import Article, ArticleLock

logger = logging.getLogger(__name__)

User = get_user_model()


def find_user(user_id):
    """The user with primary key ``user_id``, or None when absent or malformed."""
    try:
        return User.objects.filter(pk=user_id).first()
    except (ValueError, TypeError):
        return None


class ArticleLockService:
    """Grant, renew, release, and reclaim article edit locks."""

    @classmethod
    def ttl(cls) -> timedelta:
        return timedelta(seconds=settings.ARTICLE_LOCK_TTL_SECONDS)

    @classmethod
    def acquire(cls, slug: str, user_id) -> bool:
        """Lock ``slug`` for ``user_id``, or renew the user's own lock.

        Returns False, without touching any row, when the article or user is
        missing or when another user holds a lock that has not expired.
        """

        with transaction.atomic():
            article = Article.objects.select_for_update().filter(slug=slug).first()
            user = find_user(user_id)
            if article is None or user is None:
                return False

            now = timezone.now()
            expires_at = now + cls.ttl()
            existing = ArticleLock.objects.filter(article=article).first()

            if existing is None or existing.is_expired(now):
                if existing is not None:
                    logger.info(
                        "Reclaiming expired lock on %s held by user %s", slug, existing.locked_by_id
                    )
                    existing.delete()
                try:
                    with transaction.atomic():
                        ArticleLock.objects.create(article=article, locked_by=user, lock_expiration=expires_at)
                except IntegrityError:
                    logger.info("Lost lock race on %s for user %s", slug, user.pk)
                    return False
                logger.debug("User %s locked %s until %s", user.pk, slug, expires_at)
                return True

            if existing.locked_by_id == user.pk:
                existing.lock_expiration = expires_at
                existing.save(update_fields=["lock_expiration"])
                logger.debug("User %s renewed lock on %s until %s", user.pk, slug, expires_at)
                return True

            logger.info(
                "User %s denied lock on %s; held by user %s until %s",
                user.pk,
                slug,
                existing.locked_by_id,
                existing.lock_expiration,
            )
            return False

    @classmethod
    def release(cls, slug: str) -> bool:
        """Drop the lock on ``slug``. False only when the article does not exist."""

        with transaction.atomic():
            article = Article.objects.select_for_update().filter(slug=slug).first()
            if article is None:
                return False
            deleted, _ = ArticleLock.objects.filter(article=article).delete()

        if deleted:
            logger.debug("Released lock on %s", slug)
        return True

    @classmethod
    def current_lock(cls, slug: str) -> ArticleLock | None:
        """The unexpired lock on ``slug``, if any."""

        lock = ArticleLock.objects.select_related("locked_by").filter(article__slug=slug).first()
        if lock is None or lock.is_expired():
            return None
        return lock

    @classmethod
    def purge_expired(cls) -> int:
        """Delete every expired lock row and return how many went away."""

        deleted, _ = ArticleLock.objects.filter(lock_expiration__lt=timezone.now()).delete()
        if deleted:
            logger.info("Purged %d expired article locks", deleted)
        return deleted


__all__ = ["ArticleLockService"]
