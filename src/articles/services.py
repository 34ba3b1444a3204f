"""Article update orchestration: edit lock, co-author resolution, mutation."""

import logging
from typing import Any, Mapping

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction

from .exceptions import ArticleNotFound, CoAuthorResolutionError, LockConflict, PersistenceFailure, UserNotFound
from .locks import ArticleLockService, find_user
from .models import Article
from .serializers import ArticlePatchSerializer

logger = logging.getLogger(__name__)

User = get_user_model()

# Creation timestamps are fixed once the article exists; callers that echo
# them back are not an error.
IMMUTABLE_FIELDS = ("createdAt", "created_at")


class ArticleService:
    """Apply an edit to an article while holding its edit lock."""

    @classmethod
    def update_article(cls, user_id, slug: str, data: Mapping[str, Any]) -> Article:
        """Update ``slug`` on behalf of ``user_id`` and return the saved article.

        Raises ``UserNotFound`` / ``ArticleNotFound`` for unknown ids,
        ``LockConflict`` when someone else is editing, and
        ``CoAuthorResolutionError`` when a co-author email is unknown. In the
        last two cases nothing is written.
        """

        payload = {key: value for key, value in data.items() if key not in IMMUTABLE_FIELDS}
        serializer = ArticlePatchSerializer(data=payload)
        serializer.is_valid(raise_exception=True)
        patch = dict(serializer.validated_data)

        user = find_user(user_id)
        if user is None:
            raise UserNotFound(user_id)
        article = Article.objects.select_related("author").filter(slug=slug).first()
        if article is None:
            raise ArticleNotFound(slug)

        if not ArticleLockService.acquire(slug, user.pk):
            raise LockConflict(slug)

        try:
            co_authors = cls._resolve_co_authors(article, user, patch.pop("co_authors", None))
            cls._apply(article, patch, co_authors)
        finally:
            cls._release_quietly(slug)

        return article

    @staticmethod
    def _resolve_co_authors(article: Article, user, raw: str | None) -> list | None:
        """Turn the raw ``coAuthors`` input into the new co-author list.

        ``None`` means leave co-authors as they are. An empty list means clear
        them, which only the article's author can ask for, by sending a blank
        value.
        """

        if raw is None:
            return None
        if not raw.strip():
            return [] if article.author_id == user.pk else None

        resolved = []
        seen: set[str] = set()
        for email in (item.strip() for item in raw.split(",")):
            # Empty items from stray commas are skipped, not looked up.
            if not email or email.lower() in seen:
                continue
            seen.add(email.lower())
            co_author = User.objects.filter(email__iexact=email).first()
            if co_author is None:
                raise CoAuthorResolutionError(email)
            if co_author.pk != article.author_id:
                resolved.append(co_author)

        return resolved or None

    @staticmethod
    def _apply(article: Article, patch: dict[str, Any], co_authors: list | None) -> None:
        for field, value in patch.items():
            setattr(article, field, value)

        try:
            with transaction.atomic():
                article.save(update_fields=[*patch.keys(), "updated_at"])
                if co_authors is not None:
                    # set() reads the stored relation before diffing.
                    article.co_authors.set(co_authors)
        except DatabaseError as exc:
            logger.exception("Saving article %s failed", article.slug)
            raise PersistenceFailure(f"Article '{article.slug}' could not be saved.") from exc

    @staticmethod
    def _release_quietly(slug: str) -> None:
        try:
            released = ArticleLockService.release(slug)
        except DatabaseError:
            logger.warning("Releasing edit lock on %s failed", slug, exc_info=True)
            return
        if not released:
            logger.warning("Edit lock on %s was not released; article no longer exists", slug)


__all__ = ["ArticleService"]
