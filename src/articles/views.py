"""Article read/update endpoints and the edit-lock resource."""

from collections.abc import Mapping

from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response

from core.response import BaseAPIView, api_response
from .exceptions import ArticleNotFound, LockConflict
from .locks import ArticleLockService
from .models import Article
from .serializers import ArticleLockSerializer, ArticleSerializer
from .services import ArticleService


def _get_article(slug: str) -> Article:
    article = Article.objects.select_related("author").prefetch_related("co_authors").filter(slug=slug).first()
    if article is None:
        raise ArticleNotFound(slug)
    return article


def _lock_payload(slug: str) -> dict:
    lock = ArticleLockService.current_lock(slug)
    return {"locked": lock is not None, "lock": ArticleLockSerializer(lock).data if lock else None}


class ArticleDetailView(BaseAPIView):
    permission_classes = [IsAuthenticatedOrReadOnly]

    # noinspection PyMethodMayBeStatic
    def get(self, request, slug: str):
        return api_response(ArticleSerializer(_get_article(slug)).data)

    # noinspection PyMethodMayBeStatic
    def put(self, request, slug: str):
        """Edit the article under its edit lock.

        Accepts the fields either at the top level or nested under
        ``"article"``.
        """
        data = request.data
        if not isinstance(data, Mapping):
            raise ParseError("Expected a JSON object.")
        if isinstance(data.get("article"), Mapping):
            data = data["article"]

        ArticleService.update_article(request.user.pk, slug, data)
        return api_response(ArticleSerializer(_get_article(slug)).data)

    patch = put


class ArticleLockView(BaseAPIView):
    """Inspect, take, or drop the edit lock on an article."""

    permission_classes = [IsAuthenticated]

    # noinspection PyMethodMayBeStatic
    def get(self, request, slug: str):
        _get_article(slug)
        return api_response(_lock_payload(slug))

    # noinspection PyMethodMayBeStatic
    def post(self, request, slug: str):
        """Acquire the lock, or extend it when the caller already holds it."""
        _get_article(slug)
        if not ArticleLockService.acquire(slug, request.user.pk):
            raise LockConflict(slug)
        return api_response(_lock_payload(slug))

    # noinspection PyMethodMayBeStatic
    def delete(self, request, slug: str):
        """Drop the caller's lock. A valid lock held by someone else stays put."""
        lock = ArticleLockService.current_lock(slug)
        if lock is not None and lock.locked_by_id != request.user.pk:
            raise LockConflict(slug)
        if not ArticleLockService.release(slug):
            raise ArticleNotFound(slug)
        return Response(status=status.HTTP_204_NO_CONTENT)


__all__ = ["ArticleDetailView", "ArticleLockView"]
