"""Article representation and the whitelisted patch accepted on update."""

from rest_framework import serializers

from authentication.serializers import ProfileSerializer
from .models import Article, ArticleLock


class TagListField(serializers.ListField):
    """List of tag strings; a comma-separated string is accepted as well."""

    child = serializers.CharField(max_length=64)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = [tag.strip() for tag in data.split(",") if tag.strip()]
        return super().to_internal_value(data)


class ArticleSerializer(serializers.ModelSerializer):
    """Public, read-only article payload."""

    tagList = serializers.ListField(source="tag_list", child=serializers.CharField(), read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    favoritesCount = serializers.IntegerField(source="favorites_count", read_only=True)
    author = ProfileSerializer(read_only=True)
    coAuthors = ProfileSerializer(source="co_authors", many=True, read_only=True)

    class Meta:
        model = Article
        fields = [
            "slug",
            "title",
            "description",
            "body",
            "tagList",
            "createdAt",
            "updatedAt",
            "favoritesCount",
            "author",
            "coAuthors",
        ]
        read_only_fields = fields


class ArticlePatchSerializer(serializers.Serializer):
    """Fields a caller may change on an article, and nothing else.

    ``coAuthors`` stays a raw comma-separated email string here; resolving it
    to users is ``ArticleService``'s job because it needs the article and the
    requesting user.
    """

    title = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True)
    body = serializers.CharField(required=False)
    tagList = TagListField(source="tag_list", required=False)
    coAuthors = serializers.CharField(source="co_authors", required=False, allow_blank=True, allow_null=True)

    def validate(self, attrs):
        """Reject keys outside the whitelist instead of silently dropping them."""
        unknown = sorted(set(getattr(self, "initial_data", {})) - set(self.fields))
        if unknown:
            raise serializers.ValidationError(f"Unknown or read-only fields: {', '.join(unknown)}")
        return attrs


class ArticleLockSerializer(serializers.ModelSerializer):
    lockedBy = serializers.CharField(source="locked_by.username", read_only=True)
    expiresAt = serializers.DateTimeField(source="lock_expiration", read_only=True)

    class Meta:
        model = ArticleLock
        fields = ["lockedBy", "expiresAt"]
        read_only_fields = fields


__all__ = ["ArticleSerializer", "ArticlePatchSerializer", "ArticleLockSerializer"]
