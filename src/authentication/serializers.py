"""Serializers for registration, login, and profile payloads."""

from typing import cast

from django.contrib.auth import get_user_model
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed

from .managers import UserManager

User = get_user_model()


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(write_only=True, min_length=8)
    repeat_password = serializers.CharField(write_only=True, min_length=8)
    bio = serializers.CharField(required=False, allow_blank=True)
    image = serializers.URLField(required=False, allow_blank=True)

    @staticmethod
    def validate_email(value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email already in use")
        return value

    @staticmethod
    def validate_username(value):
        if User.objects.filter(username=value).exists():
            raise serializers.ValidationError("Username already in use")
        return value

    def validate(self, attrs):
        if attrs.get("password") != attrs.get("repeat_password"):
            raise serializers.ValidationError("Passwords do not match")
        return attrs

    def create(self, validated_data):
        validated_data.pop("repeat_password")
        manager = cast(UserManager, User.objects)
        return manager.create_user(**validated_data)


class LoginSerializer(serializers.Serializer):
    """Check email/password and attach the matching active user."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        user = User.objects.filter(email__iexact=attrs.get("email")).first()
        if user is None:
            raise AuthenticationFailed("Invalid credentials")
        if not user.is_active:
            raise AuthenticationFailed("User is inactive")
        if not UserManager.verify_password(user, attrs.get("password")):
            raise AuthenticationFailed("Invalid credentials")

        attrs["user"] = user
        return attrs


class ProfileSerializer(serializers.ModelSerializer):
    """Public profile used for the current user, authors, and co-authors."""

    class Meta:
        model = User
        fields = ["username", "email", "bio", "image"]
        read_only_fields = fields


__all__ = ["RegisterSerializer", "LoginSerializer", "ProfileSerializer"]
