"""Typed failures raised by the lock manager and the update coordinator.

``core.exceptions.custom_exception_handler`` maps each class to its own HTTP
status so callers can tell "someone else is editing" from "unknown user".
"""


class ArticleEditError(Exception):
    """Base class for expected, caller-recoverable edit failures."""

    default_message = "Article edit failed."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class NotFound(ArticleEditError):
    default_message = "Resource not found."


class ArticleNotFound(NotFound):
    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Article '{slug}' not found")


class UserNotFound(NotFound):
    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class LockConflict(ArticleEditError):
    """A different user holds a valid edit lock on the article."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Article '{slug}' is being edited by another user")


class CoAuthorResolutionError(ArticleEditError):
    """A co-author email does not belong to any user."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"User with email {email} not found")


class PersistenceFailure(ArticleEditError):
    default_message = "Article could not be saved."


__all__ = [
    "ArticleEditError",
    "NotFound",
    "ArticleNotFound",
    "UserNotFound",
    "LockConflict",
    "CoAuthorResolutionError",
    "PersistenceFailure",
]
