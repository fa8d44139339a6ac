"""Errors raised while describing and binding image sources and
destinations."""
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from imgdeploy.core.tag import ValidationResult


class InvalidTagError(ValueError):
    """Raised when a destination tag does not satisfy the registry tag
    rules."""

    def __init__(self, result: "ValidationResult"):
        super().__init__(result.message)

        self.result = result


class MalformedImageReference(ValueError):
    """Raised when a resolved image URI cannot be split into repository and
    tag."""

    def __init__(self, uri: str, reason: str):
        super().__init__(f"malformed image reference {uri!r}: {reason}")

        self.uri = uri
        self.reason = reason


class AlreadyBound(RuntimeError):
    """Raised when `bind` is called more than once on the same source or
    destination."""
