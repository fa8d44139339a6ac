"""Validation and extraction of image tags."""
import enum
import re
from typing import Optional

from attrs import define

from imgdeploy.core.errors import MalformedImageReference

__all__ = ["MAX_TAG_LENGTH", "TagError", "ValidationResult", "extract_tag", "validate_tag"]

MAX_TAG_LENGTH = 128

_TAG_PATTERN = re.compile(r"[A-Za-z0-9_][A-Za-z0-9_.-]*")


@enum.unique
class TagError(enum.Enum):
    """Describes why a tag has been rejected.

    Attributes:

    * `TOO_LONG`: the tag has more than 128 characters.
    * `INVALID_CHARACTERS`: the tag starts with `-` or `.`, it's empty or
      it contains characters other than alphanumerics, `_`, `.` and `-`.
    """

    TOO_LONG = "TOO_LONG"
    INVALID_CHARACTERS = "INVALID_CHARACTERS"


@define(frozen=True, kw_only=True)
class ValidationResult:
    """Outcome of a tag validation.

    Arguments:
        tag: the validated tag.
        error: the rule violated by the tag. None if the tag is valid.
    """

    tag: str
    error: Optional[TagError] = None

    @property
    def ok(self) -> bool:
        """True if the tag satisfies all the rules."""
        return self.error is None

    @property
    def message(self) -> str:
        """Human readable description of the outcome."""
        if self.error is TagError.TOO_LONG:
            return (
                f"invalid tag: tags may contain a maximum of {MAX_TAG_LENGTH} characters; "
                f"your tag {self.tag} has {len(self.tag)} characters"
            )

        if self.error is TagError.INVALID_CHARACTERS:
            return (
                "invalid tag: tags must contain alphanumeric characters and '-' '_' '.' only "
                f"and must not begin with '.' or '-'; your tag was {self.tag!r}"
            )

        return f"valid tag {self.tag}"


def validate_tag(tag: str) -> ValidationResult:
    """Checks a tag against the registry tag rules.

    The length is checked before the characters, so a tag breaking both
    rules is reported as too long.

    Arguments:
        tag: the tag to validate.

    Returns:
        The validation outcome.
    """
    if len(tag) > MAX_TAG_LENGTH:
        return ValidationResult(tag=tag, error=TagError.TOO_LONG)

    if not _TAG_PATTERN.fullmatch(tag):
        return ValidationResult(tag=tag, error=TagError.INVALID_CHARACTERS)

    return ValidationResult(tag=tag)


def extract_tag(uri: str) -> str:
    """Extracts the tag from a full image URI.

    Only the last path segment is considered, so a registry host with a port
    (i.e. `registry.example.com:5000/repo/image:v1`) is not mistaken for the
    tag separator.

    Arguments:
        uri: the image URI including its tag.

    Returns:
        The tag.

    Raises:
        MalformedImageReference: if the URI is empty, it embeds credentials
            or it has no tag.
    """
    if not uri:
        raise MalformedImageReference(uri, "empty URI")

    host = uri.partition("/")[0]
    if "@" in host:
        raise MalformedImageReference(uri, "URI must not embed credentials")

    last_segment = uri.rpartition("/")[2]
    if "@" in last_segment:
        raise MalformedImageReference(uri, "digest references have no tag")

    if ":" not in last_segment:
        raise MalformedImageReference(uri, "missing tag separator ':'")

    tag = last_segment.rpartition(":")[2]
    if not tag:
        raise MalformedImageReference(uri, "empty tag")

    return tag
