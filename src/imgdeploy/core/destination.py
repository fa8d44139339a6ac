"""Destinations of an image deployment.

Usage:

    destination = Destination.ecr(repository, tag="tag")
    config = destination.bind(role)
"""
import abc
from typing import Optional

from attrs import define, field

from imgdeploy.core.binding import Binding
from imgdeploy.core.errors import InvalidTagError
from imgdeploy.core.grant import Grantable
from imgdeploy.core.login import LoginConfig, LoginType, build_login
from imgdeploy.core.repository import Repository
from imgdeploy.core.tag import validate_tag


@define(frozen=True, kw_only=True)
class DestinationConfig:
    """Destination information resolved by `Destination.bind`.

    Arguments:
        destination_uri: the URI of the repository to deploy to.
        login_config: how to log in to the destination registry.
        destination_tag: the tag of the deployed image. None means the tag
            of the source is reused.
    """

    destination_uri: str
    login_config: LoginConfig
    destination_tag: Optional[str] = None


@define(kw_only=True, eq=False)
class Destination(Binding, abc.ABC):
    """Specifies where the image gets deployed."""

    @staticmethod
    def ecr(repository: Repository, tag: Optional[str] = None) -> "Destination":
        """Uses an ECR repository as the destination.

        Arguments:
            repository: the repository to push to.
            tag: the tag of the deployed image. Defaults to the source tag.

        Raises:
            InvalidTagError: if the tag is not a valid registry tag.
        """
        return EcrDestination(repository=repository, tag=tag)

    def bind(self, role: Grantable) -> DestinationConfig:
        """Grants the role permission to pull and push the image and resolves
        the destination.

        Arguments:
            role: the identity that will push the image.

        Returns:
            The resolved destination.

        Raises:
            AlreadyBound: if the destination has already been bound.
        """
        self._check_unbound()

        config = self._resolve(role)
        self._mark_bound()

        return config

    @abc.abstractmethod
    def _resolve(self, role: Grantable) -> DestinationConfig:
        raise NotImplementedError


@define(kw_only=True, eq=False)
class EcrDestination(Destination):
    """The image is pushed to an ECR repository.

    Arguments:
        repository: the repository to push to.
        tag: optional override of the source tag.
    """

    repository: Repository
    tag: Optional[str] = field(default=None)

    @tag.validator
    def check_tag(self, _, value):
        """Rejects invalid tags before anything gets granted."""
        if value is None:
            return

        result = validate_tag(value)
        if not result.ok:
            raise InvalidTagError(result)

    def _resolve(self, role: Grantable) -> DestinationConfig:
        login_config = build_login(
            self.repository.env.account,
            self.repository.env.region,
            LoginType.ECR,
        )

        self.repository.grant_pull_push(role)

        return DestinationConfig(
            destination_uri=self.repository.uri,
            login_config=login_config,
            destination_tag=self.tag,
        )
