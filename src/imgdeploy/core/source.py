"""Sources of an image deployment.

Usage:

    source = Source.directory("path/to/directory")
    config = source.bind(BindContext(handler_role=role, packager=packager))
"""
import abc
from typing import Optional

from attrs import define

from imgdeploy.core.binding import Binding
from imgdeploy.core.errors import MalformedImageReference
from imgdeploy.core.grant import Grantable
from imgdeploy.core.login import LoginConfig, LoginType, build_login
from imgdeploy.core.packaging import AssetPackager
from imgdeploy.core.repository import ImageAsset, Repository
from imgdeploy.core.tag import extract_tag


@define(frozen=True, kw_only=True)
class SourceConfig:
    """Source information resolved by `Source.bind`.

    Arguments:
        image_uri: the source image URI.
        image_tag: the source tag.
        login_config: how to log in to the source registry.
    """

    image_uri: str
    image_tag: str
    login_config: LoginConfig


@define(frozen=True, kw_only=True)
class BindContext:
    """Data needed to bind a source.

    Arguments:
        handler_role: the identity that will pull the image.
        packager: packages local directories. Required by directory sources.
    """

    handler_role: Grantable
    packager: Optional[AssetPackager] = None


def _ecr_login(repository: Repository) -> LoginConfig:
    return build_login(repository.env.account, repository.env.region, LoginType.ECR)


@define(kw_only=True, eq=False)
class Source(Binding, abc.ABC):
    """Specifies where the image to deploy comes from."""

    @staticmethod
    def directory(path: str) -> "Source":
        """Uses an image built from a local directory as the source.

        Arguments:
            path: the directory containing the Dockerfile (not a path to a file).
        """
        return DirectorySource(path=path)

    @staticmethod
    def ecr(repository: Repository, tag: str) -> "Source":
        """Uses a tagged image in an existing ECR repository as the source."""
        return EcrSource(repository=repository, tag=tag)

    @staticmethod
    def asset(asset: ImageAsset) -> "Source":
        """Uses an already packaged image asset as the source."""
        return AssetSource(asset=asset)

    def bind(self, ctx: BindContext) -> SourceConfig:
        """Grants the handler role permission to pull the image and resolves
        the source.

        Arguments:
            ctx: the bind context.

        Returns:
            The resolved source.

        Raises:
            AlreadyBound: if the source has already been bound.
            MalformedImageReference: if the resolved image URI has no tag.
        """
        self._check_unbound()

        config = self._resolve(ctx)
        self._mark_bound()

        return config

    @abc.abstractmethod
    def _resolve(self, ctx: BindContext) -> SourceConfig:
        raise NotImplementedError


def _resolve_asset(asset: ImageAsset, ctx: BindContext) -> SourceConfig:
    image_tag = extract_tag(asset.image_uri)
    login_config = _ecr_login(asset.repository)

    asset.repository.grant_pull(ctx.handler_role)

    return SourceConfig(
        image_uri=asset.image_uri,
        image_tag=image_tag,
        login_config=login_config,
    )


@define(kw_only=True, eq=False)
class DirectorySource(Source):
    """The image is built from a local directory.

    Arguments:
        path: the directory containing the Dockerfile.
    """

    path: str

    def _resolve(self, ctx: BindContext) -> SourceConfig:
        if ctx.packager is None:
            raise ValueError(f"a packager is needed to bind the directory source {self.path}")

        return _resolve_asset(ctx.packager.package(self.path), ctx)


@define(kw_only=True, eq=False)
class EcrSource(Source):
    """The image is already in an ECR repository.

    Arguments:
        repository: the repository holding the image.
        tag: the image's tag.
    """

    repository: Repository
    tag: str

    def _resolve(self, ctx: BindContext) -> SourceConfig:
        image_uri = self.repository.uri_for_tag(self.tag)
        if not self.tag:
            raise MalformedImageReference(image_uri, "empty tag")

        login_config = _ecr_login(self.repository)
        self.repository.grant_pull(ctx.handler_role)

        return SourceConfig(
            image_uri=image_uri,
            image_tag=self.tag,
            login_config=login_config,
        )


@define(kw_only=True, eq=False)
class AssetSource(Source):
    """The image has already been packaged as an asset.

    Arguments:
        asset: the packaged image.
    """

    asset: ImageAsset

    def _resolve(self, ctx: BindContext) -> SourceConfig:
        return _resolve_asset(self.asset, ctx)
