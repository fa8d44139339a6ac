"""Functions and data structures used to represent and manage imgdeploy
configuration."""
from pathlib import Path
from typing import List, Optional

import toml
from attrs import define, field
from cattrs import structure


@define(frozen=True, kw_only=True)
class EnvironmentConfig:
    """Configuration of the AWS environment.

    Arguments:
        account: the AWS account ID. Resolved from the credentials if missing.
        region: the AWS region. Resolved from the AWS configuration if missing.
        profile: the AWS profile used to resolve the missing values.
    """

    account: Optional[str] = None
    region: Optional[str] = None
    profile: Optional[str] = None


@define(frozen=True, kw_only=True)
class RoleConfig:
    """Configuration of the identity running the deployment.

    Arguments:
        name: the role's name.
    """

    name: str = "image-deploy-handler"


@define(frozen=True, kw_only=True)
class StagingConfig:
    """Configuration of the staging repository used by directory sources.

    Arguments:
        qualifier: distinguishes staging repositories in the same environment.
        exclude: glob patterns of files ignored when fingerprinting.
    """

    qualifier: str = "imgdeploy"
    exclude: List[str] = field(factory=list)


@define(frozen=True, kw_only=True)
class SourceSpec:
    """Describes the source of the deployment.

    Arguments:
        kind: one of `directory`, `ecr` or `asset`.
        path: the build directory, for `directory`.
        repository: the repository name, for `ecr` and `asset`.
        tag: the image tag, for `ecr`.
        image_uri: the full image URI, for `asset`.
    """

    kind: str
    path: Optional[str] = None
    repository: Optional[str] = None
    tag: Optional[str] = None
    image_uri: Optional[str] = None


@define(frozen=True, kw_only=True)
class DestinationSpec:
    """Describes the destination of the deployment.

    Arguments:
        repository: the repository name.
        tag: overrides the source tag.
    """

    repository: str
    tag: Optional[str] = None


@define(frozen=True, kw_only=True)
class Config:
    """imgdeploy's configuration.

    Arguments:
        source: the image to deploy.
        destination: where to deploy the image.
        environment: the AWS environment owning the repositories.
        role: the identity running the deployment.
        staging: the staging repository settings.
    """

    source: SourceSpec
    destination: DestinationSpec
    environment: EnvironmentConfig = field(factory=EnvironmentConfig)
    role: RoleConfig = field(factory=RoleConfig)
    staging: StagingConfig = field(factory=StagingConfig)


def load_config(path: Path | str) -> Config:
    """Loads the configuration from a file.

    Arguments:
        path: configuration file's path.
    """
    config = toml.load(path)

    return structure(config, Config)
