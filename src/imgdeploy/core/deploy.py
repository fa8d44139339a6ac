"""Builds and binds the source and destination described by the
configuration."""
import os
from pathlib import Path
from typing import List, Optional

from attrs import define

from imgdeploy.core.config import Config, SourceSpec
from imgdeploy.core.destination import Destination, DestinationConfig
from imgdeploy.core.environment import Environment, resolve_environment
from imgdeploy.core.grant import Role
from imgdeploy.core.job import ImageDeployJob
from imgdeploy.core.packaging import StagingAssetPackager
from imgdeploy.core.repository import ImageAsset, Repository
from imgdeploy.core.source import BindContext, Source, SourceConfig
from imgdeploy.utils import log


@define(frozen=True, kw_only=True)
class Deployment:
    """Everything the orchestrator needs to run an image deployment.

    Arguments:
        role: the role with all the grants issued while binding.
        source: the resolved source.
        destination: the resolved destination.
        job: the build job copying the image.
        assets: the assets packaged for directory sources.
    """

    role: Role
    source: SourceConfig
    destination: DestinationConfig
    job: ImageDeployJob
    assets: List[ImageAsset]


def _require(spec: SourceSpec, *names: str):
    missing = [name for name in names if getattr(spec, name) is None]
    if missing:
        raise ValueError(f"source of kind {spec.kind} requires {', '.join(missing)}")


def make_source(spec: SourceSpec, env: Environment, base_path: Path | str = ".") -> Source:
    """Creates the source described by the configuration.

    Arguments:
        spec: the source description.
        env: the environment owning the repositories.
        base_path: directory relative build paths are resolved against.

    Raises:
        ValueError: if the kind is unknown or a required field is missing.
    """
    match spec.kind:
        case "directory":
            _require(spec, "path")
            return Source.directory(os.path.join(base_path, spec.path))

        case "ecr":
            _require(spec, "repository", "tag")
            return Source.ecr(Repository(name=spec.repository, env=env), spec.tag)

        case "asset":
            _require(spec, "repository", "image_uri")
            return Source.asset(
                ImageAsset(
                    repository=Repository(name=spec.repository, env=env),
                    image_uri=spec.image_uri,
                )
            )

        case _:
            raise ValueError(f"unknown source kind {spec.kind}")


def prepare_deployment(
    config: Config,
    env: Optional[Environment] = None,
    base_path: Path | str = ".",
) -> Deployment:
    """Binds the configured source and destination against a new role.

    Arguments:
        config: imgdeploy's configuration.
        env: the environment to use. Resolved from the configuration if missing.
        base_path: directory relative build paths are resolved against.

    Returns:
        The deployment.
    """
    if env is None:
        env = resolve_environment(
            account=config.environment.account,
            region=config.environment.region,
            profile=config.environment.profile,
        )

    role = Role(name=config.role.name)
    packager = StagingAssetPackager(
        env=env,
        qualifier=config.staging.qualifier,
        exclude=list(config.staging.exclude),
    )

    source = make_source(config.source, env, base_path)
    destination = Destination.ecr(
        Repository(name=config.destination.repository, env=env),
        tag=config.destination.tag,
    )

    log(f"binding {config.source.kind} source")
    source_config = source.bind(BindContext(handler_role=role, packager=packager))

    log(f"binding destination {config.destination.repository}")
    destination_config = destination.bind(role)

    return Deployment(
        role=role,
        source=source_config,
        destination=destination_config,
        job=ImageDeployJob.from_configs(source_config, destination_config),
        assets=list(packager.assets),
    )
