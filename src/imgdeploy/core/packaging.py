"""Packaging of local build directories into image assets."""
import abc
import fnmatch
import hashlib
import os
from pathlib import Path
from typing import List, Sequence

from attrs import define, field

from imgdeploy.core.environment import Environment
from imgdeploy.core.repository import ImageAsset, Repository
from imgdeploy.utils import log, print_waiting

DOCKERFILE = "Dockerfile"


class AssetPackager(abc.ABC):
    """Turns a local build directory into an image asset."""

    @abc.abstractmethod
    def package(self, path: str) -> ImageAsset:
        """Packages a build directory.

        Arguments:
            path: path to the directory containing the Dockerfile.

        Returns:
            The image asset the directory will be published as.
        """
        raise NotImplementedError


def _is_excluded(relpath: str, exclude: Sequence[str]) -> bool:
    parts = Path(relpath).parts

    for pattern in exclude:
        if fnmatch.fnmatch(relpath, pattern):
            return True

        if any(fnmatch.fnmatch(part, pattern) for part in parts):
            return True

    return False


def fingerprint(path: str, exclude: Sequence[str] = ()) -> str:
    """Computes a SHA-256 fingerprint of a directory.

    The fingerprint covers the relative path and the content of every file,
    visited in sorted order, so it does not depend on the file system's
    iteration order.

    Arguments:
        path: the directory to fingerprint.
        exclude: glob patterns matched against relative paths and their parts.

    Returns:
        The hex digest.
    """
    digest = hashlib.sha256()

    for dirpath, dirnames, filenames in os.walk(path):
        dirnames.sort()

        for filename in sorted(filenames):
            fullpath = os.path.join(dirpath, filename)
            relpath = Path(os.path.relpath(fullpath, path)).as_posix()

            if _is_excluded(relpath, exclude):
                continue

            digest.update(relpath.encode("utf-8"))
            digest.update(b"\0")

            with open(fullpath, "rb") as file_asset:
                digest.update(file_asset.read())

            digest.update(b"\0")

    return digest.hexdigest()


@define(kw_only=True, eq=False)
class StagingAssetPackager(AssetPackager):
    """Maps build directories to images in the staging repository.

    Nothing gets built: the packaged assets are recorded in `assets` and
    published later by the build executor.

    Arguments:
        env: the environment hosting the staging repository.
        qualifier: distinguishes staging repositories sharing an environment.
        exclude: glob patterns of files to leave out of the fingerprint.
    """

    env: Environment
    qualifier: str = "imgdeploy"
    exclude: List[str] = field(factory=list)
    assets: List[ImageAsset] = field(factory=list, init=False)

    @property
    def repository(self) -> Repository:
        """The staging repository."""
        return Repository(
            name=f"{self.qualifier}-container-assets-{self.env.account}-{self.env.region}",
            env=self.env,
        )

    def package(self, path: str) -> ImageAsset:
        if not os.path.isdir(path):
            raise FileNotFoundError(f"cannot find image directory at {path}")

        if not os.path.isfile(os.path.join(path, DOCKERFILE)):
            raise FileNotFoundError(f"cannot find file at {os.path.join(path, DOCKERFILE)}")

        with print_waiting(f"fingerprinting {path}"):
            asset_hash = fingerprint(path, self.exclude)

        asset = ImageAsset(
            repository=self.repository,
            image_uri=self.repository.uri_for_tag(asset_hash),
        )
        self.assets.append(asset)

        log(f"packaged {path} as {asset.image_uri}")

        return asset
