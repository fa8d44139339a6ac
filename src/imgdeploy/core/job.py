"""Build job copying the source image to its destination."""
from typing import List

from attrs import define

from imgdeploy.core.destination import DestinationConfig
from imgdeploy.core.source import SourceConfig


@define(frozen=True, kw_only=True)
class ImageDeployJob:
    """Pulls the source image, re-tags it and pushes it to the destination.

    Arguments:
        source: the resolved source.
        destination: the resolved destination.
        destination_tag: the tag pushed to the destination.
    """

    source: SourceConfig
    destination: DestinationConfig
    destination_tag: str

    @classmethod
    def from_configs(cls, source: SourceConfig, destination: DestinationConfig) -> "ImageDeployJob":
        """Creates the job, falling back to the source tag when the destination
        does not override it."""
        destination_tag = destination.destination_tag
        if destination_tag is None:
            destination_tag = source.image_tag

        return cls(
            source=source,
            destination=destination,
            destination_tag=destination_tag,
        )

    @property
    def destination_image_uri(self) -> str:
        """The full URI of the deployed image."""
        return f"{self.destination.destination_uri}:{self.destination_tag}"

    def commands(self) -> List[str]:
        """Returns the shell commands to run, in order."""
        return [
            self.source.login_config.login_command,
            f"docker pull {self.source.image_uri}",
            f"docker tag {self.source.image_uri} {self.destination_image_uri}",
            self.destination.login_config.login_command,
            f"docker push {self.destination_image_uri}",
        ]
