"""Handles to ECR repositories and to the images stored in them."""
from attrs import define

from imgdeploy.core.environment import Environment
from imgdeploy.core.grant import (
    ECR_AUTH_ACTIONS,
    ECR_PULL_ACTIONS,
    ECR_PUSH_ACTIONS,
    Grantable,
    PolicyStatement,
)
from imgdeploy.core.login import registry_host
from imgdeploy.utils import log


@define(frozen=True, kw_only=True)
class Repository:
    """An ECR repository.

    Arguments:
        name: the repository's name (i.e. `team/app`).
        env: the account and region owning the repository.
    """

    name: str
    env: Environment

    @property
    def arn(self) -> str:
        """The repository's ARN."""
        return f"arn:{self.env.partition}:ecr:{self.env.region}:{self.env.account}:repository/{self.name}"

    @property
    def uri(self) -> str:
        """The repository's URI without any tag."""
        return f"{registry_host(self.env.account, self.env.region)}/{self.name}"

    def uri_for_tag(self, tag: str) -> str:
        """Returns the URI of a tagged image in this repository."""
        return f"{self.uri}:{tag}"

    def grant_pull(self, grantee: Grantable):
        """Allows an identity to pull images from this repository.

        Arguments:
            grantee: the identity to grant the permissions to.
        """
        self._grant(grantee, ECR_PULL_ACTIONS)
        log(f"granted pull on {self.name} to {grantee.grant_principal_name}")

    def grant_pull_push(self, grantee: Grantable):
        """Allows an identity to pull and push images to this repository.

        Arguments:
            grantee: the identity to grant the permissions to.
        """
        self._grant(grantee, ECR_PULL_ACTIONS + ECR_PUSH_ACTIONS)
        log(f"granted pull and push on {self.name} to {grantee.grant_principal_name}")

    def _grant(self, grantee: Grantable, actions):
        grantee.add_to_policy(PolicyStatement(actions=actions, resources=[self.arn]))
        grantee.add_to_policy(PolicyStatement(actions=ECR_AUTH_ACTIONS, resources=["*"]))


@define(frozen=True, kw_only=True)
class ImageAsset:
    """An image already packaged into a repository.

    Arguments:
        repository: the repository holding the image.
        image_uri: the full image URI, tag included.
    """

    repository: Repository
    image_uri: str
