"""Registry login commands."""
import enum
from typing import Optional

from attrs import define, field

from imgdeploy.core.environment import Environment

REGISTRY_DOMAIN = "dkr.ecr"


@enum.unique
class LoginType(enum.Enum):
    """Denotes what type of registry to log in to.

    Attributes:

    * `ECR`: an ECR repository in the same account as the deployment.
    * `EXTERNAL_ECR`: any other ECR repository.
    """

    ECR = "ECR"
    EXTERNAL_ECR = "EXTERNAL_ECR"

    @property
    def region_scoped(self) -> bool:
        """True if registries of this type live in a single region."""
        return self in (LoginType.ECR, LoginType.EXTERNAL_ECR)


@define(frozen=True, kw_only=True)
class LoginConfig:
    """Login information for a registry.

    Arguments:
        login_command: shell command logging the docker client in.
        login_type: type of registry to log in to.
        region: region of the registry, only for region scoped registries.
    """

    login_command: str
    login_type: LoginType
    region: Optional[str] = field(default=None)

    @region.validator
    def check_region(self, _, value):
        """Makes sure the region is set only for region scoped registries."""
        if self.login_type.region_scoped and not value:
            raise ValueError(f"login type {self.login_type.name} requires a region")

        if not self.login_type.region_scoped and value is not None:
            raise ValueError(f"login type {self.login_type.name} does not accept a region")


def registry_host(account_id: str, region: str) -> str:
    """Returns the host name of the ECR registry for an account and region."""
    url_suffix = Environment(account=account_id, region=region).url_suffix

    return f"{account_id}.{REGISTRY_DOMAIN}.{region}.{url_suffix}"


def build_login(account_id: str, region: str, login_type: LoginType = LoginType.ECR) -> LoginConfig:
    """Builds the command used by the build job to log in to a registry.

    The command is deterministic: the same account and region always
    produce the same string.

    Arguments:
        account_id: the account owning the registry.
        region: the registry's region.
        login_type: the type of registry.

    Returns:
        The login configuration.
    """
    login_command = (
        f"aws ecr get-login-password --region {region} | "
        f"docker login --username AWS --password-stdin {registry_host(account_id, region)}"
    )

    return LoginConfig(
        login_command=login_command,
        login_type=login_type,
        region=region,
    )
