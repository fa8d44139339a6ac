"""Account and region where repositories live."""
from typing import Optional

import boto3
from attrs import define, field

from imgdeploy.utils import log, print_waiting


@define(frozen=True, kw_only=True)
class Environment:
    """The AWS account and region owning a repository.

    Arguments:
        account: the 12 digits AWS account ID.
        region: the AWS region (i.e. `eu-west-1`).
    """

    account: str = field()
    region: str = field()

    @account.validator
    @region.validator
    def check_not_empty(self, attribute, value):
        """Rejects an empty account or region."""
        if not value:
            raise ValueError(f"environment {attribute.name} must not be empty")

    @property
    def partition(self) -> str:
        """The AWS partition the region belongs to."""
        if self.region.startswith("cn-"):
            return "aws-cn"

        if self.region.startswith("us-gov-"):
            return "aws-us-gov"

        return "aws"

    @property
    def url_suffix(self) -> str:
        """The domain suffix used by the service endpoints in this region."""
        if self.partition == "aws-cn":
            return "amazonaws.com.cn"

        return "amazonaws.com"


def resolve_environment(
    account: Optional[str] = None,
    region: Optional[str] = None,
    profile: Optional[str] = None,
) -> Environment:
    """Resolves the environment filling the missing values from the AWS
    credentials available to the current process.

    Arguments:
        account: the account ID. If missing, it's fetched from STS.
        region: the region. If missing, it's read from the AWS configuration.
        profile: the AWS profile to use when a value has to be resolved.

    Returns:
        The resolved environment.

    Raises:
        ValueError: if the region cannot be determined.
    """
    if account is not None and region is not None:
        return Environment(account=account, region=region)

    session = boto3.session.Session(profile_name=profile, region_name=region)

    region = region or session.region_name
    if not region:
        raise ValueError("unable to determine the AWS region; set it in the configuration")

    if account is None:
        with print_waiting("resolving AWS account"):
            identity = session.client("sts", region_name=region).get_caller_identity()
            account = identity["Account"]

        log(f"resolved AWS account {account}")

    return Environment(account=account, region=region)
