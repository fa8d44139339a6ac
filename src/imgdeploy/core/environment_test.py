from unittest import mock

import pytest
from testfixtures import ShouldRaise, compare

from imgdeploy.core.environment import Environment, resolve_environment


@pytest.mark.parametrize(
    ["region", "partition", "url_suffix"],
    [
        ("eu-west-1", "aws", "amazonaws.com"),
        ("cn-northwest-1", "aws-cn", "amazonaws.com.cn"),
        ("us-gov-east-1", "aws-us-gov", "amazonaws.com"),
    ],
)
def test_Environment__derives_partition_and_url_suffix(region, partition, url_suffix):
    env = Environment(account="123456789012", region=region)

    compare(env.partition, partition)
    compare(env.url_suffix, url_suffix)


@mock.patch("imgdeploy.core.environment.boto3")
def test_resolve_environment__does_not_call_aws_when_complete(boto3):
    res = resolve_environment(account="123456789012", region="eu-west-1")

    compare(res, Environment(account="123456789012", region="eu-west-1"))
    boto3.session.Session.assert_not_called()


@mock.patch("imgdeploy.core.environment.boto3")
def test_resolve_environment__fetches_missing_account(boto3):
    session = boto3.session.Session.return_value
    session.client.return_value.get_caller_identity.return_value = {"Account": "210987654321"}

    res = resolve_environment(region="eu-west-1", profile="deploy")

    compare(res, Environment(account="210987654321", region="eu-west-1"))
    boto3.session.Session.assert_called_once_with(profile_name="deploy", region_name="eu-west-1")
    session.client.assert_called_once_with("sts", region_name="eu-west-1")


@mock.patch("imgdeploy.core.environment.boto3")
def test_resolve_environment__reads_region_from_session(boto3):
    session = boto3.session.Session.return_value
    session.region_name = "us-east-2"

    res = resolve_environment(account="123456789012")

    compare(res, Environment(account="123456789012", region="us-east-2"))
    session.client.assert_not_called()


@mock.patch("imgdeploy.core.environment.boto3")
def test_resolve_environment__raises_ValueError_without_region(boto3):
    boto3.session.Session.return_value.region_name = None

    with ShouldRaise(ValueError):
        resolve_environment(account="123456789012")


@pytest.mark.parametrize(
    ["account", "region"],
    [
        ("", "eu-west-1"),
        ("123456789012", ""),
    ],
)
def test_Environment__rejects_empty_values(account, region):
    with ShouldRaise(ValueError):
        Environment(account=account, region=region)


@mock.patch("imgdeploy.core.environment.boto3")
def test_resolve_environment__rejects_empty_configured_region(boto3):
    with ShouldRaise(ValueError):
        resolve_environment(account="123456789012", region="")
