from unittest import mock

import pytest
from testfixtures import ShouldRaise, compare

from imgdeploy.core.binding import BindState
from imgdeploy.core.destination import Destination, DestinationConfig, EcrDestination
from imgdeploy.core.environment import Environment
from imgdeploy.core.errors import AlreadyBound, InvalidTagError
from imgdeploy.core.grant import ECR_PUSH_ACTIONS, Role
from imgdeploy.core.login import LoginType, build_login
from imgdeploy.core.repository import Repository
from imgdeploy.core.tag import TagError


@pytest.fixture
def repository() -> Repository:
    return Repository(
        name="app",
        env=Environment(account="123456789012", region="eu-west-1"),
    )


@pytest.fixture
def role() -> Role:
    return Role(name="handler")


def test_Destination_ecr__returns_ecr_destination(repository):
    compare(isinstance(Destination.ecr(repository), EcrDestination), True)


@pytest.mark.parametrize(
    ["tag", "error"],
    [
        (".bad", TagError.INVALID_CHARACTERS),
        ("-bad", TagError.INVALID_CHARACTERS),
        ("", TagError.INVALID_CHARACTERS),
        ("a" * 129, TagError.TOO_LONG),
    ],
)
def test_Destination_ecr__rejects_invalid_tag_before_granting(repository, tag, error):
    with mock.patch.object(Repository, "grant_pull_push", autospec=True) as grant_pull_push:
        with ShouldRaise(InvalidTagError) as raised:
            Destination.ecr(repository, tag=tag)

    compare(raised.raised.result.error, error)
    grant_pull_push.assert_not_called()


def test_EcrDestination_bind__grants_pull_push(repository, role):
    destination = Destination.ecr(repository, tag="v2")

    with mock.patch.object(Repository, "grant_pull_push", autospec=True) as grant_pull_push:
        destination.bind(role)

    grant_pull_push.assert_called_once_with(repository, role)


def test_EcrDestination_bind__returns_destination_config(repository, role):
    res = Destination.ecr(repository, tag="v2").bind(role)

    compare(
        res,
        DestinationConfig(
            destination_uri="123456789012.dkr.ecr.eu-west-1.amazonaws.com/app",
            login_config=build_login("123456789012", "eu-west-1"),
            destination_tag="v2",
        ),
    )
    compare(res.login_config.login_type, LoginType.ECR)
    compare(res.login_config.region, "eu-west-1")
    compare(set(ECR_PUSH_ACTIONS) <= set(role.statements[0].actions), True)


def test_EcrDestination_bind__leaves_tag_absent_without_override(repository, role):
    res = Destination.ecr(repository).bind(role)

    compare(res.destination_tag, None)


def test_EcrDestination_bind__raises_AlreadyBound_on_second_call(repository, role):
    destination = Destination.ecr(repository)
    destination.bind(role)

    compare(destination.state, BindState.BOUND)

    with ShouldRaise(AlreadyBound):
        destination.bind(role)


def test_EcrDestination_bind__builds_login_before_granting(repository, role):
    destination = Destination.ecr(repository)

    with mock.patch("imgdeploy.core.destination.build_login", side_effect=ValueError("no region")):
        with ShouldRaise(ValueError):
            destination.bind(role)

    compare(role.statements, [])
    compare(destination.state, BindState.UNBOUND)
