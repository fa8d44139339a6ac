"""Identities and the permission statements granted to them."""
import abc
from typing import Any, Dict, List, Tuple

from attrs import define, field

ECR_AUTH_ACTIONS = ("ecr:GetAuthorizationToken",)

ECR_PULL_ACTIONS = (
    "ecr:BatchCheckLayerAvailability",
    "ecr:GetDownloadUrlForLayer",
    "ecr:BatchGetImage",
)

ECR_PUSH_ACTIONS = (
    "ecr:BatchCheckLayerAvailability",
    "ecr:CompleteLayerUpload",
    "ecr:InitiateLayerUpload",
    "ecr:PutImage",
    "ecr:UploadLayerPart",
)


def _as_tuple(values) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(values))


@define(frozen=True, kw_only=True)
class PolicyStatement:
    """An allow statement of an IAM policy.

    Arguments:
        actions: the allowed actions. Duplicates are dropped.
        resources: the ARNs the actions apply to.
    """

    actions: Tuple[str, ...] = field(converter=_as_tuple)
    resources: Tuple[str, ...] = field(converter=_as_tuple)
    effect: str = "Allow"

    def to_json(self) -> Dict[str, Any]:
        """Renders the statement using the IAM policy grammar."""
        return {
            "Effect": self.effect,
            "Action": list(self.actions),
            "Resource": list(self.resources) if len(self.resources) > 1 else self.resources[0],
        }


class Grantable(abc.ABC):
    """An identity that can be granted permissions."""

    @property
    @abc.abstractmethod
    def grant_principal_name(self) -> str:
        """Name identifying the principal in logs."""
        raise NotImplementedError

    @abc.abstractmethod
    def add_to_policy(self, statement: PolicyStatement) -> bool:
        """Adds a statement to the identity's policy.

        Arguments:
            statement: the statement to add.

        Returns:
            True if the statement has been added. False if it was already
            part of the policy.
        """
        raise NotImplementedError


@define(kw_only=True, eq=False)
class Role(Grantable):
    """An IAM role collecting the statements granted to it.

    Arguments:
        name: the role's name.
    """

    name: str
    statements: List[PolicyStatement] = field(factory=list)

    @property
    def grant_principal_name(self) -> str:
        return self.name

    def add_to_policy(self, statement: PolicyStatement) -> bool:
        if statement in self.statements:
            return False

        self.statements.append(statement)

        return True

    def policy_document(self) -> Dict[str, Any]:
        """Renders all the granted statements as an IAM policy document."""
        return {
            "Version": "2012-10-17",
            "Statement": [statement.to_json() for statement in self.statements],
        }
