from testfixtures import compare

from imgdeploy.core.grant import PolicyStatement, Role


def test_PolicyStatement__drops_duplicated_actions():
    statement = PolicyStatement(
        actions=["ecr:PutImage", "ecr:BatchGetImage", "ecr:PutImage"],
        resources=["*"],
    )

    compare(statement.actions, ("ecr:PutImage", "ecr:BatchGetImage"))


def test_PolicyStatement__renders_single_resource_as_string():
    statement = PolicyStatement(actions=["ecr:GetAuthorizationToken"], resources=["*"])

    compare(
        statement.to_json(),
        {
            "Effect": "Allow",
            "Action": ["ecr:GetAuthorizationToken"],
            "Resource": "*",
        },
    )


def test_Role__ignores_duplicated_statements():
    role = Role(name="handler")
    statement = PolicyStatement(actions=["ecr:BatchGetImage"], resources=["*"])

    compare(role.add_to_policy(statement), True)
    compare(role.add_to_policy(PolicyStatement(actions=["ecr:BatchGetImage"], resources=["*"])), False)
    compare(role.statements, [statement])


def test_Role__renders_policy_document():
    role = Role(name="handler")
    role.add_to_policy(PolicyStatement(actions=["ecr:BatchGetImage"], resources=["arn:a", "arn:b"]))

    compare(
        role.policy_document(),
        {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Action": ["ecr:BatchGetImage"],
                    "Resource": ["arn:a", "arn:b"],
                }
            ],
        },
    )
