"""Main entrypoint for the `imgdeploy` command."""
import json
import os
import sys
from pathlib import Path

import click
from cattrs import unstructure

from imgdeploy.core.config import Config, load_config
from imgdeploy.core.deploy import Deployment, prepare_deployment
from imgdeploy.utils import CONSOLE, print_exception, print_info, print_table


@click.group()
@click.option("-c", "--config", "config_path", default="./imgdeploy.toml")
@click.option("--cwd", default=None)
@click.pass_context
def cli(ctx: click.Context, config_path: str, cwd: str | None):
    """Entrypoint for the imgdeploy command."""
    if cwd is not None:
        os.chdir(cwd)

    ctx.obj = {
        "config": load_config(path=config_path),
        "base_path": Path(config_path).parent,
    }


def _print_deployment(deployment: Deployment):
    print_table(
        "Source",
        ["Image URI", "Tag", "Login"],
        [
            [
                deployment.source.image_uri,
                deployment.source.image_tag,
                deployment.source.login_config.login_type.name,
            ]
        ],
    )
    print_table(
        "Destination",
        ["Repository URI", "Tag", "Login"],
        [
            [
                deployment.destination.destination_uri,
                deployment.destination.destination_tag or f"{deployment.job.destination_tag} (source)",
                deployment.destination.login_config.login_type.name,
            ]
        ],
    )
    print_table(
        f"Grants for {deployment.role.name}",
        ["Actions", "Resources"],
        [
            [", ".join(statement.actions), ", ".join(statement.resources)]
            for statement in deployment.role.statements
        ],
    )
    print_table(
        "Job",
        ["#", "Command"],
        [[str(idx), command] for idx, command in enumerate(deployment.job.commands())],
    )


@cli.command()
@click.option("--json", "as_json", is_flag=True, default=False)
@click.pass_obj
def resolve(obj: dict, as_json: bool):
    """Binds the source and destination and shows the result."""
    config: Config = obj["config"]

    # progress messages would break the JSON printed on stdout
    quiet = CONSOLE.quiet
    CONSOLE.quiet = as_json

    try:
        deployment = prepare_deployment(config, base_path=obj["base_path"])

    except Exception as exc:  # pylint: disable=broad-except
        CONSOLE.quiet = quiet
        print_exception(str(exc))
        sys.exit(1)

    CONSOLE.quiet = quiet

    if as_json:
        encoded = unstructure(deployment)
        encoded["policy"] = deployment.role.policy_document()
        encoded["commands"] = deployment.job.commands()

        click.echo(json.dumps(encoded, indent=4, sort_keys=True))
        return

    _print_deployment(deployment)
    print_info(f"deploying {deployment.source.image_uri} to {deployment.job.destination_image_uri}")


if __name__ == "__main__":
    cli()  # pylint: disable=no-value-for-parameter
