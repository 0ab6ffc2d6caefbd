"""
Entrypoint into ec2-driver
"""


# Imports
import json
import rich_click as click
import botocore
from rich.console import Console
from typing import Optional

# Internal imports
from ec2_driver.client import AwsClient
from ec2_driver.config import DriverConfig
from ec2_driver.ec2_logger import set_up_logger
from ec2_driver.instance_generator import InstanceGenerator
from ec2_driver.request import to_run_instances_kwargs
import ec2_driver.ui


# Use markup
click.rich_click.USE_MARKDOWN = True


def needs_lookup(config: DriverConfig) -> bool:
    """
    Whether building the request requires a call to the EC2 API
    """
    return (
        (config.subnet_id is None and config.subnet_filter is not None)
        or (not config.security_group_ids and config.security_group_filter is not None)  # noqa: E501, W503
    )


def build_generator(
    config: DriverConfig,
    client: Optional[AwsClient] = None,
) -> InstanceGenerator:
    """
    Create the instance generator. The EC2 client is only created when a subnet or
    security group has to be looked up by its tag.
    """
    if client is None and needs_lookup(config):
        client = AwsClient.from_config(config)
    ec2_client = client.ec2 if client is not None else None
    return InstanceGenerator(config, ec2_client)


# Construct command
@click.group
def cli():
    """Build the request used to launch an EC2 instance from a driver configuration
    file."""
    pass


@cli.command()
@click.option(
    "--file", "-f",
    type=str,
    help="""Driver configuration file.""",
    required=True
)
@click.option(
    '--log-level', '-l',
    type=click.Choice(['info', 'warn', 'error', 'debug']),
    default="info",
    help=f"""Set the log level. _{ec2_driver.ui.DARK_BLUE}[default: info]{ec2_driver.ui.RESET}_""",  # noqa: E501
    required=False,
)
def render(file: str, log_level: str):
    """Print the instance request as JSON.

    <br>Examples:
    - ec2-driver render -f ./driver.yml
    """
    set_up_logger(log_level)
    config = DriverConfig.from_file(file)
    generator = build_generator(config)
    click.echo(json.dumps(generator.ec2_instance_data(), indent=2))


@cli.command()
@click.option(
    "--file", "-f",
    type=str,
    help="""Driver configuration file.""",
    required=True
)
@click.option(
    '--log-level', '-l',
    type=click.Choice(['info', 'warn', 'error', 'debug']),
    default="info",
    help=f"""Set the log level. _{ec2_driver.ui.DARK_BLUE}[default: info]{ec2_driver.ui.RESET}_""",  # noqa: E501
    required=False,
)
@click.option(
    '--dry-run',
    is_flag=True,
    default=False,
    help=f"""Check the request and permissions without launching an instance. _{ec2_driver.ui.DARK_BLUE}[default: False]{ec2_driver.ui.RESET}_""",  # noqa: E501
    required=False,
)
def launch(file: str, log_level: str, dry_run: bool):
    """Launch an EC2 instance from a driver configuration file.

    <br>Examples:
    - ec2-driver launch -f ./driver.yml
    - ec2-driver launch -f ./driver.yml --dry-run
    """
    logger = set_up_logger(log_level)
    console = Console(highlight=False)
    config = DriverConfig.from_file(file)

    client = AwsClient.from_config(config)
    client.check_credentials()
    generator = build_generator(config, client)

    kwargs = to_run_instances_kwargs(generator.ec2_instance_data())
    logger.debug(f"Calling run_instances with {sorted(kwargs.keys())}")
    try:
        response = client.ec2.run_instances(DryRun=dry_run, **kwargs)
    except botocore.exceptions.ClientError as e:
        if dry_run and e.response.get("Error", {}).get("Code") == "DryRunOperation":
            console.print("[green]✓[/green] Dry run succeeded")
            return 0
        raise e

    instance_id = response["Instances"][0]["InstanceId"]
    console.print(f"[green]✓[/green] Launched instance [magenta]{instance_id}[/magenta]")  # noqa: E501
    return 0
