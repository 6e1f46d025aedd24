import click

from wapctl.commands.health import health
from wapctl.commands.submissions_list import submissions_list


@click.group()
def cli():
    """Management commands for the WAP game submission portal."""


cli.add_command(health)
cli.add_command(submissions_list)


if __name__ == "__main__":
    cli()
