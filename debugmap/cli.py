"""dmap CLI - main entry point and command registration hub."""
# ruff: noqa: E402 - commands are imported after the group is defined

import click

from debugmap import __version__
from debugmap.utils.logging import set_log_level


@click.group()
@click.version_option(version=__version__, prog_name="dmap")
@click.help_option("-h", "--help")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Only show errors")
def cli(verbose, quiet):
    """dmap - map compiled class locations to source locations and back.

    \b
    QUICK START:
      dmap index                          # Scan target/classes, show stats
      dmap resolve com.acme.Foo:25        # Class line -> source file line
      dmap find-unit Foo.scala 25         # Source line -> compiled class

    Paths default to .dmap/config.json, then DEBUGMAP_PATHS_* variables.
    """
    if verbose:
        set_log_level("DEBUG")
    elif quiet:
        set_log_level("ERROR")


from debugmap.commands.find_unit import find_unit
from debugmap.commands.index import index
from debugmap.commands.resolve import resolve

cli.add_command(index)
cli.add_command(resolve)
cli.add_command(find_unit)


def main():
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
