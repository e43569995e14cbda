"""Find the compiled unit behind a source location."""

import json

import click

from debugmap.pipeline.ui import console, print_error
from debugmap.utils.error_handler import handle_exceptions
from debugmap.utils.exit_codes import ExitCodes

from ._options import index_options


@click.command("find-unit")
@handle_exceptions
@index_options
@click.option("--package", "package_prefix", default="", help="Package prefix the unit must match")
@click.option("--json", "as_json", is_flag=True, help="Print the unit as JSON")
@click.argument("source_name")
@click.argument("line", type=int)
def find_unit(root, target, source_roots, jobs, package_prefix, as_json, source_name, line):
    """Show the compiled unit whose bytecode covers SOURCE_NAME:LINE.

    SOURCE_NAME is a bare file name such as Foo.scala. When several units
    cover the line, the one starting latest (the innermost) wins.

    Exits with status 1 when no unit matches.

    Examples:
      dmap find-unit Foo.scala 25
      dmap find-unit Foo.scala 25 --package com.acme
    """
    from debugmap.indexer.runner import run_debug_index

    engine, _ = run_debug_index(root, target, list(source_roots) or None, jobs)
    unit = engine.find_unit(source_name, line, package_prefix)

    if unit is None:
        if as_json:
            click.echo("null")
        else:
            print_error(f"No compiled unit covers {source_name}:{line}")
        raise click.exceptions.Exit(ExitCodes.NO_MATCH)

    if as_json:
        click.echo(json.dumps(unit.to_dict(), indent=2))
        return

    console.print(f"[cmd]{unit.qualified_name}[/cmd]")
    console.print(f"  lines:      {unit.start_line}-{unit.end_line}")
    console.print(f"  package:    {unit.package_name or '<default>'}")
    console.print(f"  class file: [path]{unit.class_file}[/path]")
