"""Translate class locations into source locations."""

import json

import click

from debugmap.pipeline.ui import console
from debugmap.utils.error_handler import handle_exceptions

from ._options import index_options


def parse_location(value: str) -> tuple[str, int]:
    """Split ``com.acme.Foo:25`` into ("com.acme.Foo", 25)."""
    class_name, sep, line = value.rpartition(":")
    if not sep or not class_name:
        raise click.BadParameter(f"expected CLASS:LINE, got {value!r}")
    try:
        return class_name, int(line)
    except ValueError:
        raise click.BadParameter(f"line must be an integer in {value!r}") from None


@click.command()
@handle_exceptions
@index_options
@click.option("--all-candidates", is_flag=True, help="List every candidate source path")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.argument("locations", nargs=-1, required=True)
def resolve(root, target, source_roots, jobs, all_candidates, as_json, locations):
    """Map CLASS:LINE locations to source file locations.

    Prints one result per argument, in argument order. A class with no
    known source resolves to an empty path.

    Examples:
      dmap resolve com.acme.Foo:25
      dmap resolve 'com.acme.Foo$Inner:40' com.acme.Bar:7 --json
    """
    from debugmap.indexer.runner import run_debug_index

    pairs = [parse_location(v) for v in locations]
    engine, _ = run_debug_index(root, target, list(source_roots) or None, jobs)
    resolved = engine.resolve_source_locations(pairs)

    rows = []
    for (class_name, _), (path, line) in zip(pairs, resolved):
        row = {"class": class_name, "source": path, "line": line}
        if all_candidates:
            row["candidates"] = list(engine.find_sources_for_class(class_name))
        rows.append(row)

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    for row in rows:
        source = row["source"] or "[dim]<unknown>[/dim]"
        console.print(f"[cmd]{row['class']}[/cmd] -> [path]{source}[/path]:{row['line']}")
        for candidate in row.get("candidates", [])[1:]:
            console.print(f"    [dim]also: {candidate}[/dim]")
