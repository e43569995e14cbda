"""Build the debug index and report what was found."""

import json

import click
from rich.table import Table

from debugmap.pipeline.ui import console, print_warning
from debugmap.utils.error_handler import handle_exceptions
from debugmap.utils.exit_codes import ExitCodes

from ._options import index_options


@click.command()
@handle_exceptions
@index_options
@click.option("--json", "as_json", is_flag=True, help="Print statistics as JSON")
def index(root, target, source_roots, jobs, as_json):
    """Scan compiled class files and report index statistics.

    Reads every .class file under the target directory, records each
    class's line range and declared source file, and matches source
    file names against the files found under the source roots.

    Examples:
      dmap index
      dmap index --target target/scala-2.13/classes --source-root src/main/scala
      dmap index --json

    Nothing is persisted: the index lives for the duration of the command.
    """
    from debugmap.indexer.runner import run_debug_index

    _, stats = run_debug_index(root, target, list(source_roots) or None, jobs)

    if as_json:
        click.echo(json.dumps(stats, indent=2, sort_keys=True))
    else:
        table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
        table.add_column("Metric", style="cmd")
        table.add_column("Value")
        table.add_row("Target", stats["target"])
        table.add_row("Class files", str(stats["class_files"]))
        table.add_row("Processed", str(stats["processed"]))
        table.add_row("Skipped", str(stats["skipped"]))
        table.add_row("Compiled units", str(stats["units"]))
        table.add_row("Classes with sources", str(stats["classes"]))
        table.add_row("Source files", str(stats["source_files"]))
        table.add_row("Elapsed", f"{int(stats['elapsed'] * 1000)}ms")
        console.print(table)
        for err in stats["errors"]:
            print_warning(f"{err['path']}: {err['error']}")

    if stats["class_files"] == 0:
        if not as_json:
            print_warning(ExitCodes.get_description(ExitCodes.TASK_INCOMPLETE))
        raise click.exceptions.Exit(ExitCodes.TASK_INCOMPLETE)
