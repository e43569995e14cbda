"""Options shared by every command that builds the index."""

import click


def index_options(func):
    """Attach --root/--target/--source-root/--jobs to a command."""
    func = click.option(
        "--jobs", "-j", default=None, type=click.IntRange(min=1),
        help="Threads used to read class files (default from config)",
    )(func)
    func = click.option(
        "--source-root", "source_roots", multiple=True,
        help="Source directory to register (repeatable, default from config)",
    )(func)
    func = click.option("--target", default=None, help="Compiled class output directory")(func)
    func = click.option("--root", default=".", help="Project root directory")(func)
    return func
