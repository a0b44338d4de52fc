import logging

import typer

from grafter.common import bus
from grafter.needle import L, needle
from .factories import get_project_root
from .rendering import CliRenderer

from .commands.merge import merge_command, merge_patch_command, tree_command

app = typer.Typer(
    name="grafter",
    help=needle.get(L.cli.app.description),
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help=needle.get(L.cli.option.verbose.help)
    ),
):
    # Messages in <project>/.grafter/needle/<lang> override the packaged ones.
    needle.add_root(get_project_root())
    cli_renderer = CliRenderer(verbose=verbose)
    bus.set_renderer(cli_renderer)
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


# Register commands
app.command(name="merge", help=needle.get(L.cli.command.merge.help))(merge_command)
app.command(name="merge-patch", help=needle.get(L.cli.command.merge_patch.help))(
    merge_patch_command
)
app.command(name="tree", help=needle.get(L.cli.command.tree.help))(tree_command)


if __name__ == "__main__":
    app()
