from pathlib import Path
from typing import Optional

import typer

from grafter.cli.factories import load_config, make_generator, make_runner
from grafter.common import bus
from grafter.config import OUTPUT_FORMATS, ConfigError, GrafterConfig
from grafter.lang.python import PythonTreeParser
from grafter.merge import MergeResult
from grafter.needle import L, needle


def _load_config_or_exit() -> GrafterConfig:
    try:
        return load_config()
    except ConfigError as e:
        bus.error(L.error.config, error=str(e))
        raise typer.Exit(code=1)


def _check_format(output_format: Optional[str]) -> None:
    if output_format is not None and output_format not in OUTPUT_FORMATS:
        bus.error(
            L.error.format,
            value=output_format,
            choices=", ".join(OUTPUT_FORMATS),
        )
        raise typer.Exit(code=1)


def _finish(result: Optional[MergeResult], output: Optional[Path], strict: bool):
    if result is None:
        raise typer.Exit(code=1)
    if output is None:
        typer.echo(result.text or "", nl=False)
    if strict and not result.is_clean:
        raise typer.Exit(code=2)


def merge_command(
    baseline: Path = typer.Argument(
        ..., help=needle.get(L.cli.argument.baseline.help)
    ),
    modified: Path = typer.Argument(
        ..., help=needle.get(L.cli.argument.modified.help)
    ),
    patched: Path = typer.Argument(..., help=needle.get(L.cli.argument.patched.help)),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help=needle.get(L.cli.option.output.help)
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", help=needle.get(L.cli.option.format.help)
    ),
    strict: bool = typer.Option(
        False, "--strict", help=needle.get(L.cli.option.strict.help)
    ),
):
    _check_format(output_format)
    runner = make_runner(_load_config_or_exit(), output_format)
    result = runner.run_merge(baseline, modified, patched, output=output)
    _finish(result, output, strict)


def merge_patch_command(
    modified: Path = typer.Argument(
        ..., help=needle.get(L.cli.argument.modified.help)
    ),
    diff: Path = typer.Option(..., "--diff", help=needle.get(L.cli.option.diff.help)),
    baseline_rev: str = typer.Option(
        "HEAD", "--baseline-rev", help=needle.get(L.cli.option.baseline_rev.help)
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help=needle.get(L.cli.option.output.help)
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", help=needle.get(L.cli.option.format.help)
    ),
    strict: bool = typer.Option(
        False, "--strict", help=needle.get(L.cli.option.strict.help)
    ),
):
    _check_format(output_format)
    try:
        diff_text = diff.read_text(encoding="utf-8")
    except OSError as e:
        bus.error(L.error.generic, error=str(e))
        raise typer.Exit(code=1)

    runner = make_runner(_load_config_or_exit(), output_format)
    result = runner.run_patch_merge(
        modified, diff_text, baseline_rev=baseline_rev, output=output
    )
    _finish(result, output, strict)


def tree_command(
    file: Path = typer.Argument(..., help=needle.get(L.cli.argument.file.help)),
):
    tree = PythonTreeParser().parse_file(file)
    if tree is None:
        raise typer.Exit(code=1)
    typer.echo(make_generator("tree").generate(tree), nl=False)
