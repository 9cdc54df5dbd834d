from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from apistub.config import GeneratorConfig
from apistub.domain.errors import ManifestError
from apistub.host.manifest import load_manifest
from apistub.host.registry import discover_controllers
from apistub.orchestrator.pipeline import (
    GenerateResult,
    extract_controllers,
    generate_from_targets,
    list_endpoints,
    run_generate,
)


app = typer.Typer(no_args_is_help=True, add_completion=False)

endpoints_app = typer.Typer(no_args_is_help=True)
app.add_typer(endpoints_app, name="endpoints")

console = Console()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _config(out: Optional[str], request_module: Optional[str], disable: bool) -> GeneratorConfig:
    overrides: dict = {}
    if out is not None:
        overrides["output_dir"] = out
    if request_module is not None:
        overrides["request_module"] = request_module
    if disable:
        overrides["enabled"] = False
    return GeneratorConfig(**overrides)


def _report(result: GenerateResult) -> None:
    if not result.enabled:
        console.print("[yellow]apistub is disabled[/yellow]; nothing generated.")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("CONTROLLER")
    table.add_column("OUTPUT")
    table.add_column("STUBS", justify="right", no_wrap=True)
    table.add_column("STATUS", no_wrap=True)

    for r in result.results:
        status = "[green]ok[/green]" if r.ok else f"[red]failed[/red] {escape(r.error or '')}"
        table.add_row(escape(r.class_name), escape(r.output_path), str(r.stubs), status)

    console.print(table)
    console.print(
        f"Controllers: [bold]{len(result.results)}[/bold], failed: [bold]{len(result.failed)}[/bold]"
    )
    if result.failed:
        raise typer.Exit(code=1)


@app.command()
def generate(
    targets: List[str] = typer.Argument(..., help="Dotted module or package names to scan"),
    out: Optional[str] = typer.Option(None, help="Output directory (default: APISTUB_OUTPUT_DIR or ./)"),
    request_module: Optional[str] = typer.Option(None, help="Module the stubs import `request` from"),
    disable: bool = typer.Option(False, "--disable", help="Skip generation entirely"),
) -> None:
    config = _config(out, request_module, disable)
    result = generate_from_targets(targets, config)
    _report(result)


@app.command()
def manifest(
    file: str = typer.Argument(..., help="JSON manifest describing handler classes"),
    out: Optional[str] = typer.Option(None, help="Output directory (default: APISTUB_OUTPUT_DIR or ./)"),
    request_module: Optional[str] = typer.Option(None, help="Module the stubs import `request` from"),
    disable: bool = typer.Option(False, "--disable", help="Skip generation entirely"),
) -> None:
    config = _config(out, request_module, disable)
    if not config.enabled:
        _report(GenerateResult(enabled=False))
        return

    path = Path(file).expanduser()
    if not path.is_file():
        raise typer.BadParameter(f"Manifest does not exist: {path}")

    try:
        classes = load_manifest(path)
    except ManifestError as exc:
        raise typer.BadParameter(str(exc)) from exc

    _report(run_generate(classes, config))


@endpoints_app.command("list")
def endpoints_list(
    targets: List[str] = typer.Argument(..., help="Dotted module or package names to scan"),
    format: str = typer.Option("table", help="Output format: table|json"),
) -> None:
    fmt = format.lower().strip()
    if fmt not in ("table", "json"):
        raise typer.BadParameter("format must be one of: table, json")

    classes, _ = extract_controllers(discover_controllers(targets))
    rows = list_endpoints(classes)

    if fmt == "json":
        typer.echo(json.dumps(rows, indent=2))
        return

    console.print(f"[bold]Endpoints:[/bold] {len(rows)}")
    table = Table(show_header=True, header_style="bold")
    table.add_column("METHOD", no_wrap=True)
    table.add_column("PATH")
    table.add_column("FUNCTION")
    table.add_column("CONTROLLER")

    for r in rows:
        table.add_row(r["method"].upper(), r["path"], r["function"], r["controller"])

    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
