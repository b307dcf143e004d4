from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .catalog import default_catalog
from .config import DEFAULT_TEMPLATE, HOOK_NAMES, KIND_LABELS, ProjectKind
from .detect import detect_project_kind
from .errors import DirectoryNotFound, GitNotInitialized, NotADirectory, ZackstrapError
from .generate import dry_run, generate, validate_target
from .hooks import install_hooks
from .writer import WritePolicy

app = typer.Typer(help="Bootstrap editor, formatter, linter and task-runner configuration files.")
console = Console()

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_INPUT = 2
EXIT_NOT_FOUND = 3


class OutputFormat(str, Enum):
    table = "table"
    json = "json"
    md = "md"


@dataclass(frozen=True)
class RunOptions:
    target: Path
    force: bool
    fail_on_exists: bool
    dry_run: bool

    @property
    def policy(self) -> WritePolicy:
        return WritePolicy(force=self.force, fail_on_exists=self.fail_on_exists)


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("zackstrap")
    if verbose and not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _json_print(payload: dict) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=True, sort_keys=True))


def _print_key_value_table(title: str, rows: list[tuple[str, str]]) -> None:
    table = Table(title=title)
    table.add_column("Field")
    table.add_column("Value")
    for key, value in rows:
        table.add_row(key, value)
    console.print(table)


def _emit_success(
    command: str,
    output_format: OutputFormat,
    data: dict,
    md_renderer: Callable[[dict], str] | None = None,
    table_renderer: Callable[[dict], None] | None = None,
) -> None:
    if output_format == OutputFormat.json:
        _json_print(
            {
                "ok": True,
                "command": command,
                "exit_code": EXIT_OK,
                "data": data,
            }
        )
        return

    if output_format == OutputFormat.md and md_renderer is not None:
        console.print(md_renderer(data))
        return

    if output_format == OutputFormat.table and table_renderer is not None:
        table_renderer(data)
        return

    # Fallback for simple commands without dedicated renderer.
    if output_format == OutputFormat.md:
        lines = [f"# {command}", ""]
        lines.extend(f"- **{key}**: {value}" for key, value in data.items())
        console.print("\n".join(lines))
    else:
        _print_key_value_table(
            title=command,
            rows=[(str(key), str(value)) for key, value in data.items()],
        )


def _emit_error(
    command: str,
    output_format: OutputFormat,
    exit_code: int,
    code: str,
    message: str,
) -> NoReturn:
    if output_format == OutputFormat.json:
        _json_print(
            {
                "ok": False,
                "command": command,
                "exit_code": exit_code,
                "error": {
                    "code": code,
                    "message": message,
                },
            }
        )
    elif output_format == OutputFormat.md:
        console.print(f"# {command}\n\n- **status**: error\n- **code**: {code}\n- **message**: {message}")
    else:
        console.print(f"[red]Error ({code}):[/red] {message}")

    raise typer.Exit(code=exit_code)


def _exit_code_for(error: ZackstrapError) -> int:
    if isinstance(error, (DirectoryNotFound, GitNotInitialized)):
        return EXIT_NOT_FOUND
    if isinstance(error, NotADirectory):
        return EXIT_INVALID_INPUT
    return EXIT_ERROR


def _emit_zackstrap_error(command: str, output_format: OutputFormat, error: ZackstrapError) -> NoReturn:
    _emit_error(
        command=command,
        output_format=output_format,
        exit_code=_exit_code_for(error),
        code=error.code,
        message=str(error),
    )


def _render_generation_md(payload: dict) -> str:
    prefix = "[DRY RUN] Would generate" if payload["dry_run"] else "Generated"
    lines = [f"# {prefix} {payload['label']} project configuration (template: {payload['template']})", ""]
    lines.append(f"- **target**: `{payload['target']}`")
    for item in payload["files"]:
        lines.append(f"- `{item['path']}` | {item.get('outcome') or item['stage']}")
    return "\n".join(lines)


def _render_generation_table(payload: dict) -> None:
    if payload["dry_run"]:
        console.print(
            f"[blue][DRY RUN] Would generate {payload['label']} project configuration "
            f"(template: {payload['template']})...[/blue]"
        )
        table = Table(title=f"Planned files in {payload['target']}")
        table.add_column("File")
        table.add_column("Stage")
        table.add_column("Template")
        for item in payload["files"]:
            table.add_row(item["path"], item["stage"], item["template"])
        console.print(table)
        return

    table = Table(title=f"{payload['label']} project configuration (template: {payload['template']})")
    table.add_column("File")
    table.add_column("Result")
    for item in payload["files"]:
        table.add_row(item["path"], item["outcome"])
    console.print(table)
    console.print(f"[green]{payload['label']} configuration files generated successfully![/green]")


def _run_generation(
    ctx: typer.Context,
    command: str,
    kind: ProjectKind | None,
    template: str,
    output_format: OutputFormat,
) -> None:
    options: RunOptions = ctx.obj
    catalog = default_catalog()
    try:
        root = validate_target(options.target)
        detected = kind is None
        if kind is None:
            kind = detect_project_kind(root)

        if options.dry_run:
            steps = dry_run(kind, template, catalog)
            files = [
                {"path": step.path, "stage": step.stage, "template": step.template, "mode": step.mode}
                for step in steps
            ]
        else:
            report = generate(root, kind, template, options.policy, catalog)
            files = [{"path": result.path, "outcome": result.outcome.value} for result in report.results]
    except ZackstrapError as error:
        _emit_zackstrap_error(command, output_format, error)

    data = {
        "target": str(root),
        "kind": kind.value,
        "label": KIND_LABELS[kind],
        "template": catalog.resolve_template(kind, template),
        "detected": detected,
        "dry_run": options.dry_run,
        "files": files,
    }
    _emit_success(
        command=command,
        output_format=output_format,
        data=data,
        md_renderer=_render_generation_md,
        table_renderer=_render_generation_table,
    )


@app.callback()
def main(
    ctx: typer.Context,
    target: Path = typer.Option(
        Path("."), "--target", "-d", envvar="ZACKSTRAP_TARGET", help="Target directory (defaults to the current one)."
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing files."),
    fail_on_exists: bool = typer.Option(
        False, "--fail-on-exists", help="Abort when a file already exists instead of skipping it."
    ),
    dry_run_mode: bool = typer.Option(False, "--dry-run", help="Show what would be written without writing anything."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every file operation to stderr."),
) -> None:
    """Bootstrap project configuration files."""
    _configure_logging(verbose)
    ctx.obj = RunOptions(
        target=target,
        force=force,
        fail_on_exists=fail_on_exists,
        dry_run=dry_run_mode,
    )


@app.command("basic")
def basic_project(
    ctx: typer.Context,
    template: str = typer.Option(DEFAULT_TEMPLATE, "--template", "-t", help="default, google or airbnb."),
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
):
    """Generate configuration files for a basic project."""
    _run_generation(ctx, "basic", ProjectKind.basic, template, output_format)


@app.command("ruby")
def ruby_project(
    ctx: typer.Context,
    template: str = typer.Option(DEFAULT_TEMPLATE, "--template", "-t", help="default, rails, sinatra or gem."),
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
):
    """Generate configuration files for a Ruby project."""
    _run_generation(ctx, "ruby", ProjectKind.ruby, template, output_format)


@app.command("python")
def python_project(
    ctx: typer.Context,
    template: str = typer.Option(DEFAULT_TEMPLATE, "--template", "-t", help="default, django or flask."),
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
):
    """Generate configuration files for a Python project."""
    _run_generation(ctx, "python", ProjectKind.python, template, output_format)


@app.command("node")
def node_project(
    ctx: typer.Context,
    template: str = typer.Option(DEFAULT_TEMPLATE, "--template", "-t", help="default, express or react."),
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
):
    """Generate configuration files for a Node.js project."""
    _run_generation(ctx, "node", ProjectKind.node, template, output_format)


@app.command("go")
def go_project(
    ctx: typer.Context,
    template: str = typer.Option(DEFAULT_TEMPLATE, "--template", "-t", help="default, web or cli."),
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
):
    """Generate configuration files for a Go project."""
    _run_generation(ctx, "go", ProjectKind.go, template, output_format)


@app.command("rust")
def rust_project(
    ctx: typer.Context,
    template: str = typer.Option(DEFAULT_TEMPLATE, "--template", "-t", help="default, web or cli."),
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
):
    """Generate configuration files for a Rust project."""
    _run_generation(ctx, "rust", ProjectKind.rust, template, output_format)


@app.command("auto")
def auto_project(
    ctx: typer.Context,
    template: str = typer.Option(
        DEFAULT_TEMPLATE, "--template", "-t", help="Template for the detected type; unknown names use default."
    ),
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
):
    """Detect the project type and generate its configuration."""
    _run_generation(ctx, "auto", None, template, output_format)


@app.command("interactive")
def interactive_setup(
    ctx: typer.Context,
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
):
    """Choose a project type and template interactively, then generate."""
    options: RunOptions = ctx.obj
    try:
        root = validate_target(options.target)
    except ZackstrapError as error:
        _emit_zackstrap_error("interactive", output_format, error)

    catalog = default_catalog()
    detected = detect_project_kind(root)
    answer = typer.prompt(
        f"Project type ({', '.join(kind.value for kind in ProjectKind)})",
        default=detected.value,
    )
    try:
        kind = ProjectKind(answer.strip().lower())
    except ValueError:
        _emit_error(
            command="interactive",
            output_format=output_format,
            exit_code=EXIT_INVALID_INPUT,
            code="unknown_project_type",
            message=f"Unknown project type: {answer}",
        )

    template = typer.prompt(
        f"Template ({', '.join(catalog.templates_for(kind))})",
        default=DEFAULT_TEMPLATE,
    )
    if not options.dry_run and not typer.confirm(f"Write {KIND_LABELS[kind]} configuration to {root}?", default=True):
        _emit_error(
            command="interactive",
            output_format=output_format,
            exit_code=EXIT_ERROR,
            code="aborted",
            message="Aborted by user.",
        )

    _run_generation(ctx, "interactive", kind, template.strip(), output_format)


@app.command("hooks")
def git_hooks(
    ctx: typer.Context,
    kind: Optional[ProjectKind] = typer.Argument(None, help="Project type; detected when omitted."),
    template: str = typer.Option(DEFAULT_TEMPLATE, "--template", "-t", help="Template whose checks the hooks run."),
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
):
    """Install git pre-commit, pre-push and commit-msg hooks."""
    options: RunOptions = ctx.obj
    catalog = default_catalog()
    try:
        root = validate_target(options.target)
        if kind is None:
            kind = detect_project_kind(root)
        hooks_dir = root / ".git" / "hooks"
        if options.dry_run:
            paths = [hooks_dir / name for name in HOOK_NAMES]
        else:
            paths = list(install_hooks(root, kind, template, force=options.force, catalog=catalog))
    except ZackstrapError as error:
        _emit_zackstrap_error("hooks", output_format, error)

    data = {
        "target": str(root),
        "kind": kind.value,
        "template": catalog.resolve_template(kind, template),
        "dry_run": options.dry_run,
        "hooks": [str(path) for path in paths],
    }

    def render_md(payload: dict) -> str:
        verb = "Would install" if payload["dry_run"] else "Installed"
        lines = [f"# {verb} {payload['kind']} git hooks (template: {payload['template']})", ""]
        lines.extend(f"- `{path}`" for path in payload["hooks"])
        return "\n".join(lines)

    def render_table(payload: dict) -> None:
        verb = "[DRY RUN] Would install" if payload["dry_run"] else "Installed"
        table = Table(title=f"{verb} {payload['kind']} git hooks (template: {payload['template']})")
        table.add_column("Hook")
        for path in payload["hooks"]:
            table.add_row(path)
        console.print(table)

    _emit_success(command="hooks", output_format=output_format, data=data, md_renderer=render_md, table_renderer=render_table)


@app.command("list")
def list_configs(
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
):
    """List the configuration files and templates for every project type."""
    catalog = default_catalog()
    rows = []
    for kind in catalog.kinds():
        files = [artifact.path for artifact in catalog.artifacts_for(kind)]
        runner = catalog.task_runner_for(kind)
        if runner is not None and runner.path not in files:
            files.append(runner.path)
        rows.append(
            {
                "kind": kind.value,
                "label": KIND_LABELS[kind],
                "templates": list(catalog.templates_for(kind)),
                "files": files,
            }
        )

    data = {"kinds": rows}

    def render_md(payload: dict) -> str:
        lines = ["# Available configuration files", ""]
        for item in payload["kinds"]:
            lines.append(f"## {item['label']} (`{item['kind']}`)")
            lines.append(f"- **templates**: {', '.join(item['templates'])}")
            lines.extend(f"- `{path}`" for path in item["files"])
            lines.append("")
        return "\n".join(lines)

    def render_table(payload: dict) -> None:
        table = Table(title="Available configuration files")
        table.add_column("Command")
        table.add_column("Templates")
        table.add_column("Files")
        for item in payload["kinds"]:
            table.add_row(item["kind"], ", ".join(item["templates"]), ", ".join(item["files"]))
        console.print(table)
        console.print("Basic files are written for every project type; `auto` detects the type.")

    _emit_success(command="list", output_format=output_format, data=data, md_renderer=render_md, table_renderer=render_table)


@app.command("version")
def version(
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
) -> None:
    """Print version."""
    _emit_success(command="version", output_format=output_format, data={"version": __version__})


if __name__ == "__main__":
    app()
