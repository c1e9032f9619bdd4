"""logroute Command Line Interface.

Entry point for the logroute CLI tool.
"""

from __future__ import annotations

from pathlib import Path

import typer
import yaml
from pydantic import ValidationError

from logroute import __version__
from logroute.contracts.errors import RenderError
from logroute.contracts.pipeline import PipelineDocument
from logroute.core.config import RendererSettings, load_pipeline, load_settings
from logroute.core.logging import get_logger
from logroute.core.security.secret_loader import (
    DirectorySecretStore,
    InMemorySecretStore,
    MountingSecretResolverFactory,
    SecretStore,
)
from logroute.engine import build_document

__all__ = [
    "app",
]

logger = get_logger(__name__)

app = typer.Typer(
    name="logroute",
    help="logroute: compile declarative logging pipelines to syslog-ng configuration.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"logroute version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from a .env file.

    Args:
        env_file: Explicit path to .env file. If None, searches for .env
                 in current directory and parent directories.

    Returns:
        True if .env was found and loaded, False otherwise.

    Raises:
        typer.Exit: If explicit env_file path doesn't exist.
    """
    from dotenv import load_dotenv

    if env_file is not None:
        if not env_file.exists():
            typer.secho(
                f"Error: .env file not found: {env_file}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(1)
        return load_dotenv(env_file, override=False)

    return load_dotenv(override=False)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
        exists=False,  # existence is checked in _load_dotenv for a better message
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """logroute: compile declarative logging pipelines to syslog-ng configuration."""
    from logroute.core.logging import configure_logging

    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "INFO")
    ctx.obj = {"verbose": verbose, "json_logs": json_logs}

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho(
            "Warning: --env-file ignored because --no-dotenv is set.",
            fg=typer.colors.YELLOW,
            err=True,
        )


def _format_error(
    title: str,
    message: str,
    hint: str | None = None,
    details: list[str] | None = None,
) -> None:
    """Display a formatted error panel with optional hint and details."""
    from rich.console import Console
    from rich.panel import Panel
    from rich.text import Text

    console = Console(stderr=True)

    content = Text()
    content.append(message, style="white")

    if details:
        content.append("\n\n")
        for detail in details:
            content.append(f"  • {detail}\n", style="dim")

    if hint:
        content.append("\n")
        content.append("Hint: ", style="yellow bold")
        content.append(hint, style="yellow")

    console.print(
        Panel(
            content,
            title=f"[red bold]{title}[/]",
            border_style="red",
            padding=(0, 1),
        )
    )


def _load_inputs(pipeline: Path, settings: Path | None) -> tuple[PipelineDocument, RendererSettings]:
    """Load settings and pipeline, reporting failures and exiting with 1."""
    try:
        renderer_settings = load_settings(settings)
        document = load_pipeline(pipeline)
    except FileNotFoundError as e:
        _format_error(
            title="File Not Found",
            message=str(e),
            hint="Check the path and ensure the file exists.",
        )
        raise typer.Exit(1) from None
    except yaml.YAMLError as e:
        _format_error(
            title="YAML Syntax Error",
            message=f"Failed to parse {pipeline.name}",
            details=[str(e)],
            hint="Check for unclosed brackets, incorrect indentation, or invalid characters.",
        )
        raise typer.Exit(1) from None
    except ValidationError as e:
        # Before ValueError: ValidationError inherits from it
        details = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            details.append(f"{loc}: {error['msg']}")
        _format_error(
            title="Configuration Validation Failed",
            message=f"Invalid resources in {pipeline.name}",
            details=details,
            hint="Check field names, types, and that each output, filter and condition sets exactly one kind.",
        )
        raise typer.Exit(1) from None
    except ValueError as e:
        _format_error(title="Configuration Error", message=str(e))
        raise typer.Exit(1) from None
    return document, renderer_settings


def _apply_logging(ctx: typer.Context, renderer_settings: RendererSettings) -> None:
    """Reconfigure logging from settings. --verbose and --json-logs win."""
    from logroute.core.logging import configure_logging

    flags = ctx.obj or {}
    configure_logging(
        json_output=flags.get("json_logs", False) or renderer_settings.json_logs,
        level="DEBUG" if flags.get("verbose", False) else renderer_settings.log_level,
    )


def _secret_store(renderer_settings: RendererSettings, secrets_dir: Path | None) -> SecretStore:
    root = secrets_dir if secrets_dir is not None else renderer_settings.secrets_dir
    if root is None:
        # Inline values still resolve; any mounted reference fails as not found
        return InMemorySecretStore()
    return DirectorySecretStore(root.expanduser())


def _build(
    document: PipelineDocument,
    renderer_settings: RendererSettings,
    secrets_dir: Path | None,
) -> tuple[str, MountingSecretResolverFactory]:
    factory = MountingSecretResolverFactory(
        store=_secret_store(renderer_settings, secrets_dir),
        mount_root=renderer_settings.secret_mount_root,
    )
    spec = document.to_spec(factory, source_port=renderer_settings.source_port)
    try:
        text = build_document(spec)
    except RenderError as e:
        logger.error("render_failed", error=str(e), error_type=type(e).__name__)
        _format_error(
            title="Render Failed",
            message=str(e),
            hint="No configuration was written.",
        )
        raise typer.Exit(1) from None
    return text, factory


@app.command()
def render(
    ctx: typer.Context,
    pipeline: Path = typer.Option(
        ...,
        "--pipeline",
        "-p",
        help="Path to pipeline YAML file.",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to renderer settings YAML file.",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the configuration here instead of stdout.",
    ),
    secrets_dir: Path | None = typer.Option(
        None,
        "--secrets-dir",
        help="Root of a <namespace>/<name>/<key> secret tree (overrides settings).",
    ),
) -> None:
    """Render a pipeline into a syslog-ng configuration file."""
    pipeline = pipeline.expanduser()
    document, renderer_settings = _load_inputs(pipeline, settings.expanduser() if settings else None)
    _apply_logging(ctx, renderer_settings)
    text, factory = _build(document, renderer_settings, secrets_dir)

    for mount in factory.mounts:
        logger.info("secret_mount_required", namespace=mount.namespace, secret=mount.name, key=mount.key, path=mount.path)

    if output is None:
        typer.echo(text, nl=False)
        return

    output = output.expanduser()
    output.write_text(text, encoding="utf-8")
    logger.info("config_written", path=str(output), bytes=len(text.encode("utf-8")), mounts=len(factory.mounts))


@app.command()
def validate(
    ctx: typer.Context,
    pipeline: Path = typer.Option(
        ...,
        "--pipeline",
        "-p",
        help="Path to pipeline YAML file.",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to renderer settings YAML file.",
    ),
    secrets_dir: Path | None = typer.Option(
        None,
        "--secrets-dir",
        help="Root of a <namespace>/<name>/<key> secret tree (overrides settings).",
    ),
) -> None:
    """Validate a pipeline by rendering it without writing anything."""
    pipeline = pipeline.expanduser()
    document, renderer_settings = _load_inputs(pipeline, settings.expanduser() if settings else None)
    _apply_logging(ctx, renderer_settings)
    _, factory = _build(document, renderer_settings, secrets_dir)

    typer.echo("Pipeline configuration valid.")
    typer.echo(f"  Outputs: {len(document.outputs)} (+{len(document.cluster_outputs)} cluster)")
    typer.echo(f"  Flows: {len(document.flows)} (+{len(document.cluster_flows)} cluster)")
    typer.echo(f"  Secret mounts: {len(factory.mounts)}")


if __name__ == "__main__":
    app()
