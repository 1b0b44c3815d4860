"""Typer CLI entrypoint for linksift."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

import typer
import yaml
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .config import ConfigRepository, GlobalConfig
from .engine import CandidateParser, LinkCandidate, VerifiedLink, canonicalize
from .engine.exporter import EXPORT_FORMATS, FileExporter
from .errors import ConfigError, NoUsableLinksError
from .logging_conf import APP_LOG_NAME, ERROR_LOG_NAME, LOG_LEVELS, configure_logging, tail_log
from .orchestrator import LinkPipeline, PipelineResult
from .ui import ProgressReporter

EXIT_NO_LINKS = 3

app = typer.Typer(
    help="Extract, verify and deduplicate links from generated text.",
    no_args_is_help=True,
    rich_markup_mode=None,
)
config_app = typer.Typer(name="config", help="Inspect or initialise configuration.", no_args_is_help=True)
log_app = typer.Typer(name="log", help="Inspect log files.", no_args_is_help=True)
app.add_typer(config_app, name="config")
app.add_typer(log_app, name="log")

console = Console()


@dataclass
class AppState:
    repository: ConfigRepository
    verbose: bool = False

    def load_config(self) -> GlobalConfig:
        try:
            return self.repository.load_global_config()
        except ConfigError as exc:
            console.print(str(exc), style="red", markup=False)
            raise typer.Exit(code=1) from exc


def build_state(verbose: bool, console_level: Optional[str] = None) -> AppState:
    repository = ConfigRepository()
    configure_logging(verbose=verbose, log_dir=repository.locator.logs_dir, console_level=console_level)
    return AppState(repository=repository, verbose=verbose)


def _get_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if state is None:
        state = build_state(verbose=False)
        ctx.obj = state
    return state


def _read_text(source: str) -> str:
    if source == "-":
        return typer.get_text_stream("stdin").read()
    path = Path(source)
    if not path.exists():
        raise typer.BadParameter(f"File not found: {source}", param_hint="SOURCE")
    return path.read_text(encoding="utf-8")


def _render_links_table(links: Sequence[VerifiedLink], result: PipelineResult) -> Table:
    table = Table(
        title=f"Verified links · {len(links)} of {result.attempted} candidates",
        box=box.SIMPLE_HEAD,
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("URL", style="green", overflow="fold")
    table.add_column("Description", overflow="fold")
    for index, link in enumerate(links, start=1):
        table.add_row(str(index), Text(link.title), Text(link.url), Text(link.description))
    return table


def _render_candidates_table(candidates: Sequence[LinkCandidate]) -> Table:
    table = Table(title=f"Parsed candidates · {len(candidates)}", box=box.SIMPLE_HEAD)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("URL (raw)", style="yellow", overflow="fold")
    table.add_column("Description", overflow="fold")
    for index, candidate in enumerate(candidates, start=1):
        table.add_row(str(index), Text(candidate.title), Text(candidate.url), Text(candidate.description))
    return table


def _with_overrides(
    config: GlobalConfig, concurrency: Optional[int], timeout: Optional[float]
) -> GlobalConfig:
    updates: dict = {}
    if concurrency is not None:
        updates["scheduler"] = config.scheduler.model_copy(update={"max_concurrency": concurrency})
    if timeout is not None:
        updates["verifier"] = config.verifier.model_copy(update={"timeout": timeout})
    return config.model_copy(update=updates) if updates else config


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Console log level, e.g. ERROR or INFO."),
) -> None:
    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        raise typer.BadParameter(f"Choose one of: {', '.join(LOG_LEVELS)}", param_hint="--log-level")
    ctx.obj = build_state(verbose, console_level=log_level)


@app.command("verify", help="Parse SOURCE (file or '-' for stdin) and keep only links that resolve.")
def verify(
    ctx: typer.Context,
    source: str = typer.Argument("-", help="Text file with generated recommendations."),
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help="Also export as json, csv or txt."),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Export directory."),
    concurrency: Optional[int] = typer.Option(None, "--concurrency", min=1, max=32),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.1, help="Per-attempt seconds."),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
) -> None:
    state = _get_state(ctx)
    if fmt is not None and fmt not in EXPORT_FORMATS:
        raise typer.BadParameter(f"Choose one of: {', '.join(EXPORT_FORMATS)}", param_hint="--format")
    config = _with_overrides(state.load_config(), concurrency, timeout)
    text = _read_text(source)

    reporter = ProgressReporter(enabled=progress)
    pipeline = LinkPipeline(config)
    try:
        result = pipeline.run_sync(text, on_result=reporter.record, on_start=reporter.start)
    except NoUsableLinksError as exc:
        console.print(exc.user_message, style="yellow", markup=False)
        raise typer.Exit(code=EXIT_NO_LINKS) from exc
    finally:
        reporter.close()

    console.print(_render_links_table(result.links, result))
    if result.duplicates:
        console.print(f"Dropped {result.duplicates} duplicate link(s).", style="dim")
    if fmt is not None:
        target_dir = output_dir or state.repository.locator.outputs_dir
        name = Path(source).stem if source != "-" else "links"
        with FileExporter(target_dir, name, fmt) as exporter:
            exporter.export_many(result.links)
        console.print(f"Exported to {exporter.path}", style="green")


@app.command("parse", help="Show the candidates found in SOURCE without any network access.")
def parse(
    ctx: typer.Context,
    source: str = typer.Argument("-", help="Text file with generated recommendations."),
) -> None:
    state = _get_state(ctx)
    config = state.load_config()
    candidates = CandidateParser(config.parser).parse(_read_text(source))
    if not candidates:
        console.print(NoUsableLinksError("parse").user_message, style="yellow")
        raise typer.Exit(code=EXIT_NO_LINKS)
    console.print(_render_candidates_table(candidates))


@app.command("normalize", help="Print the canonical form of each URL.")
def normalize(ctx: typer.Context, urls: List[str] = typer.Argument(..., help="URLs to canonicalise.")) -> None:
    state = _get_state(ctx)
    tracking = state.load_config().normalizer.tracking_params
    for url in urls:
        typer.echo(canonicalize(url, tracking))


@config_app.command("show", help="Print the effective configuration as YAML.")
def config_show(ctx: typer.Context) -> None:
    state = _get_state(ctx)
    config = state.load_config()
    typer.echo(f"# {state.repository.locator.global_config_path()}")
    typer.echo(yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False, allow_unicode=True))


@config_app.command("init", help="Write the default configuration file.")
def config_init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file."),
) -> None:
    state = _get_state(ctx)
    path = state.repository.locator.global_config_path()
    if path.exists() and not force:
        console.print(f"Configuration already exists: {path} (use --force)", style="yellow")
        raise typer.Exit(code=1)
    state.repository.save_global_config(GlobalConfig())
    console.print(f"Wrote {path}", style="green")


@log_app.command("show", help="Show the most recent log lines.")
def log_show(
    ctx: typer.Context,
    lines: int = typer.Option(50, "--lines", "-n", min=1),
    errors: bool = typer.Option(False, "--errors", help="Show error.log instead."),
) -> None:
    state = _get_state(ctx)
    log_dir = state.repository.locator.logs_dir
    path = log_dir / (ERROR_LOG_NAME if errors else APP_LOG_NAME)
    content = tail_log(path, lines)
    if not content:
        console.print(f"No log entries in {path}", style="dim")
        return
    for line in content:
        typer.echo(line.rstrip("\n"))


def cli() -> None:
    app()


__all__ = ["AppState", "EXIT_NO_LINKS", "app", "build_state", "cli"]
