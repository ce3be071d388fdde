"""CLI entry point for clipboard-to-file."""

from __future__ import annotations

import sys
import threading
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from clipboard_to_file.classify import classify, expand_batch
from clipboard_to_file.config import (
    DEFAULT_CONFIG_TEMPLATE,
    ConfigStore,
    ConfigWatcher,
    write_default_extensions,
)
from clipboard_to_file.config.loader import CONFIG_FILENAME
from clipboard_to_file.engine import ClipboardProcessor, ProcessResult, normalize_text
from clipboard_to_file.errors import ConfigError
from clipboard_to_file.interfaces import Severity
from clipboard_to_file.logs import configure_logging
from clipboard_to_file.materialize import ConflictAction
from clipboard_to_file.providers import (
    ClipboardMonitor,
    ConsoleConfirmer,
    ConsoleNotifier,
    StaticConfirmer,
    provider_from_paths,
    read_clipboard,
)
from clipboard_to_file.tree import FormatKind, TreeNode, detect_format, parse_tree
from clipboard_to_file.validation import filename_problem

app = typer.Typer(
    name="clipboard-to-file",
    help="Create files and folder trees from text copied to the clipboard.",
)

config_app = typer.Typer(help="Manage clipboard-to-file configuration.")
app.add_typer(config_app, name="config")

# Global state
_store: ConfigStore | None = None


def _get_store() -> ConfigStore:
    global _store
    if _store is None:
        _store = ConfigStore.load()
    return _store


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help=f"Path to {CONFIG_FILENAME}")
    ] = None,
) -> None:
    """Global options."""
    global _store
    try:
        _store = ConfigStore.load(config)
    except ConfigError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    cfg = _store.snapshot().config
    configure_logging(cfg.log_level, cfg.log_format)


def _read_source(source: str | None) -> str:
    """Text from a file, stdin (``-``), or the clipboard when omitted."""
    if source is None:
        return read_clipboard()
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _build_processor(dest: list[str] | None, confirmer) -> ClipboardProcessor:
    store = _get_store()
    paths = dest or store.snapshot().config.destination.paths
    return ClipboardProcessor(
        store=store,
        destination=provider_from_paths(paths),
        notifier=ConsoleNotifier(),
        confirmer=confirmer,
    )


def _add_branch(branch: Tree, node: TreeNode) -> None:
    for child in node.children:
        if child.is_directory:
            _add_branch(branch.add(f"[bold blue]{child.name}/[/bold blue]"), child)
        elif child.content:
            branch.add(f"{child.name} [dim]({len(child.content)} chars)[/dim]")
        else:
            branch.add(child.name)


def _print_result(result: ProcessResult) -> None:
    if result.report is None:
        rprint(f"[yellow]Nothing created:[/yellow] {result.reason or result.mode}")
        return
    rprint(f"[bold]{result.mode}[/bold] in {result.destination}: {result.report.summary()}")
    for old, new in result.report.renamed.items():
        rprint(f"  {old} -> {new}")
    for failure in result.report.failures:
        rprint(f"  [red]{failure.kind.value}:[/red] {failure.path}: {failure.reason}")


@app.command()
def paste(
    source: Annotated[
        str | None, typer.Argument(help="File to read, '-' for stdin; clipboard if omitted")
    ] = None,
    dest: Annotated[
        list[str] | None, typer.Option("--dest", "-d", help="Destination folder")
    ] = None,
    on_conflict: Annotated[
        ConflictAction | None,
        typer.Option("--on-conflict", help="Answer for existing files instead of prompting"),
    ] = None,
) -> None:
    """Process one text blob and create what it describes."""
    try:
        text = _read_source(source)
    except OSError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    confirmer = StaticConfirmer(on_conflict) if on_conflict else ConsoleConfirmer()
    result = _build_processor(dest, confirmer).process(text)
    _print_result(result)
    if not result.ok:
        raise typer.Exit(1)


@app.command()
def watch(
    dest: Annotated[
        list[str] | None, typer.Option("--dest", "-d", help="Destination folder")
    ] = None,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Never prompt: skip conflicts, allow large trees")
    ] = False,
) -> None:
    """Watch the clipboard until interrupted."""
    store = _get_store()
    confirmer = StaticConfirmer(ConflictAction.skip) if yes else ConsoleConfirmer()
    processor = _build_processor(dest, confirmer)
    notifier = processor.notifier

    def on_config_change() -> None:
        outcome = store.reload()
        if not outcome.ok:
            notifier.notify("Reload Failed", outcome.message, Severity.error)
        elif outcome.bad_extension_lines:
            notifier.notify("Settings Reloaded", outcome.message, Severity.warning)
        else:
            notifier.notify("Settings Reloaded", outcome.message, Severity.info)

    monitor = ClipboardMonitor(
        processor.process,
        poll_interval=lambda: store.snapshot().config.clipboard.poll_interval,
    )
    config_watcher = ConfigWatcher(store.watched_paths, on_config_change)

    rprint("[bold]Watching the clipboard.[/bold] Press Ctrl-C to stop.")
    monitor.start()
    config_watcher.start()
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        rprint("\n[dim]Stopping...[/dim]")
    finally:
        config_watcher.stop()
        monitor.stop()


@app.command()
def inspect(
    source: Annotated[
        str | None, typer.Argument(help="File to read, '-' for stdin; clipboard if omitted")
    ] = None,
) -> None:
    """Show how a text blob would be interpreted, without creating anything."""
    try:
        text = normalize_text(_read_source(source))
    except OSError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    snapshot = _get_store().snapshot()
    kind = detect_format(text)
    rprint(f"[bold]Format:[/bold] {kind.value}")

    tree = parse_tree(text, kind) if kind is not FormatKind.none else None
    if tree is not None:
        dirs, files = tree.counts()
        view = Tree(f"[bold]{dirs} folder(s), {files} file(s)[/bold]")
        _add_branch(view, tree)
        rprint(view)
        return

    classification = classify(text, snapshot)
    if classification is None:
        rprint("[yellow]No filename found.[/yellow]")
        raise typer.Exit(0)

    names = expand_batch(classification, snapshot)
    table = Table(title=f"Classified via {classification.tier.value}")
    table.add_column("Filename", style="cyan")
    table.add_column("Content", justify="right")
    if len(names) > 1:
        for name in names:
            table.add_row(name, "empty")
    else:
        entry = classification.entry
        table.add_row(entry.filename, f"{len(entry.content)} chars" if entry.content else "empty")
    rprint(table)


@app.command("check-name")
def check_name(
    names: Annotated[list[str], typer.Argument(help="Names to validate")],
) -> None:
    """Check whether names are safe single path segments."""
    table = Table(title="Filename check")
    table.add_column("Name", style="cyan")
    table.add_column("Result")
    invalid = 0
    for name in names:
        problem = filename_problem(name)
        if problem is None:
            table.add_row(name, "[green]ok[/green]")
        else:
            invalid += 1
            table.add_row(name, f"[red]{problem}[/red]")
    rprint(table)
    if invalid:
        raise typer.Exit(1)


@config_app.command("show")
def config_show() -> None:
    """Print the effective configuration as YAML."""
    cfg = _get_store().snapshot().config
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: Annotated[bool, typer.Option("--force", help="Overwrite existing config")] = False,
) -> None:
    """Write a starter config to the current directory."""
    target = Path(CONFIG_FILENAME)
    if target.exists() and not force:
        rprint(f"[yellow]{CONFIG_FILENAME} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
    rprint(f"[green]Created[/green] {target}")


@config_app.command("extensions")
def config_extensions(
    seed: Annotated[
        str | None, typer.Option("--seed", help="Write the default list to this extensions.txt")
    ] = None,
) -> None:
    """List allowed extensions, or seed an extensions.txt file."""
    if seed:
        if write_default_extensions(seed):
            rprint(f"[green]Created[/green] {seed}")
        else:
            rprint(f"[yellow]{seed} already exists.[/yellow]")
        return
    for ext in _get_store().snapshot().config.classifier.allowed_extensions:
        rprint(ext)


if __name__ == "__main__":
    app()
