from __future__ import annotations
import signal
import threading
from typing import List, Optional
import typer
from rich.console import Console
from rich.markup import escape
from .config import PatternError, build_config, build_filter
from .engine import TailEngine
from .line_filter import LineFilter
from .locator import resolve_target
from .logutil import configure_logging
from .notify import make_notifier

app = typer.Typer(
    help="tailwatch - follow the newest file matching a name or pattern",
    add_completion=False,
)
console = Console()

HELP_TOKENS = {"-h", "--help", "-?", "/?"}


def _wants_help(tokens: List[str]) -> bool:
    return any(t.lower() in HELP_TOKENS for t in tokens)


def _emit_line(line: str) -> None:
    print(line, flush=True)


def _install_interrupt(stop: threading.Event):
    """Turn Ctrl+C into a stop request the poll loop sees between ticks."""
    def _handler(signum, frame):
        stop.set()

    try:
        return signal.signal(signal.SIGINT, _handler)
    except ValueError:
        # not on the main thread (embedded use); Ctrl+C keeps its default
        return None


@app.command(
    context_settings={
        "help_option_names": ["-h", "--help"],
        "allow_extra_args": True,
        "ignore_unknown_options": True,
    }
)
def tail(
    ctx: typer.Context,
    target: Optional[str] = typer.Argument(None, help="File, folder or file pattern to follow", show_default=False),
    filter_text: Optional[str] = typer.Option(None, "--filter", help="Only show lines containing this text"),
    filter_regex: Optional[str] = typer.Option(None, "--filter-regex", help="Only show lines matching this regex (wins over --filter)"),
    ignore_case: bool = typer.Option(False, "--i", help="Case-insensitive matching"),
    invert: bool = typer.Option(False, "--v", help="Show lines that do NOT match"),
    nocolors: bool = typer.Option(False, "--nocolors", help="Disable colored status messages"),
    verbose: bool = typer.Option(False, "--verbose", help="Log recovered read errors to stderr"),
):
    """
    Print lines appended to the most recently modified file matching TARGET.

    Truncated or recreated files are restarted from the beginning; a missing
    file is waited for. Stop with Ctrl+C.
    """
    tokens = ([target] if target else []) + list(ctx.args)
    if _wants_help(tokens):
        typer.echo(ctx.get_help())
        raise typer.Exit(0)

    target = next((t for t in tokens if not t.startswith("-")), None)
    if not target:
        console.print("Please specify a valid folder, file name or file pattern in the command line.", soft_wrap=True)
        typer.echo(ctx.get_help())
        raise typer.Exit(0)

    configure_logging(verbose)

    try:
        spec = build_filter(filter_text, filter_regex, ignore_case=ignore_case, invert=invert)
    except PatternError as e:
        console.print(f"[bold red]Pattern Error:[/bold red] {escape(str(e))}", style="red")
        raise typer.Exit(1)

    watch = resolve_target(target)
    cfg = build_config(watch, spec, colors=not nocolors)

    out = Console(no_color=None if cfg.colors else True, highlight=False)
    if watch.provisional:
        out.print(
            "[yellow]No valid folder, file name or file pattern in the command line.[/yellow] "
            f"Waiting for {escape(watch.path)} to be created.",
            soft_wrap=True,
        )

    notifier = make_notifier(cfg.colors, out)
    notifier.started(watch.path)

    line_filter = LineFilter(cfg.filter, _emit_line)
    engine = TailEngine.from_config(cfg, line_filter, notifier)

    stop = threading.Event()
    previous = _install_interrupt(stop)
    try:
        engine.run(stop_event=stop)
    finally:
        if previous is not None:
            signal.signal(signal.SIGINT, previous)


if __name__ == "__main__":
    app()
