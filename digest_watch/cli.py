"""
Command-line interface for digest-watch.

Uses Typer to provide commands for watching the backend for new digests,
rendering digest text, and triggering a test digest. Supports loading
.env files for the API token.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel

from .client import DigestApiClient
from .config import AppConfig, load_config
from .logging_utils import setup_logging
from .parser import parse
from .renderer import render_markdown, render_rich
from .service import DigestWatchService
from .types import NotificationState

app = typer.Typer(add_completion=False)
console = Console()


def _load(config: Path | None, log_level: str | None, log_dir: Path | None) -> AppConfig:
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    if log_dir is not None:
        cfg.logging.file = True
    setup_logging(cfg.logging, log_dir)
    return cfg


def _print_banner(state: NotificationState) -> None:
    if not state.visible or state.payload is None:
        return
    payload = state.payload
    console.print(
        Panel(payload.body, title=f"[bold]{payload.title}[/bold]", subtitle=f"digest {payload.digest_id}")
    )


@app.command()
def watch(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    base_url: str | None = typer.Option(None, "--base-url", help="Backend root URL."),
    token: str | None = typer.Option(
        None, "--token", envvar="DIGEST_API_TOKEN", help="Bearer token (or set DIGEST_API_TOKEN / .env)."
    ),
    interval: float | None = typer.Option(None, "--interval", help="Seconds between checks."),
    once: bool = typer.Option(False, "--once", help="Run a single check and exit."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_dir: Path | None = typer.Option(None, "--log-dir", help="Write a log file to this directory."),
):
    """Watch the backend and show a banner whenever a new digest appears.

    The first check only records the newest digest; digests that existed
    before start-up are never announced.
    """
    cfg = _load(config, log_level, log_dir)
    if base_url:
        cfg.api.base_url = base_url
    if token:
        cfg.api.token = token
    if interval is not None:
        cfg.poll.interval_seconds = interval

    try:
        asyncio.run(_watch(cfg, once))
    except KeyboardInterrupt:
        console.print("Stopped.")


async def _watch(cfg: AppConfig, once: bool) -> None:
    async with DigestApiClient(cfg.api) as client:
        service = DigestWatchService(client, cfg)
        service.notifications.subscribe(_print_banner)

        if once:
            await asyncio.gather(*service.tick())
            console.print(f"Unread digests: {service.unread_count}")
            return

        await service.start()
        last_count: int | None = None
        try:
            while True:
                await asyncio.sleep(1.0)
                if service.unread_count != last_count:
                    last_count = service.unread_count
                    console.print(f"Unread digests: {last_count}")
        finally:
            await service.stop()


@app.command()
def render(
    path: Path = typer.Argument(..., exists=True, readable=True, help="Digest text file."),
    markdown: bool = typer.Option(False, "--markdown", help="Print normalized markdown instead."),
):
    """Parse a digest text file and print it."""
    blocks = parse(path.read_text(encoding="utf-8"))
    if markdown:
        console.print(render_markdown(blocks), markup=False, highlight=False)
    else:
        console.print(render_rich(blocks))


@app.command("test-digest")
def test_digest(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    base_url: str | None = typer.Option(None, "--base-url", help="Backend root URL."),
    token: str | None = typer.Option(None, "--token", envvar="DIGEST_API_TOKEN"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Ask the backend to generate a digest now and show its banner."""
    cfg = _load(config, log_level, None)
    if base_url:
        cfg.api.base_url = base_url
    if token:
        cfg.api.token = token

    digest = asyncio.run(_test_digest(cfg))
    if digest is None:
        console.print("[red]Test digest generation failed.[/red]")
        raise typer.Exit(code=1)
    console.print(render_rich(parse(digest.content)))


async def _test_digest(cfg: AppConfig):
    async with DigestApiClient(cfg.api) as client:
        service = DigestWatchService(client, cfg)
        service.notifications.subscribe(_print_banner)
        return await service.generate_test_digest()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
