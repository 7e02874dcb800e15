"""Invoke tasks for Wine Journal application management."""

import shutil
import sys
from pathlib import Path

from invoke import task
from invoke.context import Context


@task
def start(ctx: Context, host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    """Start the Wine Journal server in the foreground.

    Args:
        ctx: Invoke context
        host: Host to bind to (default: 127.0.0.1)
        port: Port to bind to (default: 8000)
        reload: Enable auto-reload for development
    """
    cmd = f"winejournal-server start --host {host} --port {port} --foreground"
    if reload:
        cmd += " --reload"

    try:
        ctx.run(cmd, pty=True)
    except KeyboardInterrupt:
        print("\nServer stopped")
        sys.exit(0)


@task(name="start-background")
def start_background(ctx: Context, host: str = "127.0.0.1", port: int = 8000) -> None:
    """Start the server in the background."""
    ctx.run(f"winejournal-server start --host {host} --port {port}")


@task
def stop(ctx: Context) -> None:
    """Stop the background server."""
    ctx.run("winejournal-server stop")


@task
def restart(ctx: Context, host: str = "127.0.0.1", port: int = 8000) -> None:
    ctx.run(f"winejournal-server restart --host {host} --port {port}")


@task
def status(ctx: Context) -> None:
    """Check the status of the server."""
    ctx.run("winejournal-server status")


@task
def logs(ctx: Context, follow: bool = False, lines: int = 50) -> None:
    """View the server logs.

    Args:
        ctx: Invoke context
        follow: Follow log output (like tail -f)
        lines: Number of lines to show (default: 50)
    """
    log_file = Path("data/winejournal.log")
    if not log_file.exists():
        print("No log file found. Server may not have been started in background mode.")
        return

    if follow:
        ctx.run(f"tail -f {log_file}", pty=True)
    else:
        ctx.run(f"tail -n {lines} {log_file}")


@task
def test(ctx: Context, verbose: bool = False, coverage: bool = False) -> None:
    """Run the test suite.

    Args:
        ctx: Invoke context
        verbose: Enable verbose output
        coverage: Run with coverage report
    """
    cmd = "pytest"
    if verbose:
        cmd += " -v"
    if coverage:
        cmd += " --cov=winejournal --cov-report=term-missing"
    ctx.run(cmd, pty=True)


@task
def clean(ctx: Context, all: bool = False) -> None:
    """Clean up temporary files.

    Args:
        ctx: Invoke context
        all: Also remove uploaded images
    """
    for pattern in ["__pycache__", "*.pyc", "*.pyo", ".pytest_cache"]:
        ctx.run(f"find . -name '{pattern}' -exec rm -rf {{}} + 2>/dev/null || true", warn=True)

    for path in ["build", "dist", "*.egg-info", ".eggs"]:
        ctx.run(f"rm -rf {path} 2>/dev/null || true", warn=True)

    if all:
        images = Path("data/images")
        if images.exists():
            print("Removing uploaded images...")
            shutil.rmtree(images)
            images.mkdir(parents=True)

    print("Cleanup complete")
