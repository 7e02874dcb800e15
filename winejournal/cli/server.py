"""Wine Journal server control script.

Usage:
    winejournal-server start [--port PORT] [--reload] [--foreground]
    winejournal-server stop
    winejournal-server restart [--port PORT]
    winejournal-server status
"""

import argparse
import json
import os
import signal
import subprocess
import sys
import time
import urllib.error
import urllib.request
from pathlib import Path

DATA_DIR = Path("data")
PID_FILE = DATA_DIR / "winejournal.pid"
LOG_FILE = DATA_DIR / "winejournal.log"
DEFAULT_PORT = 8000
DEFAULT_HOST = "127.0.0.1"
APP_PATH = "winejournal.main:app"


def ensure_directories() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    (DATA_DIR / "images").mkdir(parents=True, exist_ok=True)


def get_pid() -> int | None:
    """PID of the running server, clearing a stale PID file."""
    if not PID_FILE.exists():
        return None

    try:
        pid = int(PID_FILE.read_text().strip())
        os.kill(pid, 0)
        return pid
    except (ValueError, ProcessLookupError, PermissionError):
        PID_FILE.unlink(missing_ok=True)
        return None


def build_command(port: int, host: str, reload: bool = False) -> list[str]:
    cmd = [
        sys.executable, "-m", "uvicorn",
        APP_PATH,
        "--host", host,
        "--port", str(port),
    ]
    if reload:
        cmd.append("--reload")
    return cmd


def start_server(port: int = DEFAULT_PORT, host: str = DEFAULT_HOST,
                 reload: bool = False, foreground: bool = False) -> bool:
    """Start the server, in the background unless ``foreground`` is set.

    Returns:
        True if the server started.
    """
    pid = get_pid()
    if pid:
        print(f"Server is already running (PID: {pid})")
        return False

    ensure_directories()
    cmd = build_command(port, host, reload)
    print(f"Starting Wine Journal server on http://{host}:{port}")

    if foreground:
        print("Press Ctrl+C to stop the server")
        try:
            subprocess.run(cmd)
        except KeyboardInterrupt:
            print("\nServer stopped")
        return True

    with open(LOG_FILE, "w") as log:
        process = subprocess.Popen(
            cmd,
            stdout=log,
            stderr=subprocess.STDOUT,
            start_new_session=True,
        )

    time.sleep(1)
    if process.poll() is None:
        PID_FILE.write_text(str(process.pid))
        print(f"Server started with PID: {process.pid}")
        print(f"Logs available at: {LOG_FILE}")
        return True

    print("Failed to start server. Check logs for details.")
    return False


def stop_server() -> bool:
    """Stop the background server, escalating to SIGKILL after five seconds."""
    pid = get_pid()
    if not pid:
        print("Server is not running")
        return False

    print(f"Stopping server (PID: {pid})...")
    try:
        os.kill(pid, signal.SIGTERM)
        for _ in range(10):
            time.sleep(0.5)
            try:
                os.kill(pid, 0)
            except ProcessLookupError:
                break
        else:
            print("Server didn't stop gracefully, forcing...")
            os.kill(pid, signal.SIGKILL)

        print("Server stopped")
        PID_FILE.unlink(missing_ok=True)
        return True

    except ProcessLookupError:
        print("Server was not running")
        PID_FILE.unlink(missing_ok=True)
        return False
    except PermissionError:
        print(f"Permission denied to stop process {pid}")
        return False


def restart_server(port: int = DEFAULT_PORT, host: str = DEFAULT_HOST) -> bool:
    print("Restarting Wine Journal server...")
    stop_server()
    time.sleep(1)
    return start_server(port=port, host=host)


def server_status(port: int = DEFAULT_PORT) -> None:
    pid = get_pid()
    if not pid:
        print("Wine Journal server is not running")
        return

    print(f"Wine Journal server is running (PID: {pid})")
    try:
        with urllib.request.urlopen(f"http://localhost:{port}/health", timeout=2) as response:
            data = json.loads(response.read().decode())
    except (urllib.error.URLError, OSError, ValueError):
        print("  (Could not fetch health status)")
        return
    print(f"  Status: {data.get('status', 'unknown')}")
    print(f"  Database: {data.get('database', 'unknown')}")
    print(f"  Version: {data.get('version', 'unknown')}")


def _add_bind_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=DEFAULT_PORT,
        help=f"Port to bind to (default: {DEFAULT_PORT})",
    )
    parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help=f"Host to bind to (default: {DEFAULT_HOST})",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Wine Journal server control script",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s start                  Start server on default port (8000)
  %(prog)s start --port 8080      Start server on port 8080
  %(prog)s start --reload -f      Start in the foreground with auto-reload
  %(prog)s stop                   Stop the server
  %(prog)s status                 Check server status
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    start_parser = subparsers.add_parser("start", help="Start the server")
    _add_bind_arguments(start_parser)
    start_parser.add_argument(
        "--reload", "-r",
        action="store_true",
        help="Enable auto-reload for development",
    )
    start_parser.add_argument(
        "--foreground", "-f",
        action="store_true",
        help="Run in foreground (blocking)",
    )

    subparsers.add_parser("stop", help="Stop the server")

    restart_parser = subparsers.add_parser("restart", help="Restart the server")
    _add_bind_arguments(restart_parser)

    status_parser = subparsers.add_parser("status", help="Check server status")
    status_parser.add_argument("--port", "-p", type=int, default=DEFAULT_PORT)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "start":
            success = start_server(
                port=args.port,
                host=args.host,
                reload=args.reload,
                foreground=args.foreground,
            )
            return 0 if success else 1
        if args.command == "stop":
            return 0 if stop_server() else 1
        if args.command == "restart":
            return 0 if restart_server(port=args.port, host=args.host) else 1
        if args.command == "status":
            server_status(port=args.port)
            return 0
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
