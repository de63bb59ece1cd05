"""Startup script for the Book Search Benchmark API.

Starts uvicorn with host and port taken from settings, replacing the
current process.
"""

import os
import signal
import sys

sys.path.insert(0, ".")

from api.config import get_settings  # noqa: E402


def start_api() -> None:
    """Start the FastAPI application with uvicorn."""
    settings = get_settings()
    host = settings.api_host
    port = os.getenv("PORT", str(settings.api_port))

    print(f"Starting API server on {host}:{port} (snapshot: {settings.snapshot_path})...")

    # Use exec to replace the current process
    os.execvp(
        "uvicorn",
        [
            "uvicorn",
            "api.main:app",
            "--host",
            host,
            "--port",
            port,
            "--proxy-headers",
            "--forwarded-allow-ips",
            "*",
        ],
    )


def signal_handler(signum: int, _frame: object) -> None:
    """Handle shutdown signals gracefully."""
    print(f"Received signal {signum}, shutting down...")
    sys.exit(0)


def main() -> None:
    """Main entry point."""
    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    start_api()


if __name__ == "__main__":
    main()
