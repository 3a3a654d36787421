"""
Process-wide shutdown signalling.

Long-running research streams poll the signal between events and abort
once it is set.
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys
import threading


class ShutdownSignal:
    """Cooperative shutdown flag, safe to set from any thread."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def request(self) -> None:
        """Mark the process as shutting down."""
        self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()

    def clear(self) -> None:
        self._event.clear()


shutdown_signal = ShutdownSignal()


def install_signal_handlers(
    loop: asyncio.AbstractEventLoop,
    target: ShutdownSignal | None = None,
) -> None:
    """Set the shutdown signal on SIGTERM/SIGINT (no-op on Windows)."""
    target = target or shutdown_signal

    def signal_handler() -> None:
        """Handle shutdown signals gracefully."""
        logging.info("Received shutdown signal, initiating graceful shutdown...")
        target.request()

    if sys.platform != "win32":
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, signal_handler)
