"""
Main entry point.

Builds the IncidentTracker from config, runs it in a single asyncio
event loop next to a small health-check server, and handles graceful
shutdown on Ctrl+C / SIGTERM.

Usage:
    python -m statushook
    statushook
"""

from __future__ import annotations

import asyncio
import signal
import sys

import aiohttp
from aiohttp import web

from statushook import console
from statushook.checker import IncidentTracker
from statushook.config import Config, ConfigError, load_config
from statushook.statuspage import StatusPageClient
from statushook.store import IncidentStore, StoreError
from statushook.webhook import WebhookClient


def build_health_app(tracker: IncidentTracker) -> web.Application:
    """Health-check endpoints for hosted deployments."""
    async def index(_: web.Request) -> web.Response:
        return web.json_response({
            "status": "running",
            "page": tracker.config.page.name,
            "tracked_incidents": len(tracker.incidents),
        })

    async def health(_: web.Request) -> web.Response:
        return web.json_response({"status": "healthy"})

    app = web.Application()
    app.router.add_get("/", index)
    app.router.add_get("/health", health)
    return app


def _handle_signals(tracker: IncidentTracker, loop: asyncio.AbstractEventLoop) -> None:
    """Register signal handlers for graceful shutdown."""
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, lambda: _do_shutdown(tracker))
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            pass


def _do_shutdown(tracker: IncidentTracker) -> None:
    console.print_shutdown()
    tracker.shutdown()


async def async_main(config: Config) -> None:
    """Async entry point."""
    settings = config.settings
    console.print_banner(config.page.name, config.page.url, settings.check_interval)

    # One session for feed fetches and webhook calls
    async with aiohttp.ClientSession() as session:
        tracker = IncidentTracker(
            config,
            store=IncidentStore(settings.db),
            client=StatusPageClient(config.page.url, session, timeout=settings.request_timeout),
            webhook=WebhookClient(config.webhook, session, timeout=settings.request_timeout),
        )
        _handle_signals(tracker, asyncio.get_running_loop())

        runner = None
        if settings.health_port:
            runner = web.AppRunner(build_health_app(tracker))
            await runner.setup()
            await web.TCPSite(runner, "0.0.0.0", settings.health_port).start()

        try:
            await tracker.run()
        finally:
            if runner is not None:
                await runner.cleanup()


def main() -> None:
    """Sync entry point."""
    try:
        config = load_config()
        config.validate()
    except ConfigError as exc:
        console.error(f"Configuration error: {exc}")
        sys.exit(1)

    console.set_log_level(config.settings.log_level)

    try:
        asyncio.run(async_main(config))
    except StoreError as exc:
        console.error(f"Incident store error: {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        # Signal handler already printed shutdown message
        sys.exit(0)


if __name__ == "__main__":
    main()
