"""Unified entry point for the web server and the console menu.

This script launches the FastAPI application under uvicorn and the
interactive customer menu concurrently in one process.  It is intended
to be executed from the project root::

    python run.py

Configuration such as ``MONGODB_URI`` and ``PORT`` is read from the
environment or from a ``.env`` file in the working directory.

Quitting the menu leaves the web server running.  The process stops
when uvicorn receives a termination signal (e.g. Ctrl+C).
"""
import asyncio
import logging

from uvicorn import Config, Server

from customer_manager.app.core.config import settings
from customer_manager.app.main import app
from customer_manager.console import ConsoleReader, CustomerConsole


async def run_api() -> None:
    """Start the web application using Uvicorn."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level="info")
    server = Server(config)
    logging.info("Server is running on http://localhost:%d", settings.port)
    await server.serve()


async def run_console() -> None:
    """Run the console menu against the web application's store."""
    console = CustomerConsole(app.state.customer_service, ConsoleReader())
    await console.run()


def _report_console_exit(task: asyncio.Task) -> None:
    if not task.cancelled() and task.exception() is not None:
        logging.error("Exception in console", exc_info=task.exception())


async def main() -> None:
    """Serve HTTP until shutdown while the console menu runs alongside."""
    api_task = asyncio.create_task(run_api())
    console_task = asyncio.create_task(run_console())
    console_task.add_done_callback(_report_console_exit)
    try:
        await api_task
    finally:
        console_task.cancel()
        await asyncio.gather(console_task, return_exceptions=True)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
