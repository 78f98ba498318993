"""
Main entrypoint for the Customer Manager web application.

This module assembles the FastAPI application, sets up logging and
includes the routers.  The ``create_app`` function builds and
configures the app around a :class:`CustomerService`, which is then
instantiated at module import time as ``app``.  Importing the app here
makes it easy to run with uvicorn or another ASGI server, e.g.::

    uvicorn customer_manager.app.main:app --port 3001

``run.py`` at the project root serves the same ``app`` and starts the
console menu next to it, sharing ``app.state.customer_service``.
"""

from typing import Optional

from fastapi import FastAPI

from .api.router import router
from .core.config import settings
from .core.db import check_connection, create_client, get_customer_collection
from .core.logging_config import setup_logging
from .services.customer_service import CustomerService


def create_app(service: Optional[CustomerService] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    service : Optional[CustomerService]
        The customer store the routes should use.  When omitted, a
        motor client is created from ``settings.mongodb_uri`` and the
        service is bound to its ``customers`` collection.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.  The service is
        available as ``app.state.customer_service``.
    """
    # Initialise logging before anything else so that the startup
    # check below can log its outcome.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version)

    client = None
    if service is None:
        client = create_client(settings.mongodb_uri)
        service = CustomerService(get_customer_collection(client))
    app.state.customer_service = service

    app.include_router(router)

    if client is not None:
        # Report connectivity once at startup.  A failure does not stop
        # the server; requests answer 500 until MongoDB is reachable.
        @app.on_event("startup")
        async def startup_event() -> None:
            await check_connection(client)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
