"""
MongoDB integration.

This module builds the asynchronous ``motor`` client from the
configured connection string, resolves the ``customers`` collection
and performs the startup connectivity check.  Nothing here is a
module-level singleton: the application factory creates the client and
hands the collection to :class:`CustomerService`, which in turn is
shared with the console menu.

Creating a client does not open a connection; the driver connects
lazily on the first operation.  A server that cannot be reached
therefore surfaces as a ``PyMongoError`` on the first query rather
than at construction time.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.errors import PyMongoError

# Database used when the connection string names none.  Matches the
# default chosen by the MongoDB drivers themselves.
DEFAULT_DATABASE = "test"
CUSTOMER_COLLECTION = "customers"

# Fail queries after five seconds instead of the driver's thirty when
# no server is reachable, so the console does not appear frozen.
SERVER_SELECTION_TIMEOUT_MS = 5000

logger = logging.getLogger(__name__)


def create_client(uri: str) -> AsyncIOMotorClient:
    """Return a new motor client for ``uri``."""
    return AsyncIOMotorClient(uri, serverSelectionTimeoutMS=SERVER_SELECTION_TIMEOUT_MS)


def get_customer_collection(client: AsyncIOMotorClient) -> AsyncIOMotorCollection:
    """Resolve the customers collection in the URI's database."""
    database = client.get_default_database(default=DEFAULT_DATABASE)
    return database[CUSTOMER_COLLECTION]


async def check_connection(client: AsyncIOMotorClient) -> bool:
    """Ping the server and log the outcome.

    Returns ``True`` when the server answered.  A failure is logged and
    reported as ``False``; startup continues and later operations will
    raise ``StoreError`` until the server is reachable again.
    """
    try:
        await client.admin.command("ping")
    except PyMongoError as exc:
        logger.error("MongoDB connection failed: %s", exc)
        return False
    logger.info("Connected to MongoDB")
    return True
