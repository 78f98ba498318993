"""Interactive console menu for the customer manager.

This module implements the text menu that runs next to the web server
in the same process.  It offers the full set of customer operations:

* Create a customer from a name and an age.
* List all customers as numbered lines.
* Update a customer's name and age by identifier.
* Delete a customer by identifier.

The menu talks to the same :class:`CustomerService` as the web routes.
Input is read through a reader object with an ``async read(prompt)``
method.  :class:`ConsoleReader` reads from stdin on a background thread
so that waiting for the operator never holds up HTTP requests; tests
pass a scripted reader instead.

Errors raised by the service are logged with the name of the action
and the menu is shown again.  The loop ends when the operator picks
``5`` or when stdin is closed or unreadable.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Awaitable, Callable, Dict, Protocol

from customer_manager.app.core.exceptions import StoreError, ValidationError
from customer_manager.app.services.customer_service import CustomerService


logger = logging.getLogger(__name__)

MENU = """ Welcome to the CRM

    What would you like to do?

    1. Create a customer
    2. View all customers
    3. Update a customer
    4. Delete a customer
    5. Quit
  """

QUIT = "5"


class LineReader(Protocol):
    async def read(self, prompt: str) -> str: ...


class ConsoleReader:
    """Read lines from stdin without blocking the event loop.

    Each call starts a daemon thread that performs the blocking
    ``input()`` and resolves a future on the loop.  Daemon threads do
    not keep the process alive, so an unanswered prompt never delays
    shutdown.  ``EOFError`` from a closed stdin and ``OSError`` from
    an unreadable one are re-raised to the caller.
    """

    async def read(self, prompt: str) -> str:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str] = loop.create_future()

        def resolve(line=None, exc=None) -> None:
            if future.done():
                return
            if exc is not None:
                future.set_exception(exc)
            else:
                future.set_result(line)

        def worker() -> None:
            try:
                line = input(prompt)
            except (EOFError, OSError) as exc:
                loop.call_soon_threadsafe(resolve, None, exc)
            else:
                loop.call_soon_threadsafe(resolve, line)

        threading.Thread(target=worker, name="console-input", daemon=True).start()
        return await future


class CustomerConsole:
    """Menu loop mapping numeric choices to customer operations."""

    def __init__(self, service: CustomerService, reader: LineReader) -> None:
        self.service = service
        self.reader = reader
        self.running = False
        self._actions: Dict[str, Callable[[], Awaitable[None]]] = {
            "1": self.create_customer,
            "2": self.view_all_customers,
            "3": self.update_customer,
            "4": self.delete_customer,
        }

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    async def run(self) -> None:
        """Show the menu and handle choices until the operator quits."""
        self.running = True
        while self.running:
            print(MENU)
            try:
                choice = await self.reader.read("Choose an action(1-5): ")
                await self.handle(choice)
            except EOFError:
                logger.info("Console input closed, stopping the menu")
                self.running = False
            except OSError as exc:
                logger.error("Console input unavailable, stopping the menu: %s", exc)
                self.running = False

    async def handle(self, choice: str) -> None:
        """Dispatch a single menu choice."""
        if choice == QUIT:
            self.running = False
            print("Exiting...")
            return
        action = self._actions.get(choice)
        if action is None:
            print("Invalid option. Please choose a valid action (1-5).")
            return
        await action()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    async def create_customer(self) -> None:
        name = await self.reader.read("Enter customer's name: ")
        age = await self.reader.read("Enter customer's age: ")
        if not name or not age:
            print("Both name and age are required!")
            return
        try:
            customer = await self.service.create_customer(name, age)
        except (ValidationError, StoreError) as exc:
            logger.error("Error creating customer: %s", exc)
            return
        print(f"Customer created: {customer}")

    async def view_all_customers(self) -> None:
        try:
            customers = await self.service.list_customers()
        except StoreError as exc:
            logger.error("Error retrieving customers: %s", exc)
            return
        print("All customers:")
        for index, customer in enumerate(customers, start=1):
            print(f"{index}. Name: {customer.name}, Age: {customer.age}")

    async def update_customer(self) -> None:
        customer_id = await self.reader.read("Enter the ID of the customer to update: ")
        name = await self.reader.read("Enter the new customer's name: ")
        age = await self.reader.read("Enter the new customer's age: ")
        try:
            customer = await self.service.update_customer(customer_id, name, age)
        except (ValidationError, StoreError) as exc:
            logger.error("Error updating customer: %s", exc)
            return
        if customer is None:
            print("Customer not found.")
        else:
            print(f"Customer updated: {customer}")

    async def delete_customer(self) -> None:
        customer_id = await self.reader.read("Enter the ID of the customer to delete: ")
        try:
            customer = await self.service.delete_customer(customer_id)
        except StoreError as exc:
            logger.error("Error deleting customer: %s", exc)
            return
        if customer is None:
            print("Customer not found.")
        else:
            print(f"Customer deleted: {customer}")
