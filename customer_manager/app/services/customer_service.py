"""
Service layer for customer records.

This module provides the CRUD operations shared by the web endpoints
and the console menu.  Each customer is one document in the
``customers`` collection holding a ``name`` and an ``age``; MongoDB
assigns the ``_id`` on insert.

The service is constructed with an explicit collection handle rather
than reaching for a global connection, so the application factory,
the console and the tests can all decide which database it talks to.

Lookups by identifier return ``None`` when no document matches.  Any
failure raised by the driver, including an identifier that is not a
valid ``ObjectId``, is re-raised as :class:`StoreError`.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from bson import ObjectId
from bson.errors import BSONError, InvalidId
from pydantic import ValidationError as SchemaValidationError
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from customer_manager.app.core.exceptions import StoreError, ValidationError
from customer_manager.app.schemas.customer import CustomerCreate, CustomerRead, CustomerUpdate

logger = logging.getLogger(__name__)

# Failures raised while talking to MongoDB.  Encoding errors (an int
# wider than 64 bits, an unencodable value) are raised by bson before
# anything is sent and are not PyMongoError subclasses.
DATABASE_ERRORS = (PyMongoError, BSONError, OverflowError)


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _object_id(customer_id: str) -> ObjectId:
    try:
        return ObjectId(customer_id)
    except (InvalidId, TypeError) as exc:
        raise StoreError(f"Invalid customer id {customer_id!r}") from exc


class CustomerService:
    """Service class for managing customer records."""

    def __init__(self, collection: Any) -> None:
        self.collection = collection

    async def create_customer(self, name: Any, age: Any) -> CustomerRead:
        """Insert a new customer and return the created record.

        Raises ``ValidationError`` if either field is missing or empty,
        or if the age is neither text nor a number.  A numeric name is
        stored as text.
        """
        if _is_blank(name) or _is_blank(age):
            raise ValidationError("Name and age are required")
        try:
            data = CustomerCreate(name=name, age=age)
        except SchemaValidationError as exc:
            raise ValidationError("Name must be text and age text or a number") from exc

        doc = data.model_dump()
        try:
            result = await self.collection.insert_one(doc)
        except DATABASE_ERRORS as exc:
            raise StoreError(str(exc)) from exc
        doc["_id"] = result.inserted_id
        customer = CustomerRead.from_document(doc)
        logger.info("Created customer %s", customer.id)
        return customer

    async def list_customers(self) -> List[CustomerRead]:
        """Return every customer in the order the database yields them."""
        try:
            docs = await self.collection.find().to_list(length=None)
        except DATABASE_ERRORS as exc:
            raise StoreError(str(exc)) from exc
        return [CustomerRead.from_document(doc) for doc in docs]

    async def update_customer(
        self,
        customer_id: str,
        name: Optional[str] = None,
        age: Optional[Any] = None,
    ) -> Optional[CustomerRead]:
        """Replace the name and age of an existing customer.

        Only fields that are not ``None`` are written.  Returns the
        updated record, or ``None`` if the customer does not exist.
        Raises ``ValidationError`` only for values of the wrong type;
        empty strings are written as given.
        """
        try:
            changes = CustomerUpdate(name=name, age=age).model_dump(exclude_none=True)
        except SchemaValidationError as exc:
            raise ValidationError("Name must be text and age text or a number") from exc
        oid = _object_id(customer_id)
        try:
            if changes:
                doc = await self.collection.find_one_and_update(
                    {"_id": oid},
                    {"$set": changes},
                    return_document=ReturnDocument.AFTER,
                )
            else:
                doc = await self.collection.find_one({"_id": oid})
        except DATABASE_ERRORS as exc:
            raise StoreError(str(exc)) from exc
        if doc is None:
            return None
        logger.info("Updated customer %s", customer_id)
        return CustomerRead.from_document(doc)

    async def delete_customer(self, customer_id: str) -> Optional[CustomerRead]:
        """Delete a customer and return the record as it was stored.

        Returns ``None`` if the customer does not exist.
        """
        oid = _object_id(customer_id)
        try:
            doc = await self.collection.find_one_and_delete({"_id": oid})
        except DATABASE_ERRORS as exc:
            raise StoreError(str(exc)) from exc
        if doc is None:
            return None
        logger.info("Deleted customer %s", customer_id)
        return CustomerRead.from_document(doc)
