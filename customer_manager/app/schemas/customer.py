"""
Pydantic schemas for customer records.

A customer has a name and an age.  The age is free-form: web forms and
the console submit text, JSON clients may submit a number, and both
are stored as given.  The identifier is the string form of the MongoDB
``ObjectId`` assigned on insert.
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, field_validator

# Validated in smart mode: numbers stay numbers and text stays text.
Age = Union[int, float, str]


class CustomerCreate(BaseModel):
    """Schema for creating a new customer.  Both fields are required."""

    name: str = Field(..., description="Customer name")
    age: Age = Field(..., description="Customer age, as text or a number")

    @field_validator("name", mode="before")
    @classmethod
    def number_as_text(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("name", "age")
    @classmethod
    def not_empty(cls, v):
        if isinstance(v, str) and v == "":
            raise ValueError("must not be empty")
        return v


class CustomerUpdate(BaseModel):
    """Schema for updating a customer.

    Fields left as ``None`` keep their stored value.  Values are not
    checked for emptiness; an update writes exactly what it is given.
    """

    name: Optional[str] = None
    age: Optional[Age] = None


class CustomerRead(BaseModel):
    """Schema for reading a stored customer."""

    id: str
    name: Optional[str] = None
    age: Optional[Union[int, float, str]] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "CustomerRead":
        """Build a read schema from a raw MongoDB document."""
        return cls(id=str(doc["_id"]), name=doc.get("name"), age=doc.get("age"))

    def __str__(self) -> str:
        return f"ID: {self.id}, Name: {self.name}, Age: {self.age}"
