"""
Pydantic schema definitions for customer payloads.

Schemas are separated from the stored MongoDB documents to decouple
the API and console representation from persistence.
"""
