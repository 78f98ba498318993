"""
Shared FastAPI dependencies.

The customer service is attached to ``app.state`` by ``create_app`` and
handed to route handlers through :func:`get_customer_service`, so
routes never construct database clients themselves.
"""

from fastapi import Request

from customer_manager.app.services.customer_service import CustomerService


def get_customer_service(request: Request) -> CustomerService:
    return request.app.state.customer_service
