"""
Customer endpoints.

These routes expose listing and creation of customers to browsers and
HTTP clients.  The listing is rendered as an HTML page and new
customers are submitted either from the inline form at
``/customer/new`` (URL-encoded) or as a JSON object.  Successful
creation redirects back to the listing.

Updating and deleting customers is only available from the console
menu; there are deliberately no routes for it here.

Errors never propagate out of a handler: a missing field becomes a
400 response and a database failure a 500 response, both with a short
plain-text body.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from customer_manager.app.api.deps import get_customer_service
from customer_manager.app.core.exceptions import StoreError, ValidationError
from customer_manager.app.services.customer_service import CustomerService

logger = logging.getLogger(__name__)

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))

NEW_CUSTOMER_FORM = (
    '<form method="POST" action="/customers">'
    '<input name="name" placeholder="Name" />'
    '<input name="age" placeholder="Age" />'
    '<button type="submit">Create</button>'
    "</form>"
)


async def read_customer_payload(request: Request) -> Dict[str, Any]:
    """Return the submitted fields from a JSON or form-encoded body.

    A body that cannot be decoded, or JSON that is not an object,
    yields an empty dict so that validation reports the missing
    fields.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return {}
        return payload if isinstance(payload, dict) else {}
    form = await request.form()
    return dict(form)


@router.get("/customers", response_class=HTMLResponse)
async def list_customers(
    request: Request,
    service: CustomerService = Depends(get_customer_service),
):
    """Render every stored customer as an HTML list."""
    try:
        customers = await service.list_customers()
    except StoreError as exc:
        logger.error("Error fetching customers: %s", exc)
        return PlainTextResponse(
            "An error occurred while fetching customers.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    logger.debug("Fetched %d customers", len(customers))
    return templates.TemplateResponse(request, "customers/index.html", {"customers": customers})


@router.get("/customer/new", response_class=HTMLResponse)
async def new_customer_form() -> str:
    return NEW_CUSTOMER_FORM


@router.post("/customers")
async def create_customer(
    request: Request,
    service: CustomerService = Depends(get_customer_service),
):
    """Create a customer from the submitted ``name`` and ``age``.

    Redirects to ``/customers`` on success.  Returns 400 if either
    field is missing, empty or of the wrong type, and 500 if the
    database rejects the insert.
    """
    payload = await read_customer_payload(request)
    logger.debug("Received data: %s", payload)
    try:
        customer = await service.create_customer(payload.get("name"), payload.get("age"))
    except ValidationError as exc:
        return PlainTextResponse(str(exc), status_code=status.HTTP_400_BAD_REQUEST)
    except StoreError as exc:
        logger.error("Error creating customer: %s", exc)
        return PlainTextResponse(
            "An error occurred while creating the customer",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    logger.info("New customer created: %s", customer)
    return RedirectResponse("/customers", status_code=status.HTTP_303_SEE_OTHER)
