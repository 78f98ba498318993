"""Welcome route served at the site root."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def index() -> str:
    return "Welcome to index route!"
