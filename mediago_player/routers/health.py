"""Health router."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/healthy", response_class=PlainTextResponse)
async def healthy():
    return "ok"
