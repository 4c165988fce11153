"""Liveness endpoint."""

import time
from typing import Any, Dict

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("")
async def health(request: Request) -> Dict[str, Any]:
    started_at = getattr(request.app.state, "started_at", time.monotonic())
    return {"status": "ok", "uptime": round(time.monotonic() - started_at, 3)}
