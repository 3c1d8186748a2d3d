"""
Service routes (non-resource).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_user_store
from database.store import UserStore

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(store: UserStore = Depends(get_user_store)):
    if await store.ping():
        return {"status": "ok"}
    return JSONResponse(status_code=503, content={"status": "unavailable"})
