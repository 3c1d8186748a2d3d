"""
User resource routes — list/get, create, replace, delete.

Route prefix: /api/auth/signup
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from api.dependencies import get_user_store
from auth.password import hash_password
from database.store import DuplicateEmail, UserNotFound, UserStore
from utils.schemas import serialize_user
from utils.validators import validate_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])

USER_NOT_FOUND = "User not found"
USER_EXISTS = "The user already exists"
INVALID_INPUT = "Invalid User input"


# ── Helpers ────────────────────────────────────────────────────────────


async def _read_json(request: Request) -> Any:
    body = await request.body()
    try:
        return json.loads(body)
    except (ValueError, UnicodeDecodeError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Request body must be valid JSON",
        )


def _require_id(user_id: Optional[str]) -> str:
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing 'id' query parameter",
        )
    return user_id


def _invalid(details: list) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": INVALID_INPUT, "details": details},
    )


# ── Endpoints ──────────────────────────────────────────────────────────


@router.get("")
async def get_users(
    user_id: Optional[str] = Query(None, alias="id"),
    store: UserStore = Depends(get_user_store),
) -> Dict[str, Any]:
    """Return one user when ``id`` is given, otherwise every user."""
    if user_id:
        try:
            user = await store.get(user_id)
        except UserNotFound:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)
        return {"users": serialize_user(user)}

    users = await store.list_all()
    return {"users": [serialize_user(u) for u in users]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: Request,
    store: UserStore = Depends(get_user_store),
) -> Dict[str, Any]:
    """Register a new user."""
    payload = await _read_json(request)
    value, errors = validate_user(payload, creating=True)
    if errors:
        return _invalid(errors)

    if await store.find_by_email(value.email) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=USER_EXISTS)

    record = value.to_record()
    record["password_hash"] = await hash_password(value.password)
    try:
        user = await store.create(record)
    except DuplicateEmail:
        # lost the race against a concurrent signup with the same email
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=USER_EXISTS)

    return {"message": "User created successfully", "user": serialize_user(user)}


@router.put("")
async def replace_user(
    request: Request,
    user_id: Optional[str] = Query(None, alias="id"),
    store: UserStore = Depends(get_user_store),
) -> Dict[str, Any]:
    """Replace every field of an existing user."""
    user_id = _require_id(user_id)
    payload = await _read_json(request)
    value, errors = validate_user(payload)
    if errors:
        return _invalid(errors)

    record = value.to_record()
    if value.password is not None:
        record["password_hash"] = await hash_password(value.password)
    try:
        user = await store.replace(user_id, record)
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)
    except DuplicateEmail:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=USER_EXISTS)

    return {"message": "User updated successfully", "user": serialize_user(user)}


@router.delete("")
async def delete_user(
    user_id: Optional[str] = Query(None, alias="id"),
    store: UserStore = Depends(get_user_store),
) -> Dict[str, Any]:
    user_id = _require_id(user_id)
    try:
        await store.delete(user_id)
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)
    return {"message": "User deleted successfully"}
