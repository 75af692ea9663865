"""
dealbook.api.routers.deals

Deal endpoints for authenticated users.

Responsibilities:
- Save a deal from the valuation form (`POST /save`).
- List the caller's deals (`GET /get-deals`).
- Fetch one deal after an ownership check (`GET /get-deal/{deal_id}`).
"""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from dealbook.api.body import json_object_body
from dealbook.api.deps import db_session
from dealbook.auth.deps import require_owner
from dealbook.auth.models import Principal
from dealbook.db.base import to_jsonable
from dealbook.db.repositories.records import RecordRepo
from dealbook.errors import GatewayFailure, NotFound, OwnershipMismatch, ValidationError
from dealbook.observability.logging import get_logger
from dealbook.records.mapping import RecordKind, map_record

router = APIRouter(tags=["deals"])
log = get_logger(__name__)

DEAL_LIST_COLUMNS = ("deal_id", "business_name")


def _parse_deal_id(raw: str) -> uuid.UUID:
    if not raw.strip():
        raise ValidationError("Deal ID is required.")
    try:
        return uuid.UUID(raw.strip())
    except ValueError as e:
        raise ValidationError("Deal ID is not valid.") from e


@router.post("/save", status_code=HTTP_201_CREATED)
async def save_deal(
    principal: Principal = Depends(require_owner),
    body: dict[str, Any] = Depends(json_object_body),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    record = map_record(RecordKind.deal, body, principal)
    try:
        deal = await RecordRepo(session).create(RecordKind.deal, record)
        await session.commit()
    except SQLAlchemyError as e:
        log.error("deal_insert_failed", error_type=type(e).__name__)
        raise GatewayFailure("Failed to save deal.") from e

    log.info("deal_saved", deal_id=str(deal.deal_id))
    return {"message": "Deal saved successfully!", "deal": deal.as_dict()}


@router.get("/get-deals")
async def get_deals(
    principal: Principal = Depends(require_owner),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    try:
        rows = await RecordRepo(session).list_by_owner(
            RecordKind.deal, principal.user_id, DEAL_LIST_COLUMNS
        )
    except SQLAlchemyError as e:
        log.error("deal_list_failed", error_type=type(e).__name__)
        raise GatewayFailure("Failed to fetch deals.") from e

    return {"deals": [{k: to_jsonable(v) for k, v in row.items()} for row in rows]}


@router.get("/get-deal")
@router.get("/get-deal/")
async def get_deal_missing_id(principal: Principal = Depends(require_owner)) -> dict[str, Any]:
    raise ValidationError("Deal ID is required.")


@router.get("/get-deal/{deal_id}")
async def get_deal(
    deal_id: str,
    principal: Principal = Depends(require_owner),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    parsed_id = _parse_deal_id(deal_id)
    try:
        deal = await RecordRepo(session).get_by_id(RecordKind.deal, parsed_id)
    except SQLAlchemyError as e:
        log.error("deal_fetch_failed", deal_id=deal_id, error_type=type(e).__name__)
        raise GatewayFailure("Failed to fetch deal.") from e

    if deal is None:
        raise NotFound("Deal not found.")
    if deal.user_id != principal.user_id:
        # Existence is not hidden: a foreign deal is a 403, not a 404.
        raise OwnershipMismatch("You do not have access to this deal.")
    return {"deal": deal.as_dict()}


# --- Module Notes -----------------------------------------------------------
# Each route makes exactly one repository call; nothing is retried.
