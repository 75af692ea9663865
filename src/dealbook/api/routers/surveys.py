"""
dealbook.api.routers.surveys

Onboarding survey endpoint (`POST /save-survey`).
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from dealbook.api.body import json_object_body
from dealbook.api.deps import db_session
from dealbook.auth.deps import require_owner
from dealbook.auth.models import Principal
from dealbook.db.repositories.records import RecordRepo
from dealbook.errors import GatewayFailure
from dealbook.observability.logging import get_logger
from dealbook.records.mapping import RecordKind, map_record

router = APIRouter(tags=["surveys"])
log = get_logger(__name__)


@router.post("/save-survey", status_code=HTTP_201_CREATED)
async def save_survey(
    principal: Principal = Depends(require_owner),
    body: dict[str, Any] = Depends(json_object_body),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    record = map_record(RecordKind.survey, body, principal)
    try:
        survey = await RecordRepo(session).create(RecordKind.survey, record)
        await session.commit()
    except SQLAlchemyError as e:
        log.error("survey_insert_failed", error_type=type(e).__name__)
        raise GatewayFailure("Failed to save survey.") from e

    return {"message": "Survey saved successfully!", "survey": survey.as_dict()}
