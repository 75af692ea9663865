"""
dealbook.api.body

Request body dependency for the write routes.

The body is read only after the caller is authenticated, so a request without
credentials is always answered with 401, whatever its body.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import Depends, Request

from dealbook.auth.deps import require_owner
from dealbook.auth.models import Principal
from dealbook.errors import ValidationError

_NOT_AN_OBJECT = "Request body must be a JSON object."


async def json_object_body(
    request: Request,
    principal: Principal = Depends(require_owner),
) -> dict[str, Any]:
    raw = await request.body()
    # An empty body (or JSON null) maps to a blank record.
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise ValidationError(_NOT_AN_OBJECT) from e
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError(_NOT_AN_OBJECT)
    return body
