# siteadmin/api/v1/responses.py
from __future__ import annotations

from fastapi.responses import JSONResponse

from siteadmin.schemas.actions import ActionState


def action_response(state: ActionState) -> JSONResponse:
    """ActionState -> JSON; error states carry the status code of their error kind."""
    status_code = state.status_code if state.status == "error" else 200
    return JSONResponse(status_code=status_code, content=state.model_dump(exclude_none=True))
