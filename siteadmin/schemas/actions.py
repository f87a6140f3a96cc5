# siteadmin/schemas/actions.py
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from siteadmin.core.errors import SiteAdminError

ActionStatus = Literal["idle", "success", "error"]


class ActionState(BaseModel):
    """Result of an admin mutation: idle before submit, then success or error."""
    status: ActionStatus = "idle"
    message: Optional[str] = None
    code: Optional[str] = None
    status_code: int = Field(200, exclude=True)

    @classmethod
    def idle(cls) -> "ActionState":
        return cls(status="idle")

    @classmethod
    def success(cls, message: str) -> "ActionState":
        return cls(status="success", message=message)

    @classmethod
    def failure(cls, exc: SiteAdminError) -> "ActionState":
        return cls(status="error", message=exc.message, code=exc.code, status_code=exc.status_code)

    @property
    def ok(self) -> bool:
        return self.status == "success"
