# siteadmin/core/errors.py
"""
Error taxonomy shared by services, the action boundary and the HTTP layer.

Services raise these; ``services.admin_actions`` turns them into an
``ActionState`` and the routers turn error states into JSON responses with
``status_code``.
"""
from __future__ import annotations

from typing import Any, Optional


class SiteAdminError(Exception):
    code: str = "error"
    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None, *, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(SiteAdminError):
    """Empty key, malformed JSON payload, duplicate field name, etc."""
    code = "validation"
    status_code = 400
    default_message = "Invalid input"


class AuthorizationError(SiteAdminError):
    code = "authorization"
    status_code = 403
    default_message = "Only superadmin can perform this action"


class NotFoundError(SiteAdminError):
    code = "not_found"
    status_code = 404
    default_message = "Record not found"


class PersistenceError(SiteAdminError):
    """Storage failure. The message stays generic; the cause is logged."""
    code = "persistence"
    status_code = 503
    default_message = "Save failed, please try again later"


class TranslationError(SiteAdminError):
    code = "translation"
    status_code = 502
    default_message = "Translation service call failed"

    def __init__(self, message: Optional[str] = None, *, status_code: int | None = None, details: Any = None):
        super().__init__(message, details=details)
        if status_code is not None:
            self.status_code = status_code


class PayloadTooLargeError(ValidationError):
    code = "payload_too_large"
    status_code = 413
    default_message = "Payload too large"
