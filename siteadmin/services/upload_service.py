# siteadmin/services/upload_service.py
"""
Image uploads for config editors.

Returns ``{"url": ...}`` on success and ``{"error": ...}`` otherwise. Files go
to Firebase Storage when it is configured, else into the ``uploads`` table
and are served back by ``GET /api/v1/uploads/{id}``.
"""
from __future__ import annotations

import io
import logging
import os
import time
import uuid
from typing import Optional

from sqlalchemy.orm import Session

from siteadmin.core.settings import settings
from siteadmin.models.upload import Upload
from siteadmin.services.firebase_storage import is_firebase_configured, upload_file_to_firebase

logger = logging.getLogger(__name__)

ALLOWED_MIME_PREFIX = "image/"


def max_upload_bytes() -> int:
    return int(settings.UPLOAD_MAX_MB) * 1024 * 1024


def ensure_extension(file_name: str, mime_type: str) -> str:
    ext = os.path.splitext(file_name or "")[1]
    if ext:
        return ext.lower()
    from_mime = (mime_type or "").split("/", 1)[1] if "/" in (mime_type or "") else ""
    return f".{from_mime.lower()}" if from_mime else ".png"


def validate_image_upload(file_name: Optional[str], content_type: Optional[str], size: int) -> Optional[str]:
    """Error message, or None when the file is acceptable."""
    if file_name is None:
        return "No file selected"
    if not (content_type or "").startswith(ALLOWED_MIME_PREFIX):
        return "Only image files can be uploaded"
    if size > max_upload_bytes():
        return f"Image size must not exceed {settings.UPLOAD_MAX_MB}MB"
    return None


def save_image_upload(
    db: Session,
    *,
    file_name: Optional[str],
    content_type: Optional[str],
    data: bytes,
) -> dict:
    error = validate_image_upload(file_name, content_type, len(data or b""))
    if error:
        return {"error": error}

    upload_id = uuid.uuid4().hex
    extension = ensure_extension(file_name or "", content_type or "")
    safe_name = f"{int(time.time() * 1000)}-{upload_id}{extension}"

    if is_firebase_configured():
        dest_path = f"{settings.UPLOAD_PATH_PREFIX.strip('/')}/{safe_name}"
        try:
            url = upload_file_to_firebase(io.BytesIO(data), content_type, dest_path)
        except Exception:
            logger.exception("firebase upload failed for %s", dest_path)
            return {"error": "Upload failed, please try again later"}
        logger.info("uploaded %s to firebase (%d bytes)", dest_path, len(data))
        return {"url": url}

    db.add(Upload(id=upload_id, file_name=safe_name, mime_type=content_type, size=len(data), data=data))
    db.flush()
    logger.info("stored upload %s in database (%d bytes)", upload_id, len(data))
    return {"url": f"{settings.API_V1_STR}/uploads/{upload_id}", "id": upload_id}


def get_upload(db: Session, upload_id: str) -> Optional[Upload]:
    if not upload_id or not upload_id.strip():
        return None
    return db.get(Upload, upload_id.strip())
