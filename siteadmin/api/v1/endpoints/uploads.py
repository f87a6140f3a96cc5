# siteadmin/api/v1/endpoints/uploads.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from siteadmin.db.session import get_db
from siteadmin.deps.auth import get_current_admin
from siteadmin.models.auth import AdminUser
from siteadmin.services.upload_service import get_upload, save_image_upload

router = APIRouter()


@router.post("")
async def upload_image_endpoint(
    file: Optional[UploadFile] = File(default=None),
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
):
    data = await file.read() if file is not None else b""
    result = save_image_upload(
        db,
        file_name=file.filename if file is not None else None,
        content_type=file.content_type if file is not None else None,
        data=data,
    )
    if "error" in result:
        return JSONResponse(status_code=400, content={"error": result["error"]})
    db.commit()
    return {"url": result["url"]}


@router.get("/{upload_id}")
def get_upload_endpoint(upload_id: str, db: Session = Depends(get_db)):
    upload = get_upload(db, upload_id)
    if upload is None:
        raise HTTPException(status_code=404, detail="Image not found")
    return Response(
        content=upload.data,
        media_type=upload.mime_type,
        headers={"Cache-Control": "public, max-age=31536000, immutable"},
    )
