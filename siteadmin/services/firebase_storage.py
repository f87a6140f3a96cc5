# siteadmin/services/firebase_storage.py
from __future__ import annotations

import os
import urllib.parse
import uuid
from typing import BinaryIO

import firebase_admin
from firebase_admin import credentials, storage

from siteadmin.core.settings import settings

_FIREBASE_APP = None


def _normalize_bucket(bucket: str) -> str:
    if bucket.startswith("gs://"):
        return bucket[5:]
    return bucket


def is_firebase_configured() -> bool:
    cred_path = settings.FIREBASE_CREDENTIALS_PATH or ""
    bucket = settings.FIREBASE_STORAGE_BUCKET or ""
    if not cred_path or not bucket:
        return False
    return os.path.exists(cred_path)


def _get_firebase_app():
    global _FIREBASE_APP
    if _FIREBASE_APP is not None:
        return _FIREBASE_APP
    try:
        _FIREBASE_APP = firebase_admin.get_app()
        return _FIREBASE_APP
    except ValueError:
        pass

    if not is_firebase_configured():
        raise RuntimeError("Firebase Storage is not configured (FIREBASE_CREDENTIALS_PATH / FIREBASE_STORAGE_BUCKET)")

    cred = credentials.Certificate(settings.FIREBASE_CREDENTIALS_PATH)
    _FIREBASE_APP = firebase_admin.initialize_app(
        cred,
        {"storageBucket": _normalize_bucket(settings.FIREBASE_STORAGE_BUCKET or "")},
    )
    return _FIREBASE_APP


def upload_file_to_firebase(file_obj: BinaryIO, content_type: str | None, dest_path: str) -> str:
    """Uploads and returns a public download URL carrying a download token."""
    app = _get_firebase_app()
    bucket = storage.bucket(app=app)

    token = uuid.uuid4().hex
    blob = bucket.blob(dest_path)
    blob.metadata = {"firebaseStorageDownloadTokens": token}
    blob.upload_from_file(file_obj, content_type=(content_type or "application/octet-stream"))

    bucket_name = _normalize_bucket(settings.FIREBASE_STORAGE_BUCKET or "")
    encoded_path = urllib.parse.quote(dest_path, safe="")
    return f"https://firebasestorage.googleapis.com/v0/b/{bucket_name}/o/{encoded_path}?alt=media&token={token}"
