# siteadmin/api/v1/router.py
from fastapi import APIRouter

from .endpoints import health, history, site_configs, translations, uploads, users, visibility
from siteadmin.api.v1 import auth as auth_endpoints

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth_endpoints.router, prefix="/auth")
api_router.include_router(users.router)  # /users
api_router.include_router(site_configs.router, prefix="/site-configs", tags=["site-configs"])
api_router.include_router(history.router, prefix="/history", tags=["history"])
api_router.include_router(visibility.router, prefix="/visibility", tags=["visibility"])
api_router.include_router(uploads.router, prefix="/uploads", tags=["uploads"])
api_router.include_router(translations.router, prefix="/translations", tags=["translations"])
