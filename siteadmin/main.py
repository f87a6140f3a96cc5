# siteadmin/main.py
from __future__ import annotations

from fastapi.openapi.utils import get_openapi
from fastapi.routing import APIRoute
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from siteadmin.api.v1.router import api_router
from siteadmin.core.config import create_app
from siteadmin.core.logging import configure_logging
from siteadmin.core.settings import settings

# routes that stay public in the OpenAPI docs
PUBLIC_PATHS = (
    f"{settings.API_V1_STR}/health/",
    f"{settings.API_V1_STR}/auth/login",
    f"{settings.API_V1_STR}/auth/refresh",
    f"{settings.API_V1_STR}/visibility/resolve",
)

configure_logging()
app = create_app()

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")


def _inject_bearer_security(app):
    """Global bearerAuth in OpenAPI; public routes get an empty security list."""
    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=settings.APP_NAME,
            version="1.0.0",
            description="Site config admin API",
            routes=app.routes,
        )
        components = openapi_schema.setdefault("components", {})
        security_schemes = components.setdefault("securitySchemes", {})
        security_schemes["bearerAuth"] = {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
        openapi_schema["security"] = [{"bearerAuth": []}]

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi


def _mark_public_routes(app):
    for route in app.routes:
        if not isinstance(route, APIRoute):
            continue
        path = route.path or ""
        is_upload_read = path.startswith(f"{settings.API_V1_STR}/uploads/") and "GET" in (route.methods or set())
        if path.startswith(PUBLIC_PATHS) or is_upload_read:
            extra = dict(route.openapi_extra or {})
            extra["security"] = []
            route.openapi_extra = extra


app.include_router(api_router, prefix=settings.API_V1_STR)

_inject_bearer_security(app)
_mark_public_routes(app)
