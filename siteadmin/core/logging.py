# siteadmin/core/logging.py
import logging

ISO_FMT = "%Y-%m-%dT%H:%M:%S%z"

def configure_logging(level: int | None = None) -> None:
    from .settings import settings

    if level is None:
        level = logging.DEBUG if settings.DEBUG and settings.ENV == "dev" else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
        datefmt=ISO_FMT,
    )
    # SQL echo stays off unless someone asks for it explicitly
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
