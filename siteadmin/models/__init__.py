# siteadmin/models/__init__.py
# Import every model so Base.metadata is complete for Alembic and create_all
from siteadmin.models.auth import AdminLoginActivity, AdminRole, AdminUser  # noqa: F401
from siteadmin.models.site_config import HistoryAction, SiteConfig, SiteConfigHistory  # noqa: F401
from siteadmin.models.upload import Upload  # noqa: F401
