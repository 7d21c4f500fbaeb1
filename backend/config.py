"""
Dynamic form configuration. All environment variables in one place.

Read from environment at runtime. Never hardcode secrets.
"""

from __future__ import annotations

import os


class Settings:
    """Application settings from environment variables."""

    # List API host, e.g. https://contoso.sharepoint.com/sites/intake
    SITE_URL: str = os.environ.get("SITE_URL", "")

    # Lists. Records and templates share one list unless these differ.
    RECORD_LIST_TITLE: str = os.environ.get("RECORD_LIST_TITLE", "Business")
    TEMPLATE_LIST_TITLE: str = os.environ.get("TEMPLATE_LIST_TITLE", "Business")

    # Column on a host record that points at its template
    TEMPLATE_ID_FIELD: str = os.environ.get("TEMPLATE_ID_FIELD", "TemplateId")

    # HTTP
    REQUEST_TIMEOUT: float = float(os.environ.get("REQUEST_TIMEOUT", "30"))
    ACCESS_TOKEN: str = os.environ.get("ACCESS_TOKEN", "")

    # Design sessions idle longer than this are dropped
    DESIGN_SESSION_TTL_MINUTES: int = int(os.environ.get("DESIGN_SESSION_TTL_MINUTES", "120"))

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")


# Singleton instance
settings = Settings()

# Validate required settings (skip in test mode)
_testing = os.environ.get("TESTING", "").lower() == "true"

if not _testing:
    if not settings.SITE_URL:
        raise RuntimeError("SITE_URL environment variable is required")
