# =============================================================================
# core/services/catalog_service.py - Application Catalog
# =============================================================================
# Builds the static catalog of launchable applications from configuration.
#
# For every configured app type T (settings.APP_TYPES) the following
# variables are read:
#   APP_T_APPID        (required) Frontegg application ID
#   APP_T_URL          (required) launch URL
#   APP_T_NAME         (required) display name
#   APP_T_DESCRIPTION  default: "<name> application"
#   APP_T_ICON         default: 📱
#   APP_T_COLOR        default: from-gray-500 to-gray-600
#
# Types missing any required variable are skipped.
# =============================================================================

import logging
import os
from collections.abc import Mapping

from dotenv import dotenv_values

from app.config import settings
from app.exceptions import CatalogEmptyError
from core.models.app import DEFAULT_COLOR, DEFAULT_ICON, AppDescriptor

logger = logging.getLogger(__name__)


def catalog_environ(env_file: str | None = ".env") -> dict[str, str]:
    """
    Merge the .env file with the process environment.

    Process environment variables win over .env values.
    """
    merged: dict[str, str] = {}
    if env_file:
        merged.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    merged.update(os.environ)
    return merged


class CatalogService:
    """
    Reads application descriptors from configuration.

    Stateless; all methods are static.
    """

    @staticmethod
    def read_app(app_type: str, environ: Mapping[str, str]) -> AppDescriptor | None:
        """
        Read a single app type.

        Returns:
            The descriptor, or None when APPID, URL or NAME is missing.
        """
        prefix = f"APP_{app_type.upper()}_"
        app_id = environ.get(f"{prefix}APPID")
        url = environ.get(f"{prefix}URL")
        name = environ.get(f"{prefix}NAME")

        if not (app_id and url and name):
            logger.debug(f"Skipping app type {app_type}: APPID, URL or NAME not set")
            return None

        return AppDescriptor(
            id=app_type.lower(),
            app_id=app_id,
            name=name,
            description=environ.get(f"{prefix}DESCRIPTION") or f"{name} application",
            url=url,
            icon=environ.get(f"{prefix}ICON") or DEFAULT_ICON,
            color=environ.get(f"{prefix}COLOR") or DEFAULT_COLOR,
        )

    @staticmethod
    def load_catalog(
        environ: Mapping[str, str] | None = None,
        app_types: list[str] | None = None,
    ) -> list[AppDescriptor]:
        """
        Load every configured application, in APP_TYPES order.

        Args:
            environ: Variables to read (defaults to .env merged with os.environ)
            app_types: Types to look up (defaults to settings.APP_TYPES)

        Returns:
            Non-empty list of descriptors

        Raises:
            CatalogEmptyError: If no app type is fully configured
        """
        if environ is None:
            environ = catalog_environ()
        if app_types is None:
            app_types = settings.app_types_list

        apps = [
            app
            for app in (CatalogService.read_app(t, environ) for t in app_types)
            if app is not None
        ]

        if not apps:
            logger.error(f"No app configurations found for types: {app_types}")
            raise CatalogEmptyError(app_types)

        logger.debug(f"Loaded {len(apps)} apps: {[a.id for a in apps]}")
        return apps
