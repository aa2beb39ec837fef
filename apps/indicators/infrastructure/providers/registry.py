"""
Provider Registry - builds the configured indicator client from Django settings.
Callers ask for a client here and pass it along instead of looking it up globally.
"""

from django.conf import settings

from apps.indicators.domain.interfaces import BaseIndicatorProvider
from apps.indicators.infrastructure.providers.sbif import (
    DEFAULT_API_BASE,
    DEFAULT_TIMEOUT,
    DEFAULT_TIMEZONE,
    SbifClient,
)


def get_indicator_client() -> BaseIndicatorProvider:
    """
    Build an SbifClient from the SBIF_* settings.

    Returns:
        Client instance. A missing SBIF_API_KEY is not an error here; the
        client raises ApiKeyNotFound on its first request.
    """
    return SbifClient(
        api_key=getattr(settings, "SBIF_API_KEY", None),
        api_base=getattr(settings, "SBIF_API_URL", DEFAULT_API_BASE),
        timeout=getattr(settings, "SBIF_TIMEOUT", DEFAULT_TIMEOUT),
        timezone=getattr(settings, "SBIF_TIMEZONE", DEFAULT_TIMEZONE),
        validate_indicator_dates=getattr(settings, "SBIF_VALIDATE_INDICATOR_DATES", False),
    )
