"""Translate domain errors into API responses."""
import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler

from apps.core.exceptions import MarketplaceError

logger = logging.getLogger(__name__)

SAFE_METHODS = ("GET", "HEAD", "OPTIONS")


def marketplace_exception_handler(exc, context):
    """Generic user-facing message; the specific kind goes to the logs and ``code``."""
    if not isinstance(exc, MarketplaceError):
        return exception_handler(exc, context)

    request = context.get("request")
    view = context.get("view")
    logger.warning(
        "%s in %s: %s",
        exc.code, view.__class__.__name__ if view else "?", exc.message,
    )
    safe = request is not None and request.method in SAFE_METHODS
    return Response(
        {
            "message": "Request failed" if safe else "Update failed",
            "code": exc.code,
            "detail": exc.detail,
        },
        status=exc.status_code,
    )
