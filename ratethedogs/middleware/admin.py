"""
Admin authentication.
"""

import hmac
from typing import Optional
from fastapi import Header
from loguru import logger

from ..config import settings
from ..errors import UnauthorizedError


def require_admin(x_admin_secret: Optional[str] = Header(default=None)) -> str:
    """
    Validate the X-Admin-Secret header against settings.admin_secret.

    An empty configured secret rejects every request.

    Returns:
        Moderator name recorded on moderation actions
    """
    expected = settings.admin_secret
    if not expected or not x_admin_secret or not hmac.compare_digest(x_admin_secret.encode(), expected.encode()):
        logger.warning("Rejected admin request with invalid credentials")
        raise UnauthorizedError("Invalid admin credentials")
    return "admin"
