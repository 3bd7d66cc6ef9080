"""
Authorization gate for protected routes.

Only the presence of a non-empty ``Authorization`` header is checked. The
value is not decoded or verified; ``JWT_SECRET`` is reserved for that.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Header

from signup_api.errors import UnauthorizedError

logger = logging.getLogger(__name__)


def require_authorization(
    authorization: Optional[str] = Header(default=None),
) -> str:
    """Return the raw Authorization header or short-circuit with 401."""
    if not authorization:
        logger.info("Rejected request without Authorization header")
        raise UnauthorizedError()
    return authorization
