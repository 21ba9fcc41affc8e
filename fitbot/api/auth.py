"""Bearer authentication for the FitBot API.

User-scoped routes accept the caller's Supabase access token and resolve
it to a user id through the hosted auth service. Sign-up and login stay
with that service; this module only verifies tokens.
"""

from __future__ import annotations

import logging
import os

from fastapi import HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fitbot.errors import PersistenceError
from fitbot.keys import SUPABASE_KEY_ENV
from fitbot.persistence.client import get_client

logger = logging.getLogger(__name__)

_security = HTTPBearer()


async def verify_user(
    credentials: HTTPAuthorizationCredentials = Security(_security),
) -> str:
    """Validate the Bearer access token and return its user id.

    Raises 401 if the token is invalid or expired, and PersistenceError
    (502) if the server has no Supabase credentials.
    """
    try:
        client = get_client()
    except RuntimeError as e:
        logger.error("Cannot verify tokens: %s", e)
        raise PersistenceError("Authentication service is not configured") from e

    try:
        response = client.auth.get_user(credentials.credentials)
    except Exception as e:
        logger.debug("Token verification failed: %s", e)
        raise HTTPException(status_code=401, detail="Invalid access token") from None

    user = getattr(response, "user", None)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid access token")
    return str(user.id)


async def verify_client_key(
    credentials: HTTPAuthorizationCredentials = Security(_security),
) -> None:
    """Check the publishable key sent by chat clients.

    When no publishable key is configured the check is skipped, which is
    what local development against `fitbot serve` relies on.
    """
    expected = os.environ.get(SUPABASE_KEY_ENV, "")
    if expected and credentials.credentials != expected:
        raise HTTPException(status_code=401, detail="Invalid API key")
