"""
Firebase ID token verification for API requests.

When no Firebase service account is configured the API runs without
authentication and every request acts as the anonymous user.
"""

import json
from typing import Optional

import firebase_admin
from fastapi import Header, HTTPException, status
from firebase_admin import auth as fb_auth
from firebase_admin import credentials as fb_credentials

from app.config import config
from app.utils.logger import logging


def init_firebase_admin() -> bool:
    """
    Initialize the Firebase Admin app once.

    Returns:
        True if Firebase is available, False if it is not configured
    """
    if firebase_admin._apps:
        return True

    if config.FIREBASE_SERVICE_ACCOUNT_PATH:
        cred = fb_credentials.Certificate(config.FIREBASE_SERVICE_ACCOUNT_PATH)
    elif config.FIREBASE_SERVICE_ACCOUNT_JSON:
        cred = fb_credentials.Certificate(json.loads(config.FIREBASE_SERVICE_ACCOUNT_JSON))
    else:
        return False

    firebase_admin.initialize_app(cred)
    logging.info("Firebase Admin initialized")
    return True


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user_id(authorization: Optional[str] = Header(None)) -> str:
    """
    Resolve the requesting user's ID from a ``Bearer <Firebase ID token>`` header.

    Raises:
        HTTPException: 401 if Firebase is configured and the token is missing or invalid
    """
    if not config.firebase_enabled():
        return config.ANONYMOUS_USER_ID

    if not authorization:
        logging.warning("API request without Authorization header")
        raise _unauthorized("Missing Authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise _unauthorized("Invalid Authorization header format. Expected: Bearer <token>")

    try:
        init_firebase_admin()
        decoded = fb_auth.verify_id_token(parts[1])
    except (ValueError, fb_auth.InvalidIdTokenError, fb_auth.ExpiredIdTokenError,
            fb_auth.RevokedIdTokenError, fb_auth.CertificateFetchError) as e:
        logging.warning(f"Invalid Firebase ID token: {e}")
        raise _unauthorized("Invalid authentication token")

    return decoded["uid"]
