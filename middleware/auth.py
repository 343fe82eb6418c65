from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import jwt
import logging
from typing import Optional, Dict, Any
from config.variable import JWT_SECRET_KEY
from middleware.errors import Unauthorized, Forbidden

logger = logging.getLogger("craftcode.auth")

security = HTTPBearer(auto_error=False)

USER_ID_HEADER = "x-user-id"


def get_jwt_secret_key() -> str:
    """Get JWT secret key from environment"""
    return JWT_SECRET_KEY


async def verify_jwt_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> Dict[str, Any]:
    """
    Verify JWT token and return user payload
    Use this as a dependency in protected routes
    """
    if credentials is None:
        raise Unauthorized("Authentication required")

    try:
        payload = jwt.decode(
            credentials.credentials,
            get_jwt_secret_key(),
            algorithms=["HS256"]
        )
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token expired")
    except jwt.InvalidTokenError:
        raise Unauthorized("Invalid token")

    if payload.get("type") != "access":
        raise Unauthorized("Invalid token type")

    return payload


async def get_current_user(token_payload: Dict[str, Any] = Depends(verify_jwt_token)) -> Dict[str, Any]:
    """
    Get current user from JWT token
    Use this as a dependency to get user info in protected routes
    """
    return {
        "user_id": token_payload.get("user_id"),
        "email": token_payload.get("email"),
        "exp": token_payload.get("exp"),
        "iat": token_payload.get("iat")
    }


def require_owner(request: Request, owner_id: str, action: str) -> str:
    """
    Check the caller's ``x-user-id`` header against a document owner.

    Returns the caller id, raises 403 when it is missing or different.
    """
    user_id = request.headers.get(USER_ID_HEADER)
    if not user_id or user_id != owner_id:
        logger.info(f"Rejected {action}: caller={user_id!r} owner={owner_id!r}")
        raise Forbidden(f"You are not authorized to {action}")
    return user_id
