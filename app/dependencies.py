"""
dependencies.py
---------------
FastAPI dependency injection functions for dashboard authentication.

Flow:
  1. OAuth2PasswordBearer extracts the Bearer token from the Authorization header.
  2. decode_access_token validates and parses the JWT (no DB round-trip).
  3. get_current_operator checks the subject and role against settings.

The public ingestion endpoint does NOT use these: websites authenticate with
their own secret key (see services/submission_service.py).
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from app.core.config import settings
from app.core.exceptions import UnauthorizedError
from app.core.logging import get_logger
from app.core.security import OPERATOR_ROLE, decode_access_token
from app.schemas.auth import OperatorRead

logger = get_logger(__name__)

# tokenUrl must match the login endpoint path
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/login", auto_error=False)

_WWW_AUTHENTICATE = {"WWW-Authenticate": "Bearer"}


def _credentials_error() -> UnauthorizedError:
    return UnauthorizedError("Could not validate credentials", headers=_WWW_AUTHENTICATE)


async def get_current_operator(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
) -> OperatorRead:
    """
    Decode the JWT and return the operator it was issued to.
    Raises 401 if the token is missing, invalid, expired or not an operator's.
    """
    if not token:
        raise UnauthorizedError("Not authenticated", headers=_WWW_AUTHENTICATE)

    try:
        payload = decode_access_token(token)
    except JWTError as exc:
        logger.warning("JWT decode failed", error=str(exc))
        raise _credentials_error()

    username = payload.get("sub")
    role = payload.get("role")
    if username != settings.ADMIN_USERNAME or role != OPERATOR_ROLE:
        logger.warning("JWT subject is not the configured operator", sub=username)
        raise _credentials_error()

    return OperatorRead(username=username, role=role)
