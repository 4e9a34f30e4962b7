"""
api/routes/auth.py
------------------
Operator authentication for the dashboard.

POST /login  : Exchange operator credentials for a JWT access token.
               Accepts OAuth2 form data (Swagger UI's Authorize button).
GET  /me     : Return the authenticated operator.
"""

from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm

from app.core.config import settings
from app.core.exceptions import UnauthorizedError
from app.core.logging import get_logger
from app.core.security import OPERATOR_ROLE, create_access_token, verify_password
from app.dependencies import get_current_operator
from app.schemas.auth import OperatorRead, TokenResponse

logger = get_logger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login and receive a JWT access token",
)
async def login(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
) -> TokenResponse:
    """
    Authenticate the dashboard operator and receive a signed JWT.

    Via curl/Postman: send as form data (not JSON):
        -d "username=admin&password=yourpassword"
    """
    if form_data.username != settings.ADMIN_USERNAME or not verify_password(
        form_data.password, settings.ADMIN_PASSWORD_HASH
    ):
        logger.warning("Operator login failed", username=form_data.username)
        raise UnauthorizedError(
            "Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    token = create_access_token(
        subject=form_data.username,
        role=OPERATOR_ROLE,
        expires_delta=expires,
    )

    return TokenResponse(
        access_token=token,
        token_type="bearer",
        expires_in=int(expires.total_seconds()),
        operator=OperatorRead(username=form_data.username, role=OPERATOR_ROLE),
    )


@router.get(
    "/me",
    response_model=OperatorRead,
    summary="Get the currently authenticated operator",
)
async def get_me(
    operator: Annotated[OperatorRead, Depends(get_current_operator)],
) -> OperatorRead:
    return operator
