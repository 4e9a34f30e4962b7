"""
core/security.py
----------------
Operator password verification, JWT utilities and tenant key generation.

Design decisions:
  - Operator passwords are bcrypt hashes (work factor 12).
  - Operator JWTs carry only sub + role; there is one operator account,
    configured through settings.
  - Tenant keys are random hex tokens. The secret key is the literal bearer
    credential: it is stored as issued and compared by exact equality.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt
from passlib.context import CryptContext

from app.core.config import settings

# bcrypt context: rounds=12 is OWASP recommended minimum
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=12)

APP_KEY_LENGTH = 16
SECRET_KEY_LENGTH = 32

OPERATOR_ROLE = "operator"


# ── Password Utilities ────────────────────────────────────────────────────────

def hash_password(plain: str) -> str:
    """Return a bcrypt hash of the plain-text password."""
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time comparison of plain password against stored hash."""
    if not hashed:
        return False
    return pwd_context.verify(plain, hashed)


# ── Tenant Keys ───────────────────────────────────────────────────────────────

def generate_key(length: int) -> str:
    """Random hex token of exactly `length` characters."""
    return secrets.token_hex((length + 1) // 2)[:length]


def generate_app_key() -> str:
    return generate_key(APP_KEY_LENGTH)


def generate_secret_key() -> str:
    return generate_key(SECRET_KEY_LENGTH)


# ── JWT Utilities ─────────────────────────────────────────────────────────────

def create_access_token(
    subject: str,
    role: str = OPERATOR_ROLE,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Mint a JWT access token for the dashboard operator.

    Args:
        subject: Operator username (stored in 'sub' claim).
        role: Always 'operator' today; kept as a claim for future roles.
        expires_delta: Optional custom expiry; defaults to settings value.

    Returns:
        Signed JWT string.
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload: Dict[str, Any] = {
        "sub": subject,
        "role": role,
        "exp": expire,
        "iat": datetime.now(timezone.utc),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT access token.

    Raises:
        JWTError: If the token is invalid, expired, or tampered with.

    Returns:
        Raw payload dict.
    """
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
