"""
schemas/auth.py
---------------
Pydantic models for operator login.
"""

from pydantic import BaseModel


class OperatorRead(BaseModel):
    username: str
    role: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    operator: OperatorRead
