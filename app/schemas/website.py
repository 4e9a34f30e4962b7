"""
schemas/website.py
------------------
Pydantic request/response models for Website (tenant).

Naming convention:
  WebsiteCreate  → inbound request body
  WebsiteRead    → outbound response body (includes issued keys; the
                   dashboard shows them to the operator)
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class WebsiteCreate(BaseModel):
    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        examples=["Acme"],
        description="Display name of the website",
    )
    domain: str = Field(
        ...,
        min_length=1,
        max_length=255,
        examples=["acme.com"],
        description="Hostname submissions must originate from; scheme and port are ignored",
    )

    @field_validator("name", "domain")
    @classmethod
    def strip_value(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class WebsiteRename(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class WebsiteRead(BaseModel):
    id: int
    uuid: str
    name: str
    domain: str
    app_key: str
    secret_key: str
    created_at: datetime

    model_config = {"from_attributes": True}


class WebsiteSummary(BaseModel):
    """Website as embedded in message listings (no credentials)."""
    id: int
    uuid: str
    name: str
    domain: str

    model_config = {"from_attributes": True}
