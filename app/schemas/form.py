"""
schemas/form.py
---------------
Pydantic models for form definitions.

`fields` is advisory: a mapping of field name → declared type that the
dashboard renders as documentation. Submissions are never checked against it.
"""

from datetime import datetime

from pydantic import BaseModel, Field, JsonValue, field_validator


class FormCreate(BaseModel):
    website_id: int = Field(..., description="Internal id of the owning website")
    title: str = Field(..., min_length=1, max_length=255, examples=["Contact"])
    fields: dict[str, JsonValue] = Field(
        ...,
        examples=[{"name": "string", "email": "string"}],
        description="Field name → declared type",
    )

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class FormRename(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class FormRead(BaseModel):
    id: int
    form_id: str
    title: str
    form_schema: dict[str, JsonValue]
    website_id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class FormSummary(BaseModel):
    id: int
    form_id: str
    title: str

    model_config = {"from_attributes": True}
