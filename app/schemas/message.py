"""
schemas/message.py
------------------
Pydantic models for form submissions.

FormPayload is the only shape a submission body must have: a JSON object.
Values may be any JSON (string, number, boolean, null, object, array) and are
stored without coercion, in the order received.
"""

from datetime import datetime

from pydantic import BaseModel, JsonValue, TypeAdapter

from app.schemas.form import FormSummary
from app.schemas.website import WebsiteSummary

FormPayload = dict[str, JsonValue]

form_payload_adapter: TypeAdapter[FormPayload] = TypeAdapter(FormPayload)


class MessageRead(BaseModel):
    id: int
    form_data: FormPayload
    form_id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class MessageFormRead(FormSummary):
    website: WebsiteSummary


class MessageWithFormRead(MessageRead):
    """Message as listed on the dashboard, with its form and website joined."""
    form: MessageFormRead
