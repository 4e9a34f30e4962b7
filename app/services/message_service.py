"""
services/message_service.py
----------------------------
Message store: append-only form submissions.

Messages are only ever created through the ingestion pipeline
(services/submission_service.py); this module holds the storage and the
dashboard-facing reads.
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import NotFoundError
from app.core.logging import get_logger
from app.models.form import Form
from app.models.message import Message
from app.services.form_service import FormService

logger = get_logger(__name__)


class MessageService:

    @staticmethod
    async def create_message(
        db: AsyncSession,
        form: Form,
        form_data: dict[str, Any],
    ) -> Message:
        """Persist one submission for the given form, exactly as received."""
        message = Message(form_data=form_data, form_id=form.id)
        db.add(message)
        await db.flush()
        await db.refresh(message)

        logger.info("Message stored", message_id=message.id, form_id=form.form_id)
        return message

    @staticmethod
    async def list_messages_for_form(db: AsyncSession, form_id: str) -> list[Message]:
        """
        Messages of one form, newest-first.

        The form is resolved by its public id alone. Callers sit behind the
        dashboard's operator auth; there is no website/credential check here.
        """
        form = await FormService.get_form_by_public_id(db, form_id)
        if form is None:
            raise NotFoundError("Form not found.")

        result = await db.execute(
            select(Message)
            .where(Message.form_id == form.id)
            .order_by(Message.created_at.desc(), Message.id.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_all_messages(db: AsyncSession) -> list[Message]:
        """Every message, newest-first, with its form and website loaded."""
        result = await db.execute(
            select(Message)
            .options(selectinload(Message.form).selectinload(Form.website))
            .order_by(Message.created_at.desc(), Message.id.desc())
        )
        return list(result.scalars().all())
