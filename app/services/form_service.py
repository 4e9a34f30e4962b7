"""
services/form_service.py
------------------------
Form registry: form definitions scoped to a website.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.core.logging import get_logger
from app.db.base import generate_uuid
from app.models.form import Form
from app.models.message import Message
from app.models.website import Website
from app.schemas.form import FormCreate
from app.services.website_service import WebsiteService

logger = get_logger(__name__)


class FormService:

    @staticmethod
    async def create_form(db: AsyncSession, data: FormCreate) -> Form:
        """Add a form to an existing website. Raises NotFoundError otherwise."""
        website = await WebsiteService.get_website_by_id(db, data.website_id)
        if website is None:
            raise NotFoundError("Website not found")

        form = Form(
            form_id=generate_uuid(),
            title=data.title,
            form_schema=data.fields,
            website_id=website.id,
        )
        db.add(form)
        await db.flush()
        await db.refresh(form)
        logger.info("Form created", form_id=form.form_id, website_uuid=website.uuid)
        return form

    @staticmethod
    async def list_forms_for_website(db: AsyncSession, uuid: str) -> list[Form]:
        website = await WebsiteService.get_website_by_uuid(db, uuid)
        if website is None:
            raise NotFoundError("Website not found")
        result = await db.execute(
            select(Form).where(Form.website_id == website.id).order_by(Form.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_form_for_website(
        db: AsyncSession, website: Website, form_id: str
    ) -> Form | None:
        """
        Resolve a public form id within one website only. A form id that
        belongs to another website resolves to None.
        """
        result = await db.execute(
            select(Form).where(Form.website_id == website.id, Form.form_id == form_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_form_by_public_id(db: AsyncSession, form_id: str) -> Form | None:
        """Resolve a form by its public id alone, with no website check."""
        result = await db.execute(select(Form).where(Form.form_id == form_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_form_by_id(db: AsyncSession, id: int) -> Form | None:
        result = await db.execute(select(Form).where(Form.id == id))
        return result.scalar_one_or_none()

    @staticmethod
    async def rename_form(db: AsyncSession, id: int, title: str) -> Form:
        form = await FormService.get_form_by_id(db, id)
        if form is None:
            raise NotFoundError("Form not found")
        form.title = title
        await db.flush()
        logger.info("Form renamed", form_id=form.form_id)
        return form

    @staticmethod
    async def delete_form(db: AsyncSession, id: int) -> None:
        """Delete a form's messages, then the form itself."""
        form = await FormService.get_form_by_id(db, id)
        if form is None:
            raise NotFoundError("Form not found")
        public_id = form.form_id

        messages = await db.execute(delete(Message).where(Message.form_id == id))
        await db.execute(delete(Form).where(Form.id == id))
        logger.info("Form deleted", form_id=public_id, messages_deleted=messages.rowcount)
