"""
services/website_service.py
---------------------------
Credential store: website (tenant) registration and management.

Service layer is responsible for:
  - Constructing queries
  - Enforcing business rules (e.g. unique domains)
  - Returning domain objects (ORM models) to the route layer
  - Never returning HTTP responses (that's the route's job)
"""

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, InternalServerError, NotFoundError
from app.core.logging import get_logger
from app.core.security import generate_app_key, generate_secret_key
from app.db.base import generate_uuid
from app.models.form import Form
from app.models.message import Message
from app.models.website import Website
from app.schemas.website import WebsiteCreate

logger = get_logger(__name__)

KEY_ISSUE_ATTEMPTS = 3


class WebsiteService:

    @staticmethod
    async def _domain_taken(db: AsyncSession, domain: str) -> bool:
        existing = await db.execute(select(Website.id).where(Website.domain == domain))
        return existing.scalar_one_or_none() is not None

    @staticmethod
    async def create_website(db: AsyncSession, data: WebsiteCreate) -> Website:
        """
        Register a website and issue its uuid, app key and secret key.
        Raises ConflictError if the domain already belongs to another website.

        A unique violation on anything but the domain means a freshly issued
        key collided; the keys are reissued up to KEY_ISSUE_ATTEMPTS times.
        """
        if await WebsiteService._domain_taken(db, data.domain):
            raise ConflictError("Domain already exists")

        for attempt in range(1, KEY_ISSUE_ATTEMPTS + 1):
            website = Website(
                uuid=generate_uuid(),
                name=data.name,
                domain=data.domain,
                app_key=generate_app_key(),
                secret_key=generate_secret_key(),
            )
            db.add(website)
            try:
                await db.flush()  # Trigger DB constraints before commit
            except IntegrityError:
                await db.rollback()
                # Lost a race with a concurrent registration of the same domain
                if await WebsiteService._domain_taken(db, data.domain):
                    raise ConflictError("Domain already exists")
                logger.warning("Issued website key collided", attempt=attempt)
                continue
            await db.refresh(website)
            logger.info("Website registered", website_uuid=website.uuid, domain=website.domain)
            return website

        raise InternalServerError("Could not issue unique website keys")

    @staticmethod
    async def list_websites(db: AsyncSession) -> list[Website]:
        result = await db.execute(
            select(Website).order_by(Website.created_at.desc(), Website.id.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_website_by_uuid(db: AsyncSession, uuid: str) -> Website | None:
        result = await db.execute(select(Website).where(Website.uuid == uuid))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_website_by_id(db: AsyncSession, website_id: int) -> Website | None:
        result = await db.execute(select(Website).where(Website.id == website_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def find_by_credentials(
        db: AsyncSession, uuid: str, secret_key: str
    ) -> Website | None:
        """
        Single combined lookup: both uuid and secret_key must match the same
        row, so one website's key can never be replayed against another's uuid.
        """
        result = await db.execute(
            select(Website).where(Website.uuid == uuid, Website.secret_key == secret_key)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def rename_website(db: AsyncSession, uuid: str, name: str) -> Website:
        website = await WebsiteService.get_website_by_uuid(db, uuid)
        if website is None:
            raise NotFoundError("Website not found")
        website.name = name
        await db.flush()
        logger.info("Website renamed", website_uuid=uuid)
        return website

    @staticmethod
    async def delete_website(db: AsyncSession, uuid: str) -> None:
        """
        Delete a website together with its forms and their messages.

        Children go first (messages, then forms, then the website) so the
        cascade does not depend on ON DELETE support in the store. All three
        statements run in the request transaction.
        """
        website = await WebsiteService.get_website_by_uuid(db, uuid)
        if website is None:
            raise NotFoundError("Website not found")

        form_ids = select(Form.id).where(Form.website_id == website.id)
        messages = await db.execute(delete(Message).where(Message.form_id.in_(form_ids)))
        forms = await db.execute(delete(Form).where(Form.website_id == website.id))
        await db.execute(delete(Website).where(Website.id == website.id))

        logger.info(
            "Website deleted",
            website_uuid=uuid,
            forms_deleted=forms.rowcount,
            messages_deleted=messages.rowcount,
        )
