"""
services/submission_service.py
------------------------------
Public ingestion pipeline: decides whether an anonymous, cross-origin POST may
store a message against a website's form.

Steps run in this exact order and stop at the first failure:

  1. Authorization header present and using the Bearer scheme    → 401
  2. Origin header present                                       → 400
  3. Website matching BOTH the path uuid and the bearer secret   → 403
  4. Origin hostname equal to the website's domain hostname      → 403
  5. Form matching the path form id WITHIN that website          → 404
  6. Body is a JSON object                                       → 400
  7. Message stored

Step 4 is never skipped: the stored domain is the allow-list for browser
origins, whatever secret key is presented.
"""

from typing import Optional

from pydantic_core import from_json
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    BadRequestError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from app.core.logging import get_logger
from app.core.origin import normalize_domain, origin_hostname
from app.models.message import Message
from app.schemas.message import FormPayload, form_payload_adapter
from app.services.form_service import FormService
from app.services.message_service import MessageService
from app.services.website_service import WebsiteService

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


def parse_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token from 'Bearer <token>', or None for a missing header or other scheme."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX):].split(" ")[0]


def parse_payload(body: bytes) -> FormPayload:
    """
    Strict JSON parse of the request body. NaN and Infinity are not JSON and
    are rejected along with every other syntax error.
    """
    try:
        return form_payload_adapter.validate_python(from_json(body, allow_inf_nan=False))
    except ValueError:
        raise BadRequestError("Invalid JSON body")


class SubmissionService:

    @staticmethod
    async def submit(
        db: AsyncSession,
        uuid: str,
        form_id: str,
        authorization: Optional[str],
        origin: Optional[str],
        body: bytes,
    ) -> Message:
        """
        Run the full pipeline and return the stored Message.
        Raises an AppError subclass for every rejection.
        """
        log = logger.bind(website_uuid=uuid, form_id=form_id)

        secret_key = parse_bearer_token(authorization)
        if secret_key is None:
            log.warning("Submission rejected", reason="missing_bearer")
            raise UnauthorizedError("Unauthorized")

        if not origin:
            log.warning("Submission rejected", reason="missing_origin")
            raise BadRequestError("Missing Origin header")

        website = await WebsiteService.find_by_credentials(db, uuid, secret_key)
        if website is None:
            log.warning("Submission rejected", reason="invalid_credentials")
            raise ForbiddenError("Invalid secret key or UUID")

        request_host = origin_hostname(origin)
        if request_host is None:
            log.warning("Submission rejected", reason="malformed_origin", origin=origin)
            raise BadRequestError("Malformed Origin header")

        expected_host = normalize_domain(website.domain)
        if request_host != expected_host:
            log.warning(
                "Submission rejected",
                reason="origin_mismatch",
                origin_host=request_host,
                expected_host=expected_host,
            )
            raise ForbiddenError(
                f"Forbidden: Origin domain mismatch ({request_host} != {expected_host})"
            )

        form = await FormService.get_form_for_website(db, website, form_id)
        if form is None:
            log.warning("Submission rejected", reason="form_not_found")
            raise NotFoundError("Form not found")

        payload = parse_payload(body)

        try:
            return await MessageService.create_message(db, form, payload)
        except IntegrityError:
            # Form (or its website) was deleted while this request was in flight
            await db.rollback()
            log.warning("Submission rejected", reason="form_deleted_concurrently")
            raise NotFoundError("Form not found")
