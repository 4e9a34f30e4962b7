"""
api/routes/submissions.py
-------------------------
Public ingestion endpoint, called from browsers on the websites themselves.

OPTIONS /api/{uuid}/{form_id}  : CORS preflight; allows any origin.
POST    /api/{uuid}/{form_id}  : Store a submission (see SubmissionService).

The preflight allows any origin. POST echoes back only an Origin that passed
the domain binding.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Header, Request, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InternalServerError
from app.core.logging import get_logger
from app.db.session import get_db
from app.schemas.message import MessageRead
from app.services.submission_service import SubmissionService

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Submissions"])

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


@router.options(
    "/{uuid}/{form_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="CORS preflight for submissions",
)
async def preflight(uuid: str, form_id: str) -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers=PREFLIGHT_HEADERS)


@router.post(
    "/{uuid}/{form_id}",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a form",
)
async def submit_form(
    uuid: str,
    form_id: str,
    request: Request,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    authorization: Annotated[Optional[str], Header()] = None,
    origin: Annotated[Optional[str], Header()] = None,
) -> MessageRead:
    """
    Headers:
        Authorization: Bearer <website secret key>
        Origin:        <scheme>://<host>[:port] matching the website's domain

    Body: any JSON object. It is stored verbatim; the form's declared
    fields are not enforced.
    """
    body = await request.body()
    try:
        message = await SubmissionService.submit(
            db,
            uuid=uuid,
            form_id=form_id,
            authorization=authorization,
            origin=origin,
            body=body,
        )
        await db.commit()
    except SQLAlchemyError as exc:
        logger.error(
            "Error submitting form",
            website_uuid=uuid,
            form_id=form_id,
            error=str(exc),
            exc_info=True,
        )
        raise InternalServerError("Internal Server Error")

    response.headers["Access-Control-Allow-Origin"] = origin
    return MessageRead.model_validate(message)
