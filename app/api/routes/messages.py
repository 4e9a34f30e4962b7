"""
api/routes/messages.py
----------------------
Dashboard endpoints for reading submissions. Operator-only.

GET /admin/messages                 : All messages with form and website joined.
GET /admin/messages/form/{form_id}  : Messages of one form, by public form id.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.dependencies import get_current_operator
from app.schemas.message import MessageRead, MessageWithFormRead
from app.services.message_service import MessageService

router = APIRouter(
    prefix="/admin/messages",
    tags=["Messages"],
    dependencies=[Depends(get_current_operator)],
)


@router.get(
    "",
    response_model=list[MessageWithFormRead],
    summary="List all messages, newest-first",
)
async def list_messages(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[MessageWithFormRead]:
    messages = await MessageService.list_all_messages(db)
    return [MessageWithFormRead.model_validate(m) for m in messages]


@router.get(
    "/form/{form_id}",
    response_model=list[MessageRead],
    summary="List messages of one form, newest-first",
)
async def list_form_messages(
    form_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[MessageRead]:
    """
    Resolves the form by its public id alone. Access control is the
    operator token on this router, not the website's credentials.
    """
    messages = await MessageService.list_messages_for_form(db, form_id)
    return [MessageRead.model_validate(m) for m in messages]
