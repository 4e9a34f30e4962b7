"""
api/routes/forms.py
-------------------
Dashboard endpoints for form definitions. Operator-only.

POST   /admin/forms       : Add a form to a website.
PATCH  /admin/forms/{id}  : Rename a form.
DELETE /admin/forms/{id}  : Delete a form and its messages.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.dependencies import get_current_operator
from app.schemas.form import FormCreate, FormRead, FormRename
from app.services.form_service import FormService

router = APIRouter(
    prefix="/admin/forms",
    tags=["Forms"],
    dependencies=[Depends(get_current_operator)],
)


@router.post(
    "",
    response_model=FormRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add a form to a website",
)
async def create_form(
    body: FormCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> FormRead:
    form = await FormService.create_form(db, body)
    await db.commit()
    return FormRead.model_validate(form)


@router.patch("/{id}", response_model=FormRead, summary="Rename a form")
async def rename_form(
    id: int,
    body: FormRename,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> FormRead:
    form = await FormService.rename_form(db, id, body.title)
    await db.commit()
    return FormRead.model_validate(form)


@router.delete("/{id}", summary="Delete a form and its messages")
async def delete_form(
    id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    await FormService.delete_form(db, id)
    await db.commit()
    return {"message": "Deleted"}
