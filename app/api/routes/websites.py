"""
api/routes/websites.py
----------------------
Dashboard endpoints for website (tenant) management. Operator-only.

POST   /admin/websites               : Register a website and issue its keys.
GET    /admin/websites               : List websites, newest-first.
GET    /admin/websites/{uuid}        : Fetch one website.
PATCH  /admin/websites/{uuid}        : Rename a website.
DELETE /admin/websites/{uuid}        : Delete a website, its forms and messages.
GET    /admin/websites/{uuid}/forms  : List the website's forms.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.db.session import get_db
from app.dependencies import get_current_operator
from app.schemas.form import FormRead
from app.schemas.website import WebsiteCreate, WebsiteRead, WebsiteRename
from app.services.form_service import FormService
from app.services.website_service import WebsiteService

router = APIRouter(
    prefix="/admin/websites",
    tags=["Websites"],
    dependencies=[Depends(get_current_operator)],
)


@router.post(
    "",
    response_model=WebsiteRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a website",
)
async def create_website(
    body: WebsiteCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WebsiteRead:
    """
    Issues a public uuid, a 16-character app key and a 32-character secret
    key. Fails with 409 if the domain is already registered.
    """
    website = await WebsiteService.create_website(db, body)
    await db.commit()
    return WebsiteRead.model_validate(website)


@router.get("", response_model=list[WebsiteRead], summary="List websites")
async def list_websites(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[WebsiteRead]:
    websites = await WebsiteService.list_websites(db)
    return [WebsiteRead.model_validate(w) for w in websites]


@router.get("/{uuid}", response_model=WebsiteRead, summary="Get a website")
async def get_website(
    uuid: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WebsiteRead:
    website = await WebsiteService.get_website_by_uuid(db, uuid)
    if website is None:
        raise NotFoundError("Website not found")
    return WebsiteRead.model_validate(website)


@router.patch("/{uuid}", response_model=WebsiteRead, summary="Rename a website")
async def rename_website(
    uuid: str,
    body: WebsiteRename,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WebsiteRead:
    website = await WebsiteService.rename_website(db, uuid, body.name)
    await db.commit()
    return WebsiteRead.model_validate(website)


@router.delete("/{uuid}", summary="Delete a website and everything it owns")
async def delete_website(
    uuid: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    await WebsiteService.delete_website(db, uuid)
    await db.commit()
    return {"success": True}


@router.get(
    "/{uuid}/forms",
    response_model=list[FormRead],
    summary="List the forms of a website",
)
async def list_website_forms(
    uuid: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[FormRead]:
    forms = await FormService.list_forms_for_website(db, uuid)
    return [FormRead.model_validate(f) for f in forms]
