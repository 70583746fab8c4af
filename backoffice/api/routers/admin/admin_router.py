"""
Admin page endpoints.

Routes:
- GET /admin/{code}/list - List page of an admin
- GET /admin/{code}/{id}/show - Show page of one object
- GET /admin/{code}/{id}/compare/{compare_id} - Field by field comparison of two objects
- GET /admin/{code}/xeditable/{field} - Inline-edit widget metadata of a field

Dependencies: backoffice.admin, backoffice.templating, backoffice.boundary.db
System role: Back-office HTML pages
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.admin.pool import Pool
from backoffice.api.deps.dependencies import get_admin_extension, get_pool, get_templates
from backoffice.boundary.db import get_async_db
from backoffice.models.xeditable import XEditableChoice, XEditableFieldResponse
from backoffice.templating.extension import AdminExtension

from .admin_error_handling import handle_admin_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/{code}/list", response_class=HTMLResponse)
@handle_admin_errors
async def list_objects(
    request: Request,
    code: str,
    limit: int = 50,
    offset: int = 0,
    pool: Pool = Depends(get_pool),
    templates: Jinja2Templates = Depends(get_templates),
    db: AsyncSession = Depends(get_async_db),
) -> HTMLResponse:
    """
    Render the list page of an admin.

    Args:
        request: Incoming request
        code: Admin code
        limit: Maximum number of rows (default 50)
        offset: Number of rows to skip (default 0)

    Raises:
        HTTPException(404): Unknown admin
        HTTPException(500): Rendering failed
    """
    admin = pool.get_admin_by_code(code)
    objects = await admin.get_list(db, limit=limit, offset=offset)

    logger.info(
        "Rendering list page",
        extra={"admin_code": code, "row_count": len(objects), "offset": offset},
    )

    return templates.TemplateResponse(
        request,
        admin.get_template("list"),
        {"admin": admin, "objects": objects},
    )


@router.get("/{code}/{object_id}/show", response_class=HTMLResponse)
@handle_admin_errors
async def show_object(
    request: Request,
    code: str,
    object_id: str,
    pool: Pool = Depends(get_pool),
    templates: Jinja2Templates = Depends(get_templates),
    db: AsyncSession = Depends(get_async_db),
) -> HTMLResponse:
    """
    Render the show page of one object.

    Raises:
        HTTPException(404): Unknown admin or object
        HTTPException(500): Rendering failed
    """
    admin = pool.get_admin_by_code(code)
    obj = await admin.get_object(db, object_id)

    logger.info("Rendering show page", extra={"admin_code": code, "object_id": object_id})

    return templates.TemplateResponse(
        request,
        admin.get_template("show"),
        {"admin": admin, "object": obj},
    )


@router.get("/{code}/{object_id}/compare/{compare_id}", response_class=HTMLResponse)
@handle_admin_errors
async def compare_objects(
    request: Request,
    code: str,
    object_id: str,
    compare_id: str,
    pool: Pool = Depends(get_pool),
    templates: Jinja2Templates = Depends(get_templates),
    db: AsyncSession = Depends(get_async_db),
) -> HTMLResponse:
    """
    Render two objects of the same admin side by side.

    Raises:
        HTTPException(404): Unknown admin or object
        HTTPException(500): Rendering failed
    """
    admin = pool.get_admin_by_code(code)
    obj = await admin.get_object(db, object_id)
    obj_compare = await admin.get_object(db, compare_id)

    logger.info(
        "Rendering compare page",
        extra={"admin_code": code, "object_id": object_id, "compare_id": compare_id},
    )

    return templates.TemplateResponse(
        request,
        admin.get_template("show_compare"),
        {"admin": admin, "object": obj, "object_compare": obj_compare},
    )


@router.get("/{code}/xeditable/{field}", response_model=XEditableFieldResponse)
@handle_admin_errors
async def xeditable_field(
    code: str,
    field: str,
    pool: Pool = Depends(get_pool),
    extension: AdminExtension = Depends(get_admin_extension),
) -> XEditableFieldResponse:
    """
    Describe the inline-edit widget of a field.

    Raises:
        HTTPException(404): Unknown admin or field
    """
    admin = pool.get_admin_by_code(code)
    field_description = admin.get_field_description(field)

    widget_type = extension.get_xeditable_type(field_description.type)
    choices = extension.get_xeditable_choices(field_description)

    return XEditableFieldResponse(
        admin_code=code,
        field=field,
        type=widget_type or None,
        choices=[XEditableChoice(**choice) for choice in choices],
    )
