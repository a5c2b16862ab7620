"""Resources API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from mindhaven.core.deps import get_current_user, require_admin
from mindhaven.core.errors import ValidationError
from mindhaven.db.session import get_db
from mindhaven.models.user import User
from mindhaven.schemas.resource import ResourceCreate, ResourceResponse
from mindhaven.services.resource_service import create_resource, list_resources

router = APIRouter(prefix="/resources", tags=["resources"])


async def resource_body(
    request: Request,
    _: User = Depends(require_admin),
) -> ResourceCreate:
    """Parse the request body only once the caller is known to be an admin."""
    try:
        payload = await request.json()
    except ValueError as exc:
        raise ValidationError(
            "Invalid input: body",
            [{"loc": ["body"], "msg": "Request body is not valid JSON", "type": "json_invalid"}],
        ) from exc
    try:
        return ResourceCreate.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc


@router.get("", response_model=list[ResourceResponse])
def get_resources(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    return list_resources(db)


@router.post(
    "",
    response_model=ResourceResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ResourceCreate.model_json_schema()}},
        }
    },
)
def add_resource(
    data: ResourceCreate = Depends(resource_body),
    db: Session = Depends(get_db),
):
    """Admin adds a curated resource."""
    return create_resource(db, data)
