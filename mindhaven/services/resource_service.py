"""Resource service."""

from __future__ import annotations

import logging

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from mindhaven.core.errors import NotFound
from mindhaven.db.session import commit_or_raise
from mindhaven.models.resource import Resource
from mindhaven.schemas.resource import ResourceCreate

logger = logging.getLogger(__name__)


def create_resource(db: Session, data: ResourceCreate) -> Resource:
    resource = Resource(
        title=data.title,
        description=data.description,
        type=data.type,
        url=str(data.url),
    )
    db.add(resource)
    commit_or_raise(db, "create resource")
    db.refresh(resource)
    return resource


def list_resources(db: Session) -> list[Resource]:
    """All resources, newest first."""
    result = db.execute(select(Resource).order_by(desc(Resource.created_at), desc(Resource.id)))
    return list(result.scalars().all())


def delete_resource(db: Session, resource_id: int) -> None:
    resource = db.get(Resource, resource_id)
    if not resource:
        raise NotFound("Resource not found")
    db.delete(resource)
    commit_or_raise(db, "delete resource")
    logger.info("Resource %s deleted", resource_id)
