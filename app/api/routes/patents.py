"""Canonical patent endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app import models, schemas
from app.api.dependencies import DbSession

router = APIRouter(prefix="/patents", tags=["patents"])


@router.get("/", response_model=List[schemas.PatentRead])
def list_patents(
    db: DbSession,
    q: Optional[str] = Query(None, description="Simple search across title and patent number."),
    jurisdiction: Optional[str] = Query(None, description="Filter by jurisdiction code."),
) -> List[schemas.PatentRead]:
    """Return a filtered list of canonical patents."""

    stmt = select(models.Patent).options(
        selectinload(models.Patent.client), selectinload(models.Patent.jurisdiction)
    )

    if q:
        like_pattern = f"%{q}%"
        stmt = stmt.filter(
            (models.Patent.title.ilike(like_pattern))
            | (models.Patent.patent_number.ilike(like_pattern))
        )
    if jurisdiction:
        stmt = stmt.join(models.Patent.jurisdiction).filter(
            models.Jurisdiction.code == jurisdiction.upper()
        )

    results = db.execute(stmt.order_by(models.Patent.patent_number))
    return results.scalars().all()


@router.get("/{patent_id}", response_model=schemas.PatentRead)
def get_patent(patent_id: int, db: DbSession) -> schemas.PatentRead:
    """Fetch a single patent by surrogate id."""

    patent = db.get(
        models.Patent,
        patent_id,
        options=[selectinload(models.Patent.client), selectinload(models.Patent.jurisdiction)],
    )
    if not patent:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patent not found")
    return patent


@router.get("/{patent_id}/deadlines", response_model=List[schemas.DeadlineRead])
def list_deadlines(patent_id: int, db: DbSession) -> List[schemas.DeadlineRead]:
    """Return the maintenance deadlines derived for the patent, with their costs."""

    stmt = (
        select(models.Deadline)
        .options(selectinload(models.Deadline.cost))
        .where(
            models.Deadline.asset_type == models.ASSET_TYPE_PATENT,
            models.Deadline.asset_id == patent_id,
        )
    )
    deadlines = db.execute(stmt.order_by(models.Deadline.due_year)).scalars().all()
    if not deadlines:
        # Ensure the parent exists; surface 404 if neither patent nor deadlines exist.
        if not db.get(models.Patent, patent_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patent not found")
    return deadlines
