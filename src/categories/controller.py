from fastapi import APIRouter
from typing import List
from uuid import UUID

from ..database.core import DbSession
from . import model
from . import service

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("/", response_model=List[model.CategoryResponse])
async def get_categories(db: DbSession):
    return await service.get_categories(db)


@router.get("/{category_id}", response_model=model.CategoryResponse)
async def get_category(db: DbSession, category_id: UUID):
    return await service.get_category_by_id(db, category_id)
