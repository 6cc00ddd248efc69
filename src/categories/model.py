from datetime import datetime
from uuid import UUID
from src.schemas.base import CamelModel


class CategoryBase(CamelModel):
    title: str


class CategoryResponse(CategoryBase):
    id: UUID
    created_at: datetime
    updated_at: datetime


class CategorySimpleResponse(CategoryBase):
    id: UUID
