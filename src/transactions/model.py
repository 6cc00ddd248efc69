from datetime import datetime
from decimal import Decimal
from typing import List
from uuid import UUID
from dataclasses import dataclass
from pydantic import Field, field_validator
from src.schemas.base import CamelModel
from src.entities.transaction import TransactionType
from src.categories.model import CategorySimpleResponse


@dataclass
class CSVTransaction:
    """Linha válida lida do arquivo CSV de importação."""

    title: str
    type: TransactionType
    value: Decimal
    category: str


class TransactionTypeSchema(CamelModel):
    value: str
    display_name: str


class TransactionBase(CamelModel):
    title: str = Field(min_length=1)
    value: Decimal = Field(gt=0, decimal_places=2, max_digits=10)


class TransactionCreate(TransactionBase):
    type: TransactionType
    category: str = Field(min_length=1)

    @field_validator("title", "category", mode="before")
    @classmethod
    def strip_text(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class TransactionResponse(TransactionBase):
    id: UUID
    type: TransactionTypeSchema
    category_id: UUID
    category: CategorySimpleResponse
    created_at: datetime
    updated_at: datetime

    @field_validator("type", mode="before")
    @classmethod
    def convert_type(cls, v):
        if isinstance(v, str):
            v = TransactionType(v)
        if isinstance(v, TransactionType):
            return TransactionTypeSchema(value=v.value, display_name=v.display_name)
        return v


class Balance(CamelModel):
    income: Decimal = Decimal("0")
    outcome: Decimal = Decimal("0")
    total: Decimal = Decimal("0")

    @classmethod
    def create(cls, income: Decimal, outcome: Decimal):
        return cls(income=income, outcome=outcome, total=income - outcome)


class TransactionListResponse(CamelModel):
    transactions: List[TransactionResponse]
    balance: Balance
