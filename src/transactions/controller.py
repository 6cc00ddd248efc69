from fastapi import UploadFile, File, APIRouter, status
from typing import List
from uuid import UUID

from ..database.core import DbSession
from . import model
from . import service


router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.get("/", response_model=model.TransactionListResponse)
async def list_transactions(db: DbSession):
    return await service.list_transactions(db)


@router.get("/balance", response_model=model.Balance)
async def get_balance(db: DbSession):
    return await service.get_balance(db)


@router.post(
    "/", response_model=model.TransactionResponse, status_code=status.HTTP_201_CREATED
)
async def create_transaction(db: DbSession, transaction: model.TransactionCreate):
    return await service.create_transaction(db, transaction)


@router.post(
    "/import",
    response_model=List[model.TransactionResponse],
    status_code=status.HTTP_201_CREATED,
)
async def import_transactions(db: DbSession, file: UploadFile = File(...)):
    return await service.import_transactions_from_csv(db, file)


@router.get("/{transaction_id}", response_model=model.TransactionResponse)
async def get_transaction(db: DbSession, transaction_id: UUID):
    return await service.get_transaction_by_id(db, transaction_id)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(db: DbSession, transaction_id: UUID):
    await service.delete_transaction(db, transaction_id)
