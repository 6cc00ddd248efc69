from decimal import Decimal
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from logging import getLogger

from src.transactions import model
from src.entities.transaction import TransactionType, Transaction
from src.categories.service import get_or_create_category
from src.exceptions.categories import CategoryError
from src.exceptions.transactions import (
    InsufficientBalanceError,
    TransactionCreationError,
    TransactionNotFoundError,
)

logger = getLogger(__name__)


async def get_balance(db: AsyncSession) -> model.Balance:
    result = await db.execute(
        select(Transaction.type, func.coalesce(func.sum(Transaction.value), 0))
        .group_by(Transaction.type)
    )
    totals = {type_: Decimal(total) for type_, total in result.all()}

    return model.Balance.create(
        income=totals.get(TransactionType.INCOME, Decimal("0")),
        outcome=totals.get(TransactionType.OUTCOME, Decimal("0")),
    )


async def list_transactions(db: AsyncSession) -> model.TransactionListResponse:
    result = await db.execute(
        select(Transaction).order_by(Transaction.created_at.desc())
    )
    transactions = result.scalars().all()
    balance = await get_balance(db)

    logger.info(f"Listando {len(transactions)} transações com saldo {balance.total}")
    return model.TransactionListResponse(transactions=transactions, balance=balance)


async def get_transaction_by_id(db: AsyncSession, transaction_id: UUID) -> Transaction:
    result = await db.execute(
        select(Transaction).filter(Transaction.id == transaction_id)
    )
    transaction = result.scalars().first()

    if not transaction:
        logger.warning(f"Transação de ID {transaction_id} não encontrada")
        raise TransactionNotFoundError(transaction_id)
    logger.info(f"Transação de ID {transaction_id} recuperada")
    return transaction


async def _ensure_sufficient_balance(db: AsyncSession, value: Decimal) -> None:
    balance = await get_balance(db)

    if balance.total < value:
        logger.warning(
            f"Saldo insuficiente para despesa de {value} (saldo atual: {balance.total})"
        )
        raise InsufficientBalanceError(balance.total, value)


async def create_transaction(
    db: AsyncSession, transaction: model.TransactionCreate
) -> Transaction:
    try:
        if transaction.type == TransactionType.OUTCOME:
            await _ensure_sufficient_balance(db, transaction.value)

        category = await get_or_create_category(db, transaction.category)

        new_transaction = Transaction(
            title=transaction.title,
            value=transaction.value,
            type=transaction.type,
            category=category,
        )

        db.add(new_transaction)
        await db.commit()
        await db.refresh(new_transaction)
        logger.info(
            f"Nova transação registrada: {new_transaction.title} ({new_transaction.type.value} {new_transaction.value})"
        )
        return new_transaction
    except (InsufficientBalanceError, CategoryError):
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"Falha ao gravar a transação '{transaction.title}': {str(e)}", exc_info=True
        )
        raise TransactionCreationError("não foi possível gravar a transação no banco de dados.")
    except Exception as e:
        await db.rollback()
        logger.error(f"Falha na criação de transação '{transaction.title}': {str(e)}")
        raise TransactionCreationError(str(e))


async def delete_transaction(db: AsyncSession, transaction_id: UUID) -> None:
    transaction = await get_transaction_by_id(db, transaction_id)
    await db.delete(transaction)
    await db.commit()
    logger.info(f"Transação de ID {transaction_id} foi excluída")
