import pytest
import uuid
from decimal import Decimal
from unittest.mock import AsyncMock, patch
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from src.transactions import service, model
from src.entities.transaction import TransactionType, Transaction
from src.entities.category import Category
from src.exceptions.transactions import (
    InsufficientBalanceError,
    TransactionCreationError,
    TransactionNotFoundError,
)


@pytest.mark.asyncio
async def test_get_balance_empty(db_session):
    balance = await service.get_balance(db_session)
    assert balance.income == Decimal("0")
    assert balance.outcome == Decimal("0")
    assert balance.total == Decimal("0")


@pytest.mark.asyncio
async def test_create_income_transaction_success(db_session):
    payload = model.TransactionCreate(
        title="Freelance",
        value=Decimal("500.00"),
        type=TransactionType.INCOME,
        category="Work",
    )
    transaction = await service.create_transaction(db_session, payload)

    assert transaction.title == "Freelance"
    assert transaction.value == Decimal("500.00")
    assert transaction.type == TransactionType.INCOME
    assert transaction.category.title == "Work"


@pytest.mark.asyncio
async def test_create_transaction_reuses_existing_category(
    db_session, sample_category
):
    payload = model.TransactionCreate(
        title="Groceries",
        value=Decimal("30.00"),
        type=TransactionType.INCOME,
        category="Food",
    )
    transaction = await service.create_transaction(db_session, payload)

    assert transaction.category_id == sample_category.id
    count = await db_session.scalar(select(func.count()).select_from(Category))
    assert count == 1


@pytest.mark.asyncio
async def test_create_outcome_within_balance(db_session, sample_income):
    payload = model.TransactionCreate(
        title="Rent",
        value=Decimal("400.00"),
        type=TransactionType.OUTCOME,
        category="House",
    )
    transaction = await service.create_transaction(db_session, payload)
    assert transaction.type == TransactionType.OUTCOME

    balance = await service.get_balance(db_session)
    assert balance.income == Decimal("1000.00")
    assert balance.outcome == Decimal("400.00")
    assert balance.total == Decimal("600.00")


@pytest.mark.asyncio
async def test_create_outcome_equal_to_balance_is_allowed(db_session, sample_income):
    payload = model.TransactionCreate(
        title="Everything",
        value=Decimal("1000.00"),
        type=TransactionType.OUTCOME,
        category="House",
    )
    await service.create_transaction(db_session, payload)

    balance = await service.get_balance(db_session)
    assert balance.total == Decimal("0")


@pytest.mark.asyncio
async def test_create_outcome_exceeding_balance_is_rejected(db_session, sample_income):
    payload = model.TransactionCreate(
        title="Car",
        value=Decimal("1000.01"),
        type=TransactionType.OUTCOME,
        category="Vehicles",
    )
    with pytest.raises(InsufficientBalanceError) as exc_info:
        await service.create_transaction(db_session, payload)

    assert exc_info.value.status_code == 400

    # Nothing is written: no transaction and no new category
    count = await db_session.scalar(select(func.count()).select_from(Transaction))
    assert count == 1
    category = await db_session.scalar(
        select(Category).filter(Category.title == "Vehicles")
    )
    assert category is None


@pytest.mark.asyncio
async def test_create_outcome_without_any_income_is_rejected(db_session):
    payload = model.TransactionCreate(
        title="Coffee",
        value=Decimal("5.00"),
        type=TransactionType.OUTCOME,
        category="Food",
    )
    with pytest.raises(InsufficientBalanceError):
        await service.create_transaction(db_session, payload)


@pytest.mark.asyncio
async def test_get_transaction_by_id_success(db_session, sample_income):
    fetched = await service.get_transaction_by_id(db_session, sample_income.id)
    assert fetched.id == sample_income.id
    assert fetched.title == "Monthly salary"


@pytest.mark.asyncio
async def test_get_transaction_by_id_not_found(db_session):
    with pytest.raises(TransactionNotFoundError):
        await service.get_transaction_by_id(db_session, uuid.uuid4())


@pytest.mark.asyncio
async def test_delete_transaction_success(db_session, sample_income):
    await service.delete_transaction(db_session, sample_income.id)

    with pytest.raises(TransactionNotFoundError):
        await service.get_transaction_by_id(db_session, sample_income.id)

    balance = await service.get_balance(db_session)
    assert balance.total == Decimal("0")


@pytest.mark.asyncio
async def test_delete_transaction_not_found(db_session):
    with pytest.raises(TransactionNotFoundError) as exc_info:
        await service.delete_transaction(db_session, uuid.uuid4())

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_list_transactions_includes_balance(db_session, sample_income):
    await service.create_transaction(
        db_session,
        model.TransactionCreate(
            title="Lunch",
            value=Decimal("20.00"),
            type=TransactionType.OUTCOME,
            category="Food",
        ),
    )

    result = await service.list_transactions(db_session)

    assert len(result.transactions) == 2
    titles = {t.title for t in result.transactions}
    assert titles == {"Monthly salary", "Lunch"}
    assert result.balance.income == Decimal("1000.00")
    assert result.balance.outcome == Decimal("20.00")
    assert result.balance.total == Decimal("980.00")


@pytest.mark.asyncio
async def test_create_transaction_database_error_hides_sql(db_session):
    payload = model.TransactionCreate(
        title="Freelance",
        value=Decimal("500.00"),
        type=TransactionType.INCOME,
        category="Work",
    )
    failure = IntegrityError(
        "INSERT INTO transactions (id, title) VALUES (?, ?)",
        ("abc", "Freelance"),
        Exception("CHECK constraint failed"),
    )

    with patch.object(db_session, "commit", AsyncMock(side_effect=failure)):
        with pytest.raises(TransactionCreationError) as exc_info:
            await service.create_transaction(db_session, payload)

    assert exc_info.value.status_code == 400
    assert "INSERT" not in exc_info.value.detail
    assert await db_session.scalar(select(func.count()).select_from(Transaction)) == 0
