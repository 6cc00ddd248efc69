from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from fastapi import UploadFile
from logging import getLogger

from src.transactions.model import CSVTransaction
from src.transactions.parsers import get_parser
from src.entities.transaction import Transaction
from src.entities.category import Category
from src.categories.service import get_categories_by_titles
from src.exceptions.transactions import TransactionImportError

logger = getLogger(__name__)


async def _resolve_categories(
    db: AsyncSession, rows: List[CSVTransaction]
) -> dict[str, Category]:
    """
    Monta o mapa título -> categoria com uma única consulta (IN) e um único
    insert em lote para as categorias que ainda não existem.
    """
    titles = [row.category for row in rows]
    existing_categories = await get_categories_by_titles(db, titles)
    categories_map = {category.title: category for category in existing_categories}

    # dict.fromkeys remove duplicados preservando a ordem do arquivo
    new_titles = [
        title for title in dict.fromkeys(titles) if title not in categories_map
    ]
    new_categories = [Category(title=title) for title in new_titles]

    if new_categories:
        db.add_all(new_categories)
        await db.flush()
        logger.info(
            f"{len(new_categories)} novas categorias criadas na importação: {', '.join(new_titles)}"
        )

    categories_map.update({category.title: category for category in new_categories})
    return categories_map


async def bulk_create_transaction(
    db: AsyncSession, rows: List[CSVTransaction]
) -> List[Transaction]:
    if not rows:
        return []

    try:
        categories_map = await _resolve_categories(db, rows)

        created_transactions = [
            Transaction(
                title=row.title,
                type=row.type,
                value=row.value,
                category=categories_map[row.category],
            )
            for row in rows
        ]

        db.add_all(created_transactions)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Erro ao gravar múltiplas transações: {str(e)}", exc_info=True)
        raise TransactionImportError(
            "não foi possível gravar as transações no banco de dados."
        )
    except Exception as e:
        await db.rollback()
        logger.error(f"Erro ao criar múltiplas transações: {str(e)}", exc_info=True)
        raise TransactionImportError(str(e))

    logger.info(f"{len(created_transactions)} transações importadas em lote")
    return created_transactions


async def import_transactions_from_csv(
    db: AsyncSession, file: UploadFile
) -> List[Transaction]:
    try:
        parser = get_parser()
        rows = await parser.parse(file)

        if not rows:
            logger.info(f"Nenhuma transação válida encontrada em '{file.filename}'")
            return []

        return await bulk_create_transaction(db, rows)

    except TransactionImportError as e:
        logger.warning(f"Erro conhecido na importação de transações: {e.detail}")
        raise e
    except UnicodeDecodeError as e:
        logger.warning(f"Arquivo '{file.filename}' não está em UTF-8: {str(e)}")
        raise TransactionImportError("O arquivo deve estar codificado em UTF-8.")
    except Exception as e:
        logger.error(f"Erro inesperado ao importar transações: {str(e)}", exc_info=True)
        raise TransactionImportError(
            f"Ocorreu um erro inesperado durante a importação: {str(e)}"
        )
    finally:
        await file.close()
