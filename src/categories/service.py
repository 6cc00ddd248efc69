from typing import Iterable, List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import IntegrityError
from logging import getLogger

from ..entities.category import Category
from ..exceptions.categories import CategoryCreationError, CategoryNotFoundError

logger = getLogger(__name__)


async def get_category_by_title(db: AsyncSession, title: str) -> Category | None:
    result = await db.execute(select(Category).filter(Category.title == title))
    return result.scalars().first()


async def get_categories_by_titles(
    db: AsyncSession, titles: Iterable[str]
) -> List[Category]:
    titles = set(titles)
    if not titles:
        return []

    result = await db.execute(select(Category).filter(Category.title.in_(titles)))
    return list(result.scalars().all())


async def get_or_create_category(db: AsyncSession, title: str) -> Category:
    """
    Busca a categoria pelo título e, caso não exista, cria uma nova.
    A categoria criada é apenas enviada ao banco (flush); o commit fica a cargo de quem chama.
    """
    category = await get_category_by_title(db, title)
    if category:
        logger.info(f"Categoria existente encontrada: {category.title}")
        return category

    category = Category(title=title)
    db.add(category)
    try:
        await db.flush()
        logger.info(f"Nova categoria criada automaticamente: {category.title}")
    except IntegrityError as e:
        # Outra requisição criou a mesma categoria entre a busca e o insert.
        await db.rollback()
        logger.warning(
            f"IntegrityError criando categoria '{title}'. Tentando buscar novamente."
        )
        category = await get_category_by_title(db, title)
        if not category:
            raise CategoryCreationError(title, str(e.orig))

    return category


async def get_categories(db: AsyncSession) -> List[Category]:
    result = await db.execute(select(Category).order_by(Category.title))
    categories = list(result.scalars().all())
    logger.info(f"Recuperadas {len(categories)} categorias")
    return categories


async def get_category_by_id(db: AsyncSession, category_id: UUID) -> Category:
    result = await db.execute(select(Category).filter(Category.id == category_id))
    category = result.scalars().first()
    if not category:
        logger.warning(f"Categoria de ID {category_id} não encontrada")
        raise CategoryNotFoundError(category_id)
    logger.info(f"Categoria de ID {category_id} recuperada")
    return category
