from uuid import UUID
from fastapi import HTTPException
from starlette import status


class CategoryError(HTTPException):
    """Exceção base para erros relacionados às categorias"""

    pass


class CategoryNotFoundError(CategoryError):
    def __init__(self, category_id: UUID | str | None = None):
        message = (
            "Categoria não encontrada"
            if category_id is None
            else f"Categoria de ID {category_id} não encontrada"
        )
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=message)


class CategoryCreationError(CategoryError):
    def __init__(self, title: str, error: str = ""):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Falha na criação da categoria '{title}': {error}",
        )
