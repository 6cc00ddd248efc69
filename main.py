from contextlib import asynccontextmanager
from fastapi import FastAPI
from src.database.core import engine, Base
from src.entities.category import Category  # Import models to register them
from src.entities.transaction import Transaction  # Import models to register them
from src.api import register_routes
from src.exceptions.handlers import register_exception_handlers
from src.config import settings

from src.logging import configure_logging

configure_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """ Creates missing tables on startup; there are no migrations in this project """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


app = FastAPI(title="Finances API", lifespan=lifespan)

register_exception_handlers(app)
register_routes(app)
