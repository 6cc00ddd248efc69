from fastapi import FastAPI
from src.transactions.controller import router as transactions_router
from src.categories.controller import router as categories_router


def register_routes(app: FastAPI):
    app.include_router(categories_router)
    app.include_router(transactions_router)
