from .operation_service import (
    get_balance,
    list_transactions,
    get_transaction_by_id,
    create_transaction,
    delete_transaction,
)

from .import_service import (
    bulk_create_transaction,
    import_transactions_from_csv,
)

__all__ = [
    "get_balance",
    "list_transactions",
    "get_transaction_by_id",
    "create_transaction",
    "delete_transaction",
    "bulk_create_transaction",
    "import_transactions_from_csv",
]
