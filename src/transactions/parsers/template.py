from decimal import Decimal, InvalidOperation
from logging import getLogger
from typing import List
from fastapi import UploadFile
from .base import BaseParser
from src.transactions.model import CSVTransaction
from src.entities.transaction import TransactionType
from src.exceptions.transactions import TransactionImportError

logger = getLogger(__name__)


class TemplateParser(BaseParser):
    """
    Lê o modelo de importação com as colunas ``title, type, value, category``.

    A primeira linha é o cabeçalho e é sempre descartada. As células vêm
    separadas por ", " no modelo, por isso cada uma passa por ``strip``.
    """

    HEADER_LINES = 1
    MAX_VALUE = Decimal("99999999.99")

    async def parse(self, file: UploadFile) -> List[CSVTransaction]:
        rows = await self._read_csv(file)

        transactions = []
        for line_number, row in enumerate(rows, start=1):
            if line_number <= self.HEADER_LINES:
                continue

            title, type_, value, category = (row + [""] * 4)[:4]

            if not title or not type_ or not value:
                logger.info(f"Linha {line_number} ignorada: campos obrigatórios vazios")
                continue

            if not category:
                logger.warning(f"Linha {line_number} ignorada: categoria não informada")
                continue

            transactions.append(
                CSVTransaction(
                    title=title,
                    type=self._parse_type(type_, line_number),
                    value=self._parse_value(value, line_number),
                    category=category,
                )
            )

        return transactions

    @staticmethod
    def _parse_type(raw: str, line_number: int) -> TransactionType:
        try:
            return TransactionType(raw.lower())
        except ValueError:
            raise TransactionImportError(
                f"Tipo '{raw}' inválido na linha {line_number}. Use 'income' ou 'outcome'."
            )

    @classmethod
    def _parse_value(cls, raw: str, line_number: int) -> Decimal:
        try:
            value = Decimal(raw)
        except InvalidOperation:
            value = None

        if value is None or not value.is_finite():
            raise TransactionImportError(
                f"Valor '{raw}' inválido na linha {line_number}."
            )

        if value.normalize().as_tuple().exponent < -2:
            raise TransactionImportError(
                f"Valor '{raw}' na linha {line_number} deve ter no máximo 2 casas decimais."
            )

        if value <= 0 or value > cls.MAX_VALUE:
            raise TransactionImportError(
                f"Valor '{raw}' na linha {line_number} deve ser um número positivo de até 10 dígitos."
            )

        return value.quantize(Decimal("0.01"))
