from abc import ABC, abstractmethod
from typing import List
from fastapi import UploadFile
from src.transactions.model import CSVTransaction
import csv
import io


class BaseParser(ABC):
    @abstractmethod
    async def parse(self, file: UploadFile) -> List[CSVTransaction]:
        """
        Parses an uploaded CSV file and returns the valid rows as CSVTransaction objects.
        """
        pass

    async def _read_csv(self, file: UploadFile) -> List[List[str]]:
        content = await file.read()
        # utf-8-sig descarta o BOM gerado por planilhas exportadas no Excel
        decoded_content = content.decode("utf-8-sig")
        csv_reader = csv.reader(io.StringIO(decoded_content))

        return [[cell.strip() for cell in row] for row in csv_reader]
