"""
Repository for loading knowledge tables
"""

import json
import logging
from pathlib import Path
from typing import Collection, List, TYPE_CHECKING

from .csv_loader import read_csv_rows
from ..config import TableParams
from ..models.table import Table

if TYPE_CHECKING:
    from ..services.tokenizer_service import Tokenizer

logger = logging.getLogger(__name__)


class TableRepository:
    """
    Loads tables from a folder of CSV files or a local tablestore export

    Public API:
    - load_tables(params) -> List[Table]
    - load_csv_folder(folder) -> List[Table]
    - load_tablestore_file(path, ignore_ids) -> List[Table]
    """

    def __init__(self, tokenizer: 'Tokenizer'):
        """
        Initialize repository

        Args:
            tokenizer: Tokenizer used to pre-tokenize every cell
        """
        self.tokenizer = tokenizer

    def load_tables(self, params: TableParams) -> List[Table]:
        """
        Load tables as configured

        Raises:
            FileNotFoundError: If the configured folder or file is missing
            ValueError: If remote loading is requested (only local sources are supported)
        """
        if not params.use_local:
            raise ValueError("Only local table sources are supported; set use_local")

        if params.use_tablestore_format:
            logger.info(f"Loading tables from local tablestore file {params.local_tablestore_file}")
            return self.load_tablestore_file(params.local_tablestore_file, params.ignore_list_tablestore)

        logger.info(f"Loading csv tables from local folder {params.local_folder}")
        return self.load_csv_folder(params.local_folder)

    def load_csv_folder(self, folder: str) -> List[Table]:
        """
        Load every *.csv file of a folder, sorted by file name

        The file name (with extension) becomes the table name.
        """
        folder_path = Path(folder)
        if not folder_path.is_dir():
            raise FileNotFoundError(f"Table folder not found: {folder}")

        files = sorted(p for p in folder_path.iterdir() if p.name.endswith('.csv'))
        tables = [
            Table.from_rows(file.name, read_csv_rows(str(file)), self.tokenizer)
            for file in files
        ]
        logger.debug(f"{len(tables)} tables loaded")
        return tables

    def load_tablestore_file(self, path: str, ignore_ids: Collection[str] = ()) -> List[Table]:
        """
        Load tables from a tablestore JSON export

        Accepts either a list of tables or {"tables": [...], "description": "..."};
        each table is {"metadata": {"id": ...}, "contents": [[...], ...]}.

        Args:
            path: JSON file
            ignore_ids: Tablestore ids to skip

        Returns:
            List of Table, named by tablestore id
        """
        json_path = Path(path)
        if not json_path.exists():
            raise FileNotFoundError(f"Tablestore file not found: {path}")

        with open(json_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        raw_tables = data.get('tables', []) if isinstance(data, dict) else data
        tables = []
        for raw_table in raw_tables:
            table_id = str(raw_table.get('metadata', {}).get('id', ''))
            if table_id in ignore_ids:
                continue
            rows = [[str(cell) for cell in row] for row in raw_table.get('contents', [])]
            tables.append(Table.from_rows(table_id, rows, self.tokenizer))

        logger.debug(f"{len(tables)} tables loaded ({len(raw_tables) - len(tables)} ignored)")
        return tables
