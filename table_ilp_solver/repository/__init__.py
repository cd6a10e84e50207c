"""
Repository layer: table and auxiliary file loading
"""

from .table_repository import TableRepository
from .csv_loader import (
    read_csv_rows,
    read_allowed_column_alignments,
    read_inter_column_relations,
    read_relation_representations,
    read_question_to_tables,
)

__all__ = [
    'TableRepository',
    'read_csv_rows',
    'read_allowed_column_alignments',
    'read_inter_column_relations',
    'read_relation_representations',
    'read_question_to_tables',
]
