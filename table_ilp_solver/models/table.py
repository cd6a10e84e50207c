"""
Models for knowledge tables and their static alignment configuration
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Pattern, TYPE_CHECKING

if TYPE_CHECKING:
    from ..services.tokenizer_service import Tokenizer


@dataclass(frozen=True)
class Table:
    """
    A knowledge table

    The first row is the title row. full_content_tokenized mirrors rows:
    full_content_tokenized[row][col] is the stemmed token sequence of that cell.
    """
    name: str
    rows: List[List[str]]
    full_content_tokenized: List[List[List[str]]] = field(default_factory=list, repr=False)

    @classmethod
    def from_rows(cls, name: str, rows: List[List[str]], tokenizer: 'Tokenizer') -> 'Table':
        """
        Build a table and tokenize every cell

        Args:
            name: Table name (file name or tablestore id)
            rows: Cell strings, title row first
            tokenizer: Stemmed keyword tokenizer

        Returns:
            Table with tokenized content
        """
        tokenized = [
            [tokenizer.stemmed_keyword_tokenize(cell) for cell in row]
            for row in rows
        ]
        return cls(name=name, rows=rows, full_content_tokenized=tokenized)

    @property
    def title_row(self) -> List[str]:
        return self.rows[0] if self.rows else []

    @property
    def content_rows(self) -> List[List[str]]:
        return self.rows[1:]

    def all_tokens(self) -> List[str]:
        """All cell tokens, flattened in row-major order (with repetition)"""
        return [
            token
            for row in self.full_content_tokenized
            for cell in row
            for token in cell
        ]


@dataclass(frozen=True)
class TableCandidate:
    """A table selected for a question, with its ranking score"""
    table_id: int
    table: Table
    score: float


@dataclass(frozen=True)
class AllowedColumnAlignment:
    """Two columns (in two tables) that are allowed to be joined/aligned"""
    table1_name: str
    col1_idx: int
    table2_name: str
    col2_idx: int


@dataclass(frozen=True)
class InterColumnRelation:
    """A binary relation between two columns of one table"""
    table_name: str
    col1_idx: int
    col2_idx: int
    relation: str


@dataclass(frozen=True)
class RelationPattern:
    """
    A regex that expresses a relation in text

    A pattern written with a trailing "-1" has its arguments flipped.
    """
    pattern: Pattern
    is_flipped: bool = False

    @classmethod
    def parse(cls, text: str) -> 'RelationPattern':
        is_flipped = text.endswith("-1")
        if is_flipped:
            text = text[:-2]
        return cls(pattern=re.compile(text), is_flipped=is_flipped)

    def search(self, text: str) -> Optional[re.Match]:
        return self.pattern.search(text)
