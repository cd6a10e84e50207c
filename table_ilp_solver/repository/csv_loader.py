"""
CSV Loader - read the auxiliary CSV files that sit next to the tables

Formats (one record per row, "//" lines are comments, rows with fewer than two
fields are skipped):
- allowed column alignments: table1,col1,table2,col2
- inter-column relations:    table,col1,col2,relation
- relation representations:  relation,pattern[-1]
- question-to-tables cheat sheet: number,question,id-id-id[,...]

Public API:
- read_csv_rows(path) -> List[List[str]]
- read_allowed_column_alignments(path, table_names) -> List[AllowedColumnAlignment]
- read_inter_column_relations(path, table_names) -> List[InterColumnRelation]
- read_relation_representations(path) -> Dict[str, List[RelationPattern]]
- read_question_to_tables(path, ignore_list) -> Dict[str, List[int]]
"""

import csv
import logging
import re
from pathlib import Path
from typing import Collection, Dict, List

from ..exceptions import ConfigurationError
from ..models.table import AllowedColumnAlignment, InterColumnRelation, RelationPattern

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "//"
COMMENT_REGEX = re.compile(r"//.*")


def read_csv_rows(path: str) -> List[List[str]]:
    """
    Read every row of a CSV file

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    with open(csv_path, 'r', encoding='utf-8', newline='') as f:
        return [row for row in csv.reader(f)]


def _data_rows(path: str) -> List[List[str]]:
    """Rows that are neither comments nor (near) empty"""
    return [
        row for row in read_csv_rows(path)
        if len(row) > 1 and not row[0].startswith(COMMENT_PREFIX)
    ]


def _parse_index(value: str, path: str, row: List[str]) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise ConfigurationError(f"Error processing {path}: bad column index in {','.join(row)}")


def _check_table(name: str, table_names: Collection[str]) -> None:
    if name not in table_names:
        raise ConfigurationError(f"table {name} does not exist")


def read_allowed_column_alignments(path: str, table_names: Collection[str]) -> List[AllowedColumnAlignment]:
    """
    Read pairs of columns (in two tables) that are allowed to be aligned

    Args:
        path: CSV file; empty string means no file
        table_names: Names of all loaded tables

    Returns:
        List of AllowedColumnAlignment

    Raises:
        ConfigurationError: On a row without four fields or an unknown table
    """
    if not path:
        return []

    logger.info("Reading list of titles that are allowed to be aligned")
    alignments = []
    for row in _data_rows(path):
        fields = [COMMENT_REGEX.sub("", value).strip() for value in row]
        if len(fields) != 4:
            raise ConfigurationError(f"Error processing {path}: expected four columns in {','.join(row)}")
        table1_name, col1_str, table2_name, col2_str = fields
        _check_table(table1_name, table_names)
        _check_table(table2_name, table_names)
        alignments.append(AllowedColumnAlignment(
            table1_name=table1_name,
            col1_idx=_parse_index(col1_str, path, row),
            table2_name=table2_name,
            col2_idx=_parse_index(col2_str, path, row),
        ))

    logger.debug(f"Allowed column alignments: {alignments}")
    return alignments


def read_inter_column_relations(path: str, table_names: Collection[str]) -> List[InterColumnRelation]:
    """
    Read the relation schema of tables as binary relations between columns

    Raises:
        ConfigurationError: On a row without four fields or an unknown table
    """
    if not path:
        return []

    relations = []
    for row in _data_rows(path):
        if len(row) != 4:
            raise ConfigurationError(f"Expected four columns in {','.join(row)}")
        table_name = row[0].strip()
        _check_table(table_name, table_names)
        relations.append(InterColumnRelation(
            table_name=table_name,
            col1_idx=_parse_index(row[1], path, row),
            col2_idx=_parse_index(row[2], path, row),
            relation=row[3].strip(),
        ))
    return relations


def read_relation_representations(path: str) -> Dict[str, List[RelationPattern]]:
    """
    Read the regex patterns that express each relation, grouped by relation name
    """
    if not path:
        return {}

    representations: Dict[str, List[RelationPattern]] = {}
    for row in _data_rows(path):
        try:
            pattern = RelationPattern.parse(row[1])
        except re.error as e:
            raise ConfigurationError(f"Invalid pattern {row[1]!r} for relation {row[0]}: {e}")
        representations.setdefault(row[0], []).append(pattern)
    return representations


def read_question_to_tables(path: str, ignore_list: Collection[int] = ()) -> Dict[str, List[int]]:
    """
    Read the cheat sheet mapping training questions to tables

    Format: question number (ignored), question text, hyphen-separated table ids,
    other info (ignored).

    Args:
        path: CSV file
        ignore_list: Table ids to drop from every entry

    Returns:
        Dictionary: {trimmed question: [table ids in stored order]}
    """
    question_to_tables: Dict[str, List[int]] = {}
    for row_num, row in enumerate(read_csv_rows(path), start=1):
        if len(row) < 3 or row[0].startswith(COMMENT_PREFIX):
            continue
        try:
            table_ids = [int(t) for t in row[2].split('-') if t.strip()]
        except ValueError:
            raise ConfigurationError(f"Row {row_num} of {path}: bad table ids {row[2]!r}")
        question_to_tables[row[1].strip()] = [t for t in table_ids if t not in ignore_list]

    logger.info(f"Loaded cached tables for {len(question_to_tables)} questions from {path}")
    return question_to_tables
