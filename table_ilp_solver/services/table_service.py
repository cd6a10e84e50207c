"""
Table Service - table index, TF-IDF scores and table ranking for questions

Public API:
- get_table_ids_for_question(question) -> List[Tuple[int, float]]
- get_tables_for_question(question) -> List[TableCandidate]
- tfidf_table_score(table_idx, question) -> float
- build_tfidf_index(per_table_tokens, table_indices) -> (tf_map, idf_map)
"""

import logging
import math
from collections import Counter
from functools import cached_property
from typing import Collection, Dict, List, Optional, Sequence, Tuple

from .tokenizer_service import Tokenizer
from ..config import TableParams
from ..exceptions import ConfigurationError
from ..models.table import (
    Table,
    TableCandidate,
    AllowedColumnAlignment,
    InterColumnRelation,
    RelationPattern,
)
from ..repository.csv_loader import (
    read_allowed_column_alignments,
    read_inter_column_relations,
    read_relation_representations,
    read_question_to_tables,
)
from ..repository.table_repository import TableRepository

logger = logging.getLogger(__name__)

TfMap = Dict[Tuple[str, int], float]
IdfMap = Dict[str, float]

# Score given to every table coming from the question-to-tables cheat sheet
CACHED_TABLE_SCORE = 1.0


def build_tfidf_index(per_table_tokens: Sequence[List[str]],
                      table_indices: Collection[int]) -> Tuple[TfMap, IdfMap]:
    """
    Compute TF and IDF scores for all words of the indexed tables

    tf(token, table) = 1 + log10(count) for tokens present in the table; absent
    tokens have no entry. idf(token) = log10(N / df(token)), with N the number
    of indexed tables and df >= 1 for every token that has an entry.

    Args:
        per_table_tokens: Flattened tokens (with repetition) of every table, by table id
        table_indices: Ids of the tables to index

    Returns:
        (tf_map keyed by (token, table id), idf_map keyed by token)
    """
    number_of_tables = len(table_indices)

    tf_map: TfMap = {}
    doc_freq: Counter = Counter()
    for table_idx in table_indices:
        # counts are always strictly positive
        for token, count in Counter(per_table_tokens[table_idx]).items():
            tf_map[(token, table_idx)] = 1.0 + math.log10(count)
            doc_freq[token] += 1

    idf_map: IdfMap = {
        token: math.log10(number_of_tables / df)
        for token, df in doc_freq.items()
    }

    logger.debug(f"indexed {number_of_tables} tables, {len(idf_map)} distinct tokens")
    return tf_map, idf_map


class TableInterface:
    """
    Stores the tables, their TF-IDF index and the static alignment
    configuration, and picks the tables relevant to a question

    Everything is built in the constructor and read-only afterwards, so one
    instance can serve concurrent questions.
    """

    def __init__(
        self,
        tables: List[Table],
        tokenizer: Tokenizer,
        params: Optional[TableParams] = None
    ):
        """
        Initialize the table interface

        Args:
            tables: All loaded tables; their positions are the table ids
            tokenizer: Stemmed keyword tokenizer (same one the tables were tokenized with)
            params: Table parameters (defaults to TableParams())

        Raises:
            ConfigurationError: If an auxiliary file is malformed or names an unknown table,
                or cheat sheet mode has no cheat sheet file
        """
        self.params = params or TableParams()
        self.tokenizer = tokenizer
        self.all_tables = list(tables)
        self.all_table_names = [table.name for table in self.all_tables]
        logger.debug("tables with internal IDs:\n\t" + str(list(enumerate(self.all_table_names))))

        self.ignore_list = set(self.params.ignore_list)
        self.ranked_table_indices = [
            idx for idx in range(len(self.all_tables)) if idx not in self.ignore_list
        ]
        logger.info(f"Ignoring table IDs {sorted(self.ignore_list)}")

        if self.params.use_cached_tables_for_question:
            if not self.params.question_to_tables_cache:
                raise ConfigurationError(
                    "use_cached_tables_for_question is set but question_to_tables_cache is empty"
                )
            logger.info(f"Using CACHED tables for questions from {self.params.question_to_tables_cache}")
        else:
            logger.info("Using RANKED tables for questions")

        # pairs of columns (in two tables) that are allowed to be aligned
        self.allowed_column_alignments: List[AllowedColumnAlignment] = read_allowed_column_alignments(
            self.params.alignments_file, self.all_table_names
        )
        # relations between the columns in a table
        self.allowed_relations: List[InterColumnRelation] = read_inter_column_relations(
            self.params.relations_file, self.all_table_names
        )
        # regex patterns for the relations in allowed_relations
        self.relation_to_representation: Dict[str, List[RelationPattern]] = read_relation_representations(
            self.params.relation_representation_file
        )

        self.per_table_tokens: List[List[str]] = [table.all_tokens() for table in self.all_tables]
        self.tf_map, self.idf_map = build_tfidf_index(self.per_table_tokens, self.ranked_table_indices)

    @classmethod
    def from_params(cls, params: TableParams, tokenizer: Tokenizer) -> 'TableInterface':
        """Load tables as configured and build the interface"""
        tables = TableRepository(tokenizer).load_tables(params)
        logger.debug(f"{len(tables)} tables loaded")
        return cls(tables, tokenizer, params)

    @cached_property
    def question_to_tables_map(self) -> Dict[str, List[int]]:
        """Cheat sheet mapping training questions to tables; read on first use"""
        return read_question_to_tables(self.params.question_to_tables_cache, self.ignore_list)

    def get_table_ids_for_question(self, question: str) -> List[Tuple[int, float]]:
        """
        Get a subset of tables (with scores) relevant for a given question

        Args:
            question: Raw question text

        Returns:
            List of (table id, score)
        """
        if self.params.use_cached_tables_for_question:
            table_ids_with_scores = self.get_cached_table_ids_for_question(question)
        else:
            table_ids_with_scores = self.get_ranked_table_ids_for_question(question)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"using {len(table_ids_with_scores)} tables:\n" + "\n".join(
                f"\ttable {t} (score {s}) : " + "|".join(self.all_tables[t].title_row)
                for t, s in table_ids_with_scores
            ))
        return table_ids_with_scores

    def get_tables_for_question(self, question: str) -> List[TableCandidate]:
        """Same as get_table_ids_for_question, with the tables attached"""
        return [
            TableCandidate(table_id=table_id, table=self.all_tables[table_id], score=score)
            for table_id, score in self.get_table_ids_for_question(question)
        ]

    def get_cached_table_ids_for_question(self, question: str) -> List[Tuple[int, float]]:
        """Look the question up in the cheat sheet; unknown questions get no tables"""
        table_ids = self.question_to_tables_map.get(question.strip(), [])
        # TODO: cached matching scores, or tfidf_table_score(), instead of a flat 1.0
        return [(table_id, CACHED_TABLE_SCORE) for table_id in table_ids]

    def get_ranked_table_ids_for_question(self, question: str) -> List[Tuple[int, float]]:
        """
        Score every non-ignored table and keep either the top
        max_tables_per_question or those above rank_threshold
        """
        question_tokens = self.tokenizer.stemmed_keyword_tokenize(question.lower())
        score_index_pairs = [
            (table_idx, self._tfidf_table_score(table_idx, question_tokens))
            for table_idx in self.ranked_table_indices
        ]

        if self.params.use_rank_threshold:
            return [(t, s) for t, s in score_index_pairs if s > self.params.rank_threshold]

        # sorted() is stable: ties keep table order
        ranked = sorted(score_index_pairs, key=lambda pair: -pair[1])
        return ranked[:self.params.max_tables_per_question]

    def tfidf_table_score(self, table_idx: int, question: str) -> float:
        """
        Compute TF-IDF score for a question with respect to a given table

        Args:
            table_idx: Table id
            question: Raw question text

        Returns:
            Score >= 0; 0 when either side has no tokens
        """
        question_tokens = self.tokenizer.stemmed_keyword_tokenize(question.lower())
        return self._tfidf_table_score(table_idx, question_tokens)

    def _tfidf_table_score(self, table_idx: int, question_tokens: List[str]) -> float:
        table_tokens = self.per_table_tokens[table_idx]
        if not table_tokens or not question_tokens:
            return 0.0

        common_token_set = set(table_tokens) & set(question_tokens)

        table_score = sum(
            self.tf_map[(token, table_idx)] * self.idf_map[token]
            for token in common_token_set
            if (token, table_idx) in self.tf_map and token in self.idf_map
        )

        # Both overlaps count repetitions; the product favors tables whose shared
        # vocabulary dominates the question and the table at the same time.
        qa_overlap_score = sum(1 for t in question_tokens if t in common_token_set) / len(question_tokens)
        table_overlap_score = sum(1 for t in table_tokens if t in common_token_set) / len(table_tokens)

        return table_score * qa_overlap_score * table_overlap_score
