"""
Configuration for the TableIlp solver

Values default to the ones below and can be overridden with TABLEILP_*
environment variables (a .env file in the working directory is honored).
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

ENV_PREFIX = "TABLEILP_"


def _env_str(name: str, default: str) -> str:
    return os.getenv(ENV_PREFIX + name, default)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(ENV_PREFIX + name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_int(name: str, default: int) -> int:
    value = os.getenv(ENV_PREFIX + name)
    return int(value) if value else default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(ENV_PREFIX + name)
    return float(value) if value else default


def _env_list(name: str, default: List[str]) -> List[str]:
    value = os.getenv(ENV_PREFIX + name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(',') if item.strip()]


@dataclass
class TableParams:
    """Knowledge table related parameters"""
    use_local: bool = True
    local_folder: str = "data/tables"
    use_tablestore_format: bool = False
    local_tablestore_file: str = ""

    # Table ids excluded from ranking (positions in the loaded table list)
    ignore_list: List[int] = field(default_factory=list)
    # Tablestore metadata ids dropped at load time
    ignore_list_tablestore: List[str] = field(default_factory=list)

    # Cheat sheet mode vs. TF-IDF ranking
    use_cached_tables_for_question: bool = False
    question_to_tables_cache: str = ""

    # Ranking policy: top-K or score threshold, never both
    max_tables_per_question: int = 4
    use_rank_threshold: bool = False
    rank_threshold: float = 0.25

    # Auxiliary files; an empty path means "none"
    allowed_column_alignments_file: str = ""
    allowed_tablestore_column_alignments_file: str = ""
    column_relations_file: str = ""
    column_relations_tablestore_file: str = ""
    relation_representation_file: str = ""

    @classmethod
    def from_env(cls) -> 'TableParams':
        defaults = cls()
        return cls(
            use_local=_env_bool("USE_LOCAL", defaults.use_local),
            local_folder=_env_str("LOCAL_FOLDER", defaults.local_folder),
            use_tablestore_format=_env_bool("USE_TABLESTORE_FORMAT", defaults.use_tablestore_format),
            local_tablestore_file=_env_str("LOCAL_TABLESTORE_FILE", defaults.local_tablestore_file),
            ignore_list=[int(i) for i in _env_list("IGNORE_LIST", [])],
            ignore_list_tablestore=_env_list("IGNORE_LIST_TABLESTORE", []),
            use_cached_tables_for_question=_env_bool(
                "USE_CACHED_TABLES_FOR_QUESTION", defaults.use_cached_tables_for_question
            ),
            question_to_tables_cache=_env_str("QUESTION_TO_TABLES_CACHE", defaults.question_to_tables_cache),
            max_tables_per_question=_env_int("MAX_TABLES_PER_QUESTION", defaults.max_tables_per_question),
            use_rank_threshold=_env_bool("USE_RANK_THRESHOLD", defaults.use_rank_threshold),
            rank_threshold=_env_float("RANK_THRESHOLD", defaults.rank_threshold),
            allowed_column_alignments_file=_env_str(
                "ALLOWED_COLUMN_ALIGNMENTS_FILE", defaults.allowed_column_alignments_file
            ),
            allowed_tablestore_column_alignments_file=_env_str(
                "ALLOWED_TABLESTORE_COLUMN_ALIGNMENTS_FILE", defaults.allowed_tablestore_column_alignments_file
            ),
            column_relations_file=_env_str("COLUMN_RELATIONS_FILE", defaults.column_relations_file),
            column_relations_tablestore_file=_env_str(
                "COLUMN_RELATIONS_TABLESTORE_FILE", defaults.column_relations_tablestore_file
            ),
            relation_representation_file=_env_str(
                "RELATION_REPRESENTATION_FILE", defaults.relation_representation_file
            ),
        )

    @property
    def alignments_file(self) -> str:
        """Allowed column alignments file for the active table format"""
        if self.use_tablestore_format:
            return self.allowed_tablestore_column_alignments_file
        return self.allowed_column_alignments_file

    @property
    def relations_file(self) -> str:
        """Inter-column relations file for the active table format"""
        if self.use_tablestore_format:
            return self.column_relations_tablestore_file
        return self.column_relations_file


@dataclass
class IlpParams:
    """Alignment related parameters handed to the scorer"""
    alignment_type: str = "Entailment"  # Entailment, Word2Vec, WordOverlap
    entailment_score_offset: float = 0.2
    use_redis_cache: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    word_vectors_file: str = ""
    word_vectors_limit: Optional[int] = None

    @classmethod
    def from_env(cls) -> 'IlpParams':
        defaults = cls()
        limit = os.getenv(ENV_PREFIX + "WORD_VECTORS_LIMIT")
        return cls(
            alignment_type=_env_str("ALIGNMENT_TYPE", defaults.alignment_type),
            entailment_score_offset=_env_float("ENTAILMENT_SCORE_OFFSET", defaults.entailment_score_offset),
            use_redis_cache=_env_bool("USE_REDIS_CACHE", defaults.use_redis_cache),
            redis_host=_env_str("REDIS_HOST", defaults.redis_host),
            redis_port=_env_int("REDIS_PORT", defaults.redis_port),
            word_vectors_file=_env_str("WORD_VECTORS_FILE", defaults.word_vectors_file),
            word_vectors_limit=int(limit) if limit else None,
        )


@dataclass
class SolverParams:
    """Answer orchestration switches"""
    fail_on_unanswered_questions: bool = True
    use_fallback_solver: bool = False
    use_fallback_solver_component_id: bool = False

    @classmethod
    def from_env(cls) -> 'SolverParams':
        defaults = cls()
        return cls(
            fail_on_unanswered_questions=_env_bool(
                "FAIL_ON_UNANSWERED_QUESTIONS", defaults.fail_on_unanswered_questions
            ),
            use_fallback_solver=_env_bool("USE_FALLBACK_SOLVER", defaults.use_fallback_solver),
            use_fallback_solver_component_id=_env_bool(
                "USE_FALLBACK_SOLVER_COMPONENT_ID", defaults.use_fallback_solver_component_id
            ),
        )


@dataclass
class SolverConfig:
    """All parameters of one solver instance"""
    tables: TableParams = field(default_factory=TableParams)
    ilp: IlpParams = field(default_factory=IlpParams)
    solver: SolverParams = field(default_factory=SolverParams)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> 'SolverConfig':
        """
        Build configuration from environment variables

        Args:
            dotenv_path: Optional .env file (defaults to searching the working directory)

        Returns:
            SolverConfig with every section populated
        """
        load_dotenv(dotenv_path)
        return cls(
            tables=TableParams.from_env(),
            ilp=IlpParams.from_env(),
            solver=SolverParams.from_env(),
        )
