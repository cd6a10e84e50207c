"""
Alignment Service - alignment scores between cells, titles, question
constituents, answer choices and wh-terms

Public API:
- AlignmentFunction(alignment_type, tokenizer, ...) -> scorer with 7 operations
- AlignmentFunction.from_params(ilp_params, tokenizer, ...) -> scorer from config
"""

import logging
from enum import Enum
from typing import List, Optional

from .cache_service import SimilarityCache, RedisSimilarityCache
from .entailment_service import EntailmentService
from .similarity_service import (
    SimilarityType,
    EntailmentSimilarity,
    Word2VecSimilarity,
    WordOverlapSimilarity,
)
from .tokenizer_service import Tokenizer
from .vector_service import WordVectorModel
from ..config import IlpParams
from ..exceptions import ConfigurationError, MissingDependencyError

logger = logging.getLogger(__name__)


class AlignmentType(Enum):
    """Similarity backends available for alignment scoring"""
    ENTAILMENT = "Entailment"
    WORD2VEC = "Word2Vec"
    WORD_OVERLAP = "WordOverlap"


class AlignmentFunction:
    """
    Computes alignment scores between pairs of cells, titles, question
    constituents, etc. with exactly one similarity backend
    """

    def __init__(
        self,
        alignment_type: str,
        tokenizer: Tokenizer,
        entailment_service: Optional[EntailmentService] = None,
        entailment_score_offset: float = 0.0,
        similarity_cache: Optional[SimilarityCache] = None,
        word_vector_model: Optional[WordVectorModel] = None
    ):
        """
        Initialize the alignment function

        Args:
            alignment_type: One of Entailment, Word2Vec, WordOverlap
            tokenizer: Stemmed keyword tokenizer
            entailment_service: Required for Entailment
            entailment_score_offset: Subtracted from raw entailment scores
            similarity_cache: Optional cache for entailment scores
            word_vector_model: Required for Word2Vec

        Raises:
            ConfigurationError: If alignment_type is not recognized
            MissingDependencyError: If the backend's collaborator is missing
        """
        try:
            self.alignment_type = AlignmentType(alignment_type)
        except ValueError:
            raise ConfigurationError(f"Alignment type {alignment_type} not recognized")

        self.similarity_function: SimilarityType = self._build_similarity(
            tokenizer, entailment_service, entailment_score_offset,
            similarity_cache, word_vector_model
        )

    def _build_similarity(self, tokenizer, entailment_service, entailment_score_offset,
                          similarity_cache, word_vector_model) -> SimilarityType:
        if self.alignment_type == AlignmentType.ENTAILMENT:
            logger.info("Using entailment for alignment score computation")
            if entailment_service is None:
                raise MissingDependencyError("entailment service", "Entailment alignment")
            if similarity_cache is not None:
                logger.info("  Using cache for entailment scores")
            return EntailmentSimilarity(
                entailment_service, entailment_score_offset, tokenizer, similarity_cache
            )

        if self.alignment_type == AlignmentType.WORD2VEC:
            logger.info("Using word2vec for alignment score computation")
            if word_vector_model is None:
                raise MissingDependencyError("word vector model", "Word2Vec alignment")
            return Word2VecSimilarity(word_vector_model)

        logger.info("Using word overlap for alignment score computation")
        return WordOverlapSimilarity(tokenizer)

    @classmethod
    def from_params(
        cls,
        params: IlpParams,
        tokenizer: Tokenizer,
        entailment_service: Optional[EntailmentService] = None,
        similarity_cache: Optional[SimilarityCache] = None,
        word_vector_model: Optional[WordVectorModel] = None
    ) -> 'AlignmentFunction':
        """
        Build an alignment function from IlpParams

        A Redis cache is created when use_redis_cache is set and no cache is passed;
        word vectors are loaded from word_vectors_file when Word2Vec is selected and
        no model is passed.
        """
        if params.use_redis_cache and similarity_cache is None:
            similarity_cache = RedisSimilarityCache(params.redis_host, params.redis_port)
        if (params.alignment_type == AlignmentType.WORD2VEC.value
                and word_vector_model is None and params.word_vectors_file):
            word_vector_model = WordVectorModel.load(params.word_vectors_file, params.word_vectors_limit)

        return cls(
            params.alignment_type,
            tokenizer,
            entailment_service=entailment_service,
            entailment_score_offset=params.entailment_score_offset,
            similarity_cache=similarity_cache,
            word_vector_model=word_vector_model,
        )

    def score_title_title(self, title_str1: str, title_str2: str) -> float:
        """Alignment score between two titles of tables"""
        return self.similarity_function.score_title_title(title_str1, title_str2)

    def score_cell_cell(self, cell_str1: str, cell_str2: str) -> float:
        """Alignment score between cells of two tables"""
        return self.similarity_function.score_cell_cell(cell_str1, cell_str2)

    def score_title_q_cons(self, title_str: str, q_cons_str: str) -> float:
        """Alignment score between a title of a table, and a question constituent"""
        return self.similarity_function.score_title_q_cons(title_str, q_cons_str)

    def score_cell_q_cons(self, cell_str: str, q_cons_str: str) -> float:
        """Alignment score between a cell of a table, and a question constituent"""
        return self.similarity_function.score_cell_q_cons(cell_str, q_cons_str)

    def score_title_q_choice(self, title_str: str, q_choice_str: str) -> float:
        """Alignment score between a title of a table, and a question option"""
        return self.similarity_function.score_title_q_choice(title_str, q_choice_str)

    def score_cell_q_choice(self, cell_str: str, q_choice_str: str) -> float:
        """Alignment score between a cell of a table, and a question option"""
        return self.similarity_function.score_cell_q_choice(cell_str, q_choice_str)

    def score_str_to_wh_terms(self, text: str, wh_terms: List[str]) -> float:
        """
        Alignment score between a string and a wh-term

        Very strict: returns 0 if text has more than two words.
        """
        if not wh_terms or len(text.split()) > 2:
            return 0.0
        return self.similarity_function.score_str_to_wh_terms(text, wh_terms)
