"""
Services for the TableIlp solver
"""

from .tokenizer_service import Tokenizer, KeywordTokenizer
from .cache_service import SimilarityCache, InMemorySimilarityCache, RedisSimilarityCache
from .entailment_service import EntailmentService, EntailmentResult, RemoteEntailmentService
from .vector_service import WordVectorModel
from .similarity_service import (
    SimilarityType,
    EntailmentSimilarity,
    Word2VecSimilarity,
    WordOverlapSimilarity,
)
from .alignment_service import AlignmentFunction, AlignmentType
from .table_service import TableInterface, build_tfidf_index
from .solver_service import TableIlpSolver, Optimizer, FallbackSolver

__all__ = [
    'Tokenizer',
    'KeywordTokenizer',
    'SimilarityCache',
    'InMemorySimilarityCache',
    'RedisSimilarityCache',
    'EntailmentService',
    'EntailmentResult',
    'RemoteEntailmentService',
    'WordVectorModel',
    'SimilarityType',
    'EntailmentSimilarity',
    'Word2VecSimilarity',
    'WordOverlapSimilarity',
    'AlignmentFunction',
    'AlignmentType',
    'TableInterface',
    'build_tfidf_index',
    'TableIlpSolver',
    'Optimizer',
    'FallbackSolver',
]
