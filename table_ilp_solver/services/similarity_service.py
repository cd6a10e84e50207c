"""
Similarity Service - the three similarity backends behind alignment scoring

Every backend answers the same seven questions (title/title, cell/cell,
cell/q-constituent, title/q-constituent, cell/q-choice, title/q-choice,
string/wh-terms). Title/title and cell/cell must be symmetric; the rest are
directional.

Backends:
- EntailmentSimilarity: how much does text1 entail text2 (minus an offset)
- Word2VecSimilarity: cosine similarity of word vectors (inherently symmetric)
- WordOverlapSimilarity: fraction of text2 words covered by text1 words
"""

import logging
from abc import ABC, abstractmethod
from collections import Counter
from typing import Callable, List, Optional

from .cache_service import SimilarityCache
from .entailment_service import EntailmentService
from .tokenizer_service import Tokenizer
from .vector_service import WordVectorModel
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ScoringFunction = Callable[[str, str], float]


class SimilarityType(ABC):
    """Base class for similarity backends"""

    @abstractmethod
    def score_title_title(self, title_str1: str, title_str2: str) -> float:
        pass

    @abstractmethod
    def score_cell_cell(self, cell_str1: str, cell_str2: str) -> float:
        pass

    @abstractmethod
    def score_cell_q_cons(self, cell_str: str, q_cons_str: str) -> float:
        pass

    @abstractmethod
    def score_title_q_cons(self, title_str: str, q_cons_str: str) -> float:
        pass

    @abstractmethod
    def score_cell_q_choice(self, cell_str: str, q_choice_str: str) -> float:
        pass

    @abstractmethod
    def score_title_q_choice(self, title_str: str, q_choice_str: str) -> float:
        pass

    @abstractmethod
    def score_str_to_wh_terms(self, text: str, wh_terms: List[str]) -> float:
        pass

    @staticmethod
    def symmetric_score(text1: str, text2: str, scoring_function: ScoringFunction) -> float:
        """Turn a one-sided score into a symmetric one"""
        return (scoring_function(text1, text2) + scoring_function(text2, text1)) / 2.0

    @staticmethod
    def max_score(text1: str, text2_seq: List[str], scoring_function: ScoringFunction) -> float:
        """Max of scores across hypothesis strings; text2_seq must not be empty"""
        return max(scoring_function(text1, text2) for text2 in text2_seq)


class EntailmentSimilarity(SimilarityType):
    """
    How much does text1 entail text2? (directional)

    An entailment score below the offset comes out negative and is read as
    negative correlation.
    """

    CACHE_KEY_SEPARATOR = "----"

    # Hypotheses ignored unless matched exactly; in WordNet nearly everything
    # is an object, a measure or a part.
    # Additional candidates: matter, substance, whole, cause, unit, event, relation
    IGNORE_HYPOTHESIS_SET = {'object', 'measure', 'part'}

    def __init__(self, entailment_service: EntailmentService, entailment_score_offset: float,
                 tokenizer: Tokenizer, cache: Optional[SimilarityCache] = None):
        """
        Initialize entailment similarity

        Args:
            entailment_service: Service computing entailment confidence
            entailment_score_offset: Subtracted from every raw score
            tokenizer: Stemmed keyword tokenizer
            cache: Optional cache for raw scores
        """
        self.entailment_service = entailment_service
        self.entailment_score_offset = entailment_score_offset
        self.tokenizer = tokenizer
        self.cache = cache

    def score_title_title(self, title_str1: str, title_str2: str) -> float:
        return self.symmetric_score(title_str1, title_str2, self.get_entailment_score)

    def score_cell_cell(self, cell_str1: str, cell_str2: str) -> float:
        return self.symmetric_score(cell_str1, cell_str2, self.get_entailment_score)

    def score_cell_q_cons(self, cell_str: str, q_cons_str: str) -> float:
        return self.get_entailment_score(q_cons_str, cell_str)

    def score_title_q_cons(self, title_str: str, q_cons_str: str) -> float:
        return self.get_entailment_score(q_cons_str, title_str)

    def score_cell_q_choice(self, cell_str: str, q_choice_str: str) -> float:
        return self.get_entailment_score(cell_str, q_choice_str)

    def score_title_q_choice(self, title_str: str, q_choice_str: str) -> float:
        return self.get_entailment_score(title_str, q_choice_str)

    def score_str_to_wh_terms(self, text: str, wh_terms: List[str]) -> float:
        return self.max_score(text, wh_terms, self.get_entailment_score)

    def split_stem_keyword_tokenize_filter(self, text: str) -> List[List[str]]:
        """
        Split on ';' and tokenize each segment

        Blank segments and segments like "[...]" are dropped.
        """
        segments = []
        for segment in text.split(';'):
            segment = segment.strip()
            if not segment:
                continue
            if segment.startswith('[') and segment.endswith(']'):
                continue
            segments.append(self.tokenizer.stemmed_keyword_tokenize(segment))
        return segments

    def get_raw_entailment_score(self, text1: str, text2: str) -> float:
        """Max entailment confidence over all segment pairs, before the offset"""
        text1_segments = self.split_stem_keyword_tokenize_filter(text1)
        text2_segments = self.split_stem_keyword_tokenize_filter(text2)

        scores = [
            self.entailment_service.entail(text1_seq, text2_seq).confidence
            for text1_seq in text1_segments
            for text2_seq in text2_segments
            if text1_seq == text2_seq
            or ' '.join(text2_seq).lower() not in self.IGNORE_HYPOTHESIS_SET
        ]
        return max(scores) if scores else 0.0

    def get_entailment_score(self, text1: str, text2: str) -> float:
        """
        Entailment score of text1 -> text2, served from the cache when possible

        The cache holds raw scores; the offset is applied on the way out.
        """
        key = text1 + self.CACHE_KEY_SEPARATOR + text2
        raw_score = self._lookup(key)
        if raw_score is None:
            raw_score = self.get_raw_entailment_score(text1, text2)
            if self.cache is not None:
                self.cache.set(key, repr(raw_score))
        return raw_score - self.entailment_score_offset

    def _lookup(self, key: str) -> Optional[float]:
        if self.cache is None:
            return None
        value = self.cache.get(key)
        if value is None:
            return None
        try:
            return float(value)
        except ValueError:
            logger.warning(f"Ignoring unparseable cached score {value!r} for {key!r}")
            return None


class Word2VecSimilarity(SimilarityType):
    """Cosine similarity between two pieces of text (inherently symmetric)"""

    # String used by word2vec when there is no match
    NO_MATCH_STR = "</s>"

    def __init__(self, model: WordVectorModel):
        """
        Initialize word2vec similarity

        Args:
            model: Word vectors; must contain the no-match token

        Raises:
            ConfigurationError: If the vocabulary lacks the no-match token
        """
        if not model.contains(self.NO_MATCH_STR):
            raise ConfigurationError(
                f"Word vector vocabulary has no '{self.NO_MATCH_STR}' entry for unseen text"
            )
        self.model = model

    def score_title_title(self, title_str1: str, title_str2: str) -> float:
        return self.get_word2vec_score(title_str1, title_str2)

    def score_cell_cell(self, cell_str1: str, cell_str2: str) -> float:
        return self.get_word2vec_score(cell_str1, cell_str2)

    def score_cell_q_cons(self, cell_str: str, q_cons_str: str) -> float:
        return self.get_word2vec_score(cell_str, q_cons_str)

    def score_title_q_cons(self, title_str: str, q_cons_str: str) -> float:
        return self.get_word2vec_score(title_str, q_cons_str)

    def score_cell_q_choice(self, cell_str: str, q_choice_str: str) -> float:
        return self.get_word2vec_score(cell_str, q_choice_str)

    def score_title_q_choice(self, title_str: str, q_choice_str: str) -> float:
        return self.get_word2vec_score(title_str, q_choice_str)

    def score_str_to_wh_terms(self, text: str, wh_terms: List[str]) -> float:
        return self.max_score(text, wh_terms, self.get_word2vec_score)

    def get_word2vec_score(self, text1: str, text2: str) -> float:
        text1 = text1 if self.model.contains(text1) else self.NO_MATCH_STR
        text2 = text2 if self.model.contains(text2) else self.NO_MATCH_STR
        return self.model.cosine_similarity(text1, text2)


class WordOverlapSimilarity(SimilarityType):
    """What fraction of text2 words are "covered" by text1 words? (directional)"""

    def __init__(self, tokenizer: Tokenizer):
        self.tokenizer = tokenizer

    def score_title_title(self, title_str1: str, title_str2: str) -> float:
        return self.symmetric_score(title_str1, title_str2, self.get_word_overlap)

    def score_cell_cell(self, cell_str1: str, cell_str2: str) -> float:
        return self.symmetric_score(cell_str1, cell_str2, self.get_word_overlap)

    def score_cell_q_cons(self, cell_str: str, q_cons_str: str) -> float:
        return self.get_word_overlap(q_cons_str, cell_str)

    def score_title_q_cons(self, title_str: str, q_cons_str: str) -> float:
        return self.get_word_overlap(q_cons_str, title_str)

    def score_cell_q_choice(self, cell_str: str, q_choice_str: str) -> float:
        return self.get_word_overlap(cell_str, q_choice_str)

    def score_title_q_choice(self, title_str: str, q_choice_str: str) -> float:
        return self.get_word_overlap(title_str, q_choice_str)

    def score_str_to_wh_terms(self, text: str, wh_terms: List[str]) -> float:
        return self.max_score(text, wh_terms, self.get_word_overlap)

    def get_word_overlap(self, text1: str, text2: str) -> float:
        """
        Coverage of text2 by text1

        Shared tokens are a multiset intersection: a word repeated in text2
        counts once per occurrence that text1 also has. Empty text2 scores 0.
        """
        text1_tokens = self.tokenizer.stemmed_keyword_tokenize(text1)
        text2_tokens = self.tokenizer.stemmed_keyword_tokenize(text2)
        if not text2_tokens:
            return 0.0
        coverage = sum((Counter(text2_tokens) & Counter(text1_tokens)).values())
        return coverage / len(text2_tokens)
