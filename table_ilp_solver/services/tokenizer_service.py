"""
Tokenizer Service - stemmed keyword tokenization

Uses a blank spaCy English pipeline (no model download) with the lookup
lemmatizer from spacy-lookups-data:
- lower-cases the text
- drops stop words, punctuation and whitespace
- keeps alphabetic and number-like tokens only
- maps each token to its lemma ("legs" -> "leg")

Public API:
- stemmed_keyword_tokenize(text) -> List[str]
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Tuple

import spacy

logger = logging.getLogger(__name__)


class Tokenizer(ABC):
    """Anything that turns text into an ordered list of normalized keyword tokens"""

    @abstractmethod
    def stemmed_keyword_tokenize(self, text: str) -> List[str]:
        pass


class KeywordTokenizer(Tokenizer):
    """
    spaCy-backed keyword tokenizer

    Results are memoized per input string; the cache is only ever appended to,
    so sharing one instance across threads is fine.
    """

    def __init__(self, language: str = 'en'):
        """
        Initialize the tokenizer

        Args:
            language: spaCy language code

        Raises:
            ValueError: If the lemma lookup tables for the language are not installed
        """
        self.language = language
        self.nlp = spacy.blank(language)
        self.nlp.add_pipe('lemmatizer', config={'mode': 'lookup'})
        self.nlp.initialize()
        logger.info(f"Keyword tokenizer ready (spaCy {spacy.__version__}, language={language})")

        self.cache: Dict[str, Tuple[str, ...]] = {}

    def stemmed_keyword_tokenize(self, text: str) -> List[str]:
        """
        Tokenize text into stemmed keywords

        Args:
            text: Arbitrary text (cell, title, question fragment)

        Returns:
            Ordered token list; empty for empty or stop-word-only text

        Example:
            >>> KeywordTokenizer().stemmed_keyword_tokenize("How many legs does a cat have?")
            ['leg', 'cat']
        """
        cached = self.cache.get(text)
        if cached is not None:
            return list(cached)

        doc = self.nlp(text.lower())
        tokens = tuple(
            (token.lemma_ or token.lower_).lower()
            for token in doc
            if not (token.is_stop or token.is_punct or token.is_space)
            and (token.is_alpha or token.like_num)
        )

        self.cache[text] = tokens
        return list(tokens)

    def clear_cache(self):
        """Clear the memoized tokenizations"""
        self.cache.clear()

    def get_cache_size(self) -> int:
        return len(self.cache)
