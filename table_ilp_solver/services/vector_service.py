"""
Vector Service - pre-trained word/phrase vectors and cosine similarity

Loads word2vec-format vectors (binary or text) into one numpy matrix with
L2-normalized rows, so cosine similarity is a single dot product.

Public API:
- contains(term) -> bool
- cosine_similarity(term1, term2) -> float
- from_bin_file(path, limit) / from_text_file(path, limit) -> WordVectorModel
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

logger = logging.getLogger(__name__)


class WordVectorModel:
    """
    In-memory vocabulary of word vectors
    """

    def __init__(self, words: List[str], vectors: np.ndarray):
        """
        Initialize the model

        Args:
            words: Vocabulary, one entry per row of vectors
            vectors: Matrix of shape [len(words), dimensions]

        Raises:
            ValueError: If words and vectors disagree in length
        """
        vectors = np.asarray(vectors, dtype=np.float32)
        if vectors.ndim != 2 or vectors.shape[0] != len(words):
            raise ValueError(
                f"Expected {len(words)} vectors, got matrix of shape {vectors.shape}"
            )

        norms = np.linalg.norm(vectors, axis=1, keepdims=True)
        norms[norms == 0] = 1.0
        self.vectors = vectors / norms
        self.vocab: Dict[str, int] = {}
        for idx, word in enumerate(words):
            # word2vec files may repeat a word; the first occurrence wins
            self.vocab.setdefault(word, idx)
        self.dimensions = vectors.shape[1]

    @classmethod
    def from_dict(cls, word_vectors: Dict[str, List[float]]) -> 'WordVectorModel':
        words = list(word_vectors.keys())
        return cls(words, np.array([word_vectors[w] for w in words], dtype=np.float32))

    @classmethod
    def from_bin_file(cls, path: str, limit: Optional[int] = None) -> 'WordVectorModel':
        """
        Load vectors in word2vec binary format

        Format: "<count> <dimensions>\\n" followed by, per word, the word bytes,
        a space, <dimensions> little-endian float32 values and an optional newline.

        Args:
            path: Path to the .bin file
            limit: Read at most this many words

        Returns:
            WordVectorModel
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Word vectors file not found: {path}")

        logger.info(f"Loading word vectors from {path}...")
        with open(path, 'rb') as f:
            header = f.readline().decode('utf-8').split()
            count, dimensions = int(header[0]), int(header[1])
            if limit is not None:
                count = min(count, limit)

            row_bytes = np.dtype(np.float32).itemsize * dimensions
            words = []
            vectors = np.empty((count, dimensions), dtype=np.float32)
            for i in range(count):
                word_bytes = bytearray()
                while True:
                    ch = f.read(1)
                    if not ch:
                        raise ValueError(f"Unexpected end of file in {path} at word {i}")
                    if ch == b' ':
                        break
                    if ch != b'\n':
                        word_bytes.extend(ch)
                words.append(word_bytes.decode('utf-8', errors='replace'))
                vectors[i] = np.frombuffer(f.read(row_bytes), dtype='<f4')

        logger.info(f"Loaded {len(words)} word vectors ({dimensions} dimensions)")
        return cls(words, vectors)

    @classmethod
    def from_text_file(cls, path: str, limit: Optional[int] = None) -> 'WordVectorModel':
        """Load vectors in word2vec text format (header line, then "word v1 v2 ...")"""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Word vectors file not found: {path}")

        words = []
        rows = []
        with open(path, 'r', encoding='utf-8') as f:
            header = f.readline().split()
            dimensions = int(header[1])
            for line in f:
                if limit is not None and len(words) >= limit:
                    break
                parts = line.rstrip().split(' ')
                if len(parts) != dimensions + 1:
                    continue
                words.append(parts[0])
                rows.append([float(v) for v in parts[1:]])

        logger.info(f"Loaded {len(words)} word vectors ({dimensions} dimensions)")
        return cls(words, np.array(rows, dtype=np.float32).reshape(len(rows), dimensions))

    @classmethod
    def load(cls, path: str, limit: Optional[int] = None) -> 'WordVectorModel':
        """Pick the loader by file extension (.bin is binary, anything else text)"""
        if str(path).endswith('.bin'):
            return cls.from_bin_file(path, limit)
        return cls.from_text_file(path, limit)

    def contains(self, term: str) -> bool:
        return term in self.vocab

    def cosine_similarity(self, term1: str, term2: str) -> float:
        """
        Cosine similarity between two in-vocabulary terms

        Raises:
            KeyError: If either term is not in the vocabulary
        """
        v1 = self.vectors[self.vocab[term1]]
        v2 = self.vectors[self.vocab[term2]]
        return float(np.dot(v1, v2))

    def __len__(self) -> int:
        return len(self.vocab)
