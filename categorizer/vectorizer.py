# categorizer/vectorizer.py
"""
TF-IDF vectorizer over transaction descriptions.

- Vocabulary is append-only in first-seen order and rebuilt by every fit().
- Document frequency counts each token once per document.
- tf = count / informative tokens in the document
- idf = ln(total_documents / df); tokens with df == 0 contribute nothing.
- Tokens not seen at fit time are dropped (no OOV handling).

Vectors produced under different vocabularies are not comparable.
"""
from __future__ import annotations

import math
from collections import Counter
from typing import Dict, Iterable, List, Optional

import numpy as np

from stc_utils.text import safe_divide, tokenize


def _informative_tokens(text: str) -> List[str]:
    return [t for t in tokenize(text) if t]


class TfIdfVectorizer:
    def __init__(self) -> None:
        self.vocabulary: Dict[str, int] = {}
        self.document_frequencies: Dict[str, int] = {}
        self.total_documents: int = 0

    @classmethod
    def from_state(
        cls,
        vocabulary: Dict[str, int],
        document_frequencies: Dict[str, int],
        total_documents: int,
    ) -> "TfIdfVectorizer":
        """Rebuild a fitted vectorizer from saved tables."""
        vec = cls()
        vec.vocabulary = dict(vocabulary)
        vec.document_frequencies = dict(document_frequencies)
        vec.total_documents = int(total_documents)
        return vec

    @property
    def vocabulary_size(self) -> int:
        return len(self.vocabulary)

    def document_frequency(self, token: str) -> int:
        return self.document_frequencies.get(token, 0)

    def idf(self, token: str) -> Optional[float]:
        df = self.document_frequency(token)
        if df == 0:
            return None
        return math.log(self.total_documents / df)

    def fit(self, corpus: Iterable[str]) -> "TfIdfVectorizer":
        vocabulary: Dict[str, int] = {}
        frequencies: Dict[str, int] = {}
        total = 0
        for text in corpus:
            total += 1
            # dict.fromkeys keeps first-seen order while de-duplicating
            for token in dict.fromkeys(_informative_tokens(text)):
                frequencies[token] = frequencies.get(token, 0) + 1
                if token not in vocabulary:
                    vocabulary[token] = len(vocabulary)

        self.vocabulary = vocabulary
        self.document_frequencies = frequencies
        self.total_documents = total
        return self

    def transform_one(self, text: str) -> np.ndarray:
        vector = np.zeros(self.vocabulary_size, dtype=np.float64)
        tokens = _informative_tokens(text)
        for token, count in Counter(tokens).items():
            index = self.vocabulary.get(token)
            if index is None:
                continue
            idf = self.idf(token)
            if idf is None:
                continue
            vector[index] = safe_divide(count, len(tokens)) * idf
        return vector

    def transform(self, texts: Iterable[str]) -> np.ndarray:
        rows = [self.transform_one(t) for t in texts]
        if not rows:
            return np.zeros((0, self.vocabulary_size), dtype=np.float64)
        return np.vstack(rows)

    def fit_transform(self, corpus: Iterable[str]) -> np.ndarray:
        texts = list(corpus)
        self.fit(texts)
        return self.transform(texts)
