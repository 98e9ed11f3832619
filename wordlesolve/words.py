"""
Vocabulary
==========

The word list is loaded once and never modified. Index positions are stable
for the lifetime of a run, so candidate sets are plain index arrays and the
first-guess cache stores an index.

For the numba kernels every word is also encoded as an array of letter codes
over the vocabulary's own alphabet, together with a letter count matrix.
Code ``len(alphabet)`` is reserved for letters that appear in feedback but
in no vocabulary word.
"""

import hashlib
from collections import Counter
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from .constraint import Constraint
from .errors import VocabularyError, VocabularyLengthMismatch, VocabularyUnreadable


class WordRecord:
    """A vocabulary word with its letter frequency table."""

    __slots__ = ("_text", "_letter_counts")

    def __init__(self, text: str):
        self._text = text
        self._letter_counts = dict(Counter(text))

    @property
    def text(self) -> str:
        return self._text

    @property
    def letter_counts(self) -> Dict[str, int]:
        return self._letter_counts

    def char_count(self, letter: str) -> int:
        return self._letter_counts.get(letter, 0)

    def __len__(self) -> int:
        return len(self._text)

    def __eq__(self, other):
        if isinstance(other, WordRecord):
            return self._text == other._text
        return NotImplemented

    def __hash__(self):
        return hash(self._text)

    def __repr__(self):
        return f"WordRecord({self._text!r})"

    def __str__(self):
        return self._text


class Vocabulary:
    """Ordered, read-only collection of equal-length words."""

    def __init__(self, words: Iterable[str]):
        self.words: List[WordRecord] = [WordRecord(w) for w in words]
        if not self.words:
            raise VocabularyError("Vocabulary is empty")

        self.word_length = len(self.words[0])
        for record in self.words:
            if len(record) != self.word_length:
                raise VocabularyLengthMismatch(
                    "<vocabulary>", record.text, len(record), self.word_length)

        self.fingerprint = compute_fingerprint(w.text for w in self.words)
        self.word_to_idx = {}
        for i, record in enumerate(self.words):
            self.word_to_idx.setdefault(record.text, i)

        self.alphabet = sorted({c for w in self.words for c in w.text})
        self.letter_to_code = {c: i for i, c in enumerate(self.alphabet)}
        self.foreign_code = len(self.alphabet)
        self.n_letters = len(self.alphabet) + 1

        self.chars = self._words_to_chars()
        self.counts = self._letter_count_matrix()

    def __len__(self) -> int:
        return len(self.words)

    def __getitem__(self, index: int) -> WordRecord:
        return self.words[index]

    def __iter__(self):
        return iter(self.words)

    def index(self, text: str) -> int:
        return self.word_to_idx[text]

    def code(self, letter: str) -> int:
        return self.letter_to_code.get(letter, self.foreign_code)

    def _words_to_chars(self) -> np.ndarray:
        """Convert words to letter code arrays."""
        arr = np.zeros((len(self.words), self.word_length), dtype=np.int32)
        for i, w in enumerate(self.words):
            for j, c in enumerate(w.text):
                arr[i, j] = self.letter_to_code[c]
        return arr

    def _letter_count_matrix(self) -> np.ndarray:
        counts = np.zeros((len(self.words), self.n_letters), dtype=np.int32)
        for i, w in enumerate(self.words):
            for c, n in w.letter_counts.items():
                counts[i, self.letter_to_code[c]] = n
        return counts

    def encode(self, constraint: Constraint) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """
        Encode a constraint for the numba kernels.

        Returns:
            (exact, excluded, min_occurrence, max_occurrence) where exact is
            -1 for an unknown position and max_occurrence is -1 for no bound.
        """
        if len(constraint) != self.word_length:
            raise ValueError(
                f"Constraint covers {len(constraint)} letters, "
                f"vocabulary words have {self.word_length}")

        exact = np.full(self.word_length, -1, dtype=np.int32)
        excluded = np.zeros((self.word_length, self.n_letters), dtype=np.bool_)
        min_occ = np.zeros(self.n_letters, dtype=np.int32)
        max_occ = np.full(self.n_letters, -1, dtype=np.int32)

        for i, cc in enumerate(constraint.characters):
            if cc.exact is not None:
                exact[i] = self.code(cc.exact)
            for c in cc.excluded:
                excluded[i, self.code(c)] = True
        # Foreign letters share one code, so their bounds are combined.
        for c, n in constraint.min_occurrence.items():
            code = self.code(c)
            min_occ[code] = max(min_occ[code], n)
        for c, n in constraint.max_occurrence.items():
            code = self.code(c)
            if max_occ[code] < 0 or n < max_occ[code]:
                max_occ[code] = n
        return exact, excluded, min_occ, max_occ

    def texts(self, indices: Sequence[int]) -> List[str]:
        return [self.words[i].text for i in indices]


def compute_fingerprint(texts: Iterable[str]) -> str:
    """SHA-256 hex digest of the concatenated word list."""
    hasher = hashlib.sha256()
    for text in texts:
        hasher.update(text.encode("utf-8"))
    return hasher.hexdigest()


def load_words(filepath: str) -> Vocabulary:
    """
    Load a newline-delimited word list.

    Every line must have the same number of characters as the first one.

    Raises:
        VocabularyUnreadable: the file cannot be opened or decoded
        VocabularyLengthMismatch: a line has a different length
        VocabularyError: the file holds no words
    """
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            lines = [line.rstrip("\r\n") for line in f]
    except (OSError, UnicodeDecodeError) as e:
        raise VocabularyUnreadable(f"Failed to open {filepath}: {e}") from e

    if not lines:
        raise VocabularyError(f"{filepath} contains no words")

    expected = len(lines[0])
    if expected == 0:
        raise VocabularyError(f"{filepath} starts with an empty line")
    for line in lines:
        if len(line) != expected:
            raise VocabularyLengthMismatch(filepath, line, len(line), expected)

    return Vocabulary(lines)
