"""
Wordle Solver
=============

Picks the next guess for a Wordle-style puzzle.

The candidate set is every vocabulary word consistent with the feedback so
far. Every vocabulary word, candidate or not, is scored by how many
candidates it would eliminate summed over all candidates as the hidden
answer (see `scoring`). Small candidate sets are answered directly:

- 0 candidates: the feedback is contradictory
- 1 candidate: that is the answer
- 2 candidates: guess the first, it costs at most one extra guess

The opening guess depends only on the vocabulary, so once computed it is
kept in a guarded cell and can be persisted through `FirstGuessCache`.
"""

import logging
import threading
import time
from collections import Counter
from typing import Dict, List, Optional, Union

import numpy as np
from tqdm import tqdm

from .constraint import Constraint
from .errors import NoCandidatesError
from .feedback import feedback_row, wordle_guess
from .scoring import filter_mask, score_guesses
from .words import Vocabulary, WordRecord

logger = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

MAX_GUESSES = 100  # Safety bound for a simulated game
SCORE_BATCH = 256  # Guesses scored per progress bar step
SHOW_REMAINING = 15  # List the candidates when fewer remain


# ============================================================================
# SOLVER CLASS
# ============================================================================

class WordleSolver:
    """
    Next-guess solver over a single vocabulary.

    The solver owns the opening-guess cell. It is read before scoring and
    written after scoring, never during the parallel phase.
    """

    def __init__(self, vocabulary: Vocabulary, first_guess: Optional[int] = None,
                 progress: bool = False):
        """
        Initialize solver.

        Args:
            vocabulary: Loaded word list
            first_guess: Cached vocabulary index of the best opening guess
            progress: Show a progress bar while scoring
        """
        self.vocabulary = vocabulary
        self.n_words = len(vocabulary)
        self.progress = progress

        if first_guess is not None and not 0 <= first_guess < self.n_words:
            logger.warning("Ignoring cached first guess %d outside vocabulary of %d words",
                           first_guess, self.n_words)
            first_guess = None

        self._first_guess = first_guess
        self._first_guess_lock = threading.Lock()
        self.first_guess_computed = False

    @property
    def first_guess(self) -> Optional[int]:
        with self._first_guess_lock:
            return self._first_guess

    def empty_constraint(self) -> Constraint:
        return Constraint.empty(self.vocabulary.word_length)

    def candidates(self, constraint: Constraint) -> np.ndarray:
        """Vocabulary indices of the words `constraint` allows, in vocabulary order."""
        return self._filter(self.vocabulary.encode(constraint))

    def _filter(self, encoded) -> np.ndarray:
        mask = filter_mask(self.vocabulary.chars, self.vocabulary.counts, *encoded)
        return np.flatnonzero(mask)

    def best_guess(self, constraint: Constraint, verbose: bool = False) -> WordRecord:
        """
        Find the best guess for the current game state.

        Raises:
            NoCandidatesError: no vocabulary word satisfies `constraint`
        """
        encoded = self.vocabulary.encode(constraint)
        candidates = self._filter(encoded)
        n_candidates = len(candidates)
        no_information = n_candidates == self.n_words

        if no_information:
            cached = self.first_guess
            if cached is not None:
                return self.vocabulary[cached]

        if n_candidates == 0:
            raise NoCandidatesError()
        if n_candidates == 1:
            return self.vocabulary[candidates[0]]

        if verbose:
            print(f"{n_candidates}/{self.n_words} words remaining")
            if n_candidates < SHOW_REMAINING:
                for i in candidates:
                    print(f"  {self.vocabulary[i].text}")

        if n_candidates == 2:
            return self.vocabulary[candidates[0]]

        scores = self._score_all(candidates, encoded)
        # np.argmax keeps the lowest index among equal scores
        best_idx = int(np.argmax(scores))

        if no_information:
            with self._first_guess_lock:
                self._first_guess = best_idx
                self.first_guess_computed = True

        return self.vocabulary[best_idx]

    def _score_all(self, candidates: np.ndarray, encoded) -> np.ndarray:
        """Elimination score of every vocabulary word against `candidates`."""
        scores = np.empty(self.n_words, dtype=np.int64)
        t0 = time.time()

        with tqdm(total=self.n_words, disable=not self.progress,
                  bar_format="{bar:60} {n_fmt}/{total_fmt} {remaining}") as bar:
            for start in range(0, self.n_words, SCORE_BATCH):
                stop = min(start + SCORE_BATCH, self.n_words)
                guesses = np.arange(start, stop, dtype=np.int64)
                scores[start:stop] = score_guesses(
                    guesses, self.vocabulary.chars, self.vocabulary.counts,
                    candidates, *encoded)
                bar.update(stop - start)

        logger.debug("Scored %d guesses against %d candidates in %.2fs",
                     self.n_words, len(candidates), time.time() - t0)
        return scores

    def solve(self, answer: Union[str, WordRecord], verbose: bool = False) -> List[WordRecord]:
        """
        Play a simulated game against a known answer.

        Args:
            answer: The target word, need not be in the vocabulary
            verbose: Print each guess

        Returns:
            The guesses made. The last one equals `answer` unless the game hit
            MAX_GUESSES.
        """
        if isinstance(answer, str):
            answer = WordRecord(answer)
        if len(answer) != self.vocabulary.word_length:
            raise ValueError(
                f"Answer '{answer.text}' has {len(answer)} letters, "
                f"vocabulary words have {self.vocabulary.word_length}")

        constraint = self.empty_constraint()
        guesses = []
        for _ in range(MAX_GUESSES):
            guess = self.best_guess(constraint)
            guesses.append(guess)
            if verbose:
                print(f"Guess: {guess.text}  {feedback_row(guess.text, answer.text)}")
            if guess.text == answer.text:
                return guesses
            constraint.update(wordle_guess(guess, answer))

        logger.warning("Gave up on '%s' after %d guesses", answer.text, MAX_GUESSES)
        return guesses


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def benchmark(solver: WordleSolver, words: List[str] = None,
              verbose: bool = True) -> Dict:
    """
    Play a simulated game against each word.

    Args:
        solver: WordleSolver instance
        words: Target words (default: every vocabulary word)
        verbose: Print the guesses of each game

    Returns:
        Dict with results
    """
    if words is None:
        words = [w.text for w in solver.vocabulary]

    results = []
    dist = Counter()
    failures = []

    start = time.time()
    for word in words:
        try:
            guesses = solver.solve(word)
        except NoCandidatesError:
            logger.warning("No candidates left while solving '%s'", word)
            failures.append(word)
            continue

        if verbose:
            print(f"Guessed {word} from {' '.join(g.text for g in guesses)}")
        if guesses[-1].text != word:
            failures.append(word)
            continue
        results.append(len(guesses))
        dist[len(guesses)] += 1

    elapsed = time.time() - start

    return {
        'total': len(words),
        'average': sum(results) / len(results) if results else 0.0,
        'distribution': dict(sorted(dist.items())),
        'failures': len(failures),
        'failed_words': failures[:20],
        'worst': max(dist) if dist else 0,
        'time': elapsed,
    }


def print_results(results: Dict):
    """Print the guess-count histogram of a benchmark run."""
    total = results['total']
    print("\n" + "=" * 50)
    print(f"Games: {total}")
    print(f"Average guesses: {results['average']:.4f} (worst {results['worst']})")
    print(f"Unsolved within {MAX_GUESSES} guesses: {results['failures']}")
    print(f"Time: {results['time']:.1f}s")
    print("\nGuesses needed:")
    for n, count in results['distribution'].items():
        bar = "#" * max(1, round(40 * count / total))
        print(f"  {n:3d}: {count:5d} {bar}")
    if results['failed_words']:
        print(f"\nUnsolved: {' '.join(results['failed_words'])}")
    print("=" * 50)
