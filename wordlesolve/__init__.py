"""
Wordle Solver - Elimination Heuristic
=====================================

Suggests the next guess for a Wordle-style puzzle from a word list and the
feedback rows of earlier guesses.
"""

__version__ = "1.0.0"

from .constraint import CharacterConstraint, Constraint, Mark, parse_row
from .errors import (CacheCorrupt, ConstraintParseError, NoCandidatesError,
                     VocabularyError, VocabularyLengthMismatch, VocabularyUnreadable,
                     WordleError)
from .feedback import feedback_row, wordle_guess
from .cache import FirstGuessCache
from .solver import WordleSolver, benchmark, print_results
from .words import Vocabulary, WordRecord, load_words
