"""
Elimination Scoring
===================

Numba kernels working on encoded words and constraints (see
`Vocabulary.encode`).

A guess is scored by playing it against every remaining candidate as a
stand-in answer and counting how many candidates would survive the revealed
feedback. The score is the number of eliminations summed over all stand-in
answers:

    score(g) = N^2 - sum over answers a of remaining(g, a)

Maximizing it favours guesses that split the candidates into many small
groups, which approximates expected information gain without logarithms.
"""

import numpy as np
from numba import jit, prange


# ============================================================================
# CONSTANTS
# ============================================================================

CANDIDATE_BONUS = 1  # Added when the guess could itself be the answer
NO_EXACT = -1
NO_MAX = -1


# ============================================================================
# NUMBA FUNCTIONS
# ============================================================================

@jit(nopython=True, cache=True)
def allows(word: np.ndarray, counts: np.ndarray, exact: np.ndarray,
           excluded: np.ndarray, min_occ: np.ndarray, max_occ: np.ndarray) -> bool:
    """
    Check one encoded word against an encoded constraint.

    Args:
        word: shape (L,) letter codes
        counts: shape (A,) letter counts of the word
        exact, excluded, min_occ, max_occ: encoded constraint
    """
    for c in range(min_occ.shape[0]):
        if counts[c] < min_occ[c]:
            return False
        if max_occ[c] != NO_MAX and counts[c] > max_occ[c]:
            return False

    for i in range(word.shape[0]):
        if exact[i] != NO_EXACT and word[i] != exact[i]:
            return False
        if excluded[i, word[i]]:
            return False

    return True


@jit(nopython=True, parallel=True, cache=True)
def filter_mask(chars: np.ndarray, counts: np.ndarray, exact: np.ndarray,
                excluded: np.ndarray, min_occ: np.ndarray, max_occ: np.ndarray) -> np.ndarray:
    """Boolean mask over the vocabulary of words the constraint allows."""
    n_words = chars.shape[0]
    mask = np.zeros(n_words, dtype=np.bool_)
    for i in prange(n_words):
        mask[i] = allows(chars[i], counts[i], exact, excluded, min_occ, max_occ)
    return mask


@jit(nopython=True, cache=True)
def simulate_into(guess: np.ndarray, guess_counts: np.ndarray,
                  answer: np.ndarray, answer_counts: np.ndarray,
                  exact: np.ndarray, excluded: np.ndarray,
                  min_occ: np.ndarray, max_occ: np.ndarray):
    """Write the constraint revealed by `guess` against `answer` into the given buffers."""
    exact[:] = NO_EXACT
    excluded[:, :] = False
    min_occ[:] = 0
    max_occ[:] = NO_MAX

    for i in range(guess.shape[0]):
        g = guess[i]
        if g == answer[i]:
            exact[i] = g
        else:
            excluded[i, g] = True

    for c in range(guess_counts.shape[0]):
        g = guess_counts[c]
        if g == 0:
            continue
        a = answer_counts[c]
        if min(g, a) > 0:
            min_occ[c] = min(g, a)
        if g > a:
            max_occ[c] = a


@jit(nopython=True, cache=True)
def merge_into(exact: np.ndarray, excluded: np.ndarray,
               min_occ: np.ndarray, max_occ: np.ndarray,
               other_exact: np.ndarray, other_excluded: np.ndarray,
               other_min: np.ndarray, other_max: np.ndarray):
    """Encoded counterpart of `Constraint.update`."""
    for c in range(min_occ.shape[0]):
        if other_min[c] > min_occ[c]:
            min_occ[c] = other_min[c]
        if other_max[c] != NO_MAX and (max_occ[c] == NO_MAX or other_max[c] < max_occ[c]):
            max_occ[c] = other_max[c]

    for i in range(exact.shape[0]):
        # Unioned even when other_exact is set, as in Constraint.update
        for c in range(excluded.shape[1]):
            if other_excluded[i, c]:
                excluded[i, c] = True
        if other_exact[i] != NO_EXACT:
            exact[i] = other_exact[i]


@jit(nopython=True, cache=True)
def score_guess(guess: int, chars: np.ndarray, counts: np.ndarray,
                candidates: np.ndarray, exact: np.ndarray, excluded: np.ndarray,
                min_occ: np.ndarray, max_occ: np.ndarray) -> int:
    """
    Elimination score of one vocabulary word against the candidate set.

    Args:
        guess: vocabulary index of the guess
        chars: shape (V, L) letter codes of the vocabulary
        counts: shape (V, A) letter counts of the vocabulary
        candidates: vocabulary indices still consistent with the constraint
        exact, excluded, min_occ, max_occ: encoded running constraint
    """
    n = candidates.shape[0]
    word_length = chars.shape[1]
    n_letters = counts.shape[1]

    s_exact = np.empty(word_length, dtype=np.int32)
    s_excluded = np.empty((word_length, n_letters), dtype=np.bool_)
    s_min = np.empty(n_letters, dtype=np.int32)
    s_max = np.empty(n_letters, dtype=np.int32)

    score = np.int64(n) * np.int64(n)
    for j in range(n):
        answer = candidates[j]
        simulate_into(chars[guess], counts[guess], chars[answer], counts[answer],
                      s_exact, s_excluded, s_min, s_max)
        merge_into(s_exact, s_excluded, s_min, s_max, exact, excluded, min_occ, max_occ)
        for k in range(n):
            w = candidates[k]
            if allows(chars[w], counts[w], s_exact, s_excluded, s_min, s_max):
                score -= 1

    if allows(chars[guess], counts[guess], exact, excluded, min_occ, max_occ):
        score += CANDIDATE_BONUS

    return score


@jit(nopython=True, parallel=True, cache=True)
def score_guesses(guesses: np.ndarray, chars: np.ndarray, counts: np.ndarray,
                  candidates: np.ndarray, exact: np.ndarray, excluded: np.ndarray,
                  min_occ: np.ndarray, max_occ: np.ndarray) -> np.ndarray:
    """Score many guesses in parallel. Each result depends only on read-only inputs."""
    n_guesses = guesses.shape[0]
    result = np.zeros(n_guesses, dtype=np.int64)

    for i in prange(n_guesses):
        result[i] = score_guess(guesses[i], chars, counts, candidates,
                                exact, excluded, min_occ, max_occ)

    return result
