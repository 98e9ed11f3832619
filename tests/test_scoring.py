import numpy as np
import pytest

from wordlesolve import Constraint, Vocabulary, WordRecord, parse_row, wordle_guess
from wordlesolve.scoring import CANDIDATE_BONUS, score_guess, score_guesses

from conftest import SMALL_WORDS


def reference_scores(words, running):
    """Elimination scores computed directly from the Constraint objects."""
    records = [WordRecord(w) for w in words]
    candidates = [r for r in records if running.allows(r)]
    n = len(candidates)
    scores = []
    for g in records:
        score = n * n
        for answer in candidates:
            merged = wordle_guess(g, answer)
            merged.update(running)
            score -= sum(1 for w in candidates if merged.allows(w))
        if running.allows(g):
            score += CANDIDATE_BONUS
        scores.append(score)
    return scores


def encoded_scores(vocabulary, running):
    encoded = vocabulary.encode(running)
    candidates = np.array([i for i, w in enumerate(vocabulary) if running.allows(w)],
                          dtype=np.int64)
    guesses = np.arange(len(vocabulary), dtype=np.int64)
    return score_guesses(guesses, vocabulary.chars, vocabulary.counts, candidates, *encoded)


@pytest.mark.parametrize("rows", [
    [],
    ["-r -a ~i -s -e"],
    ["-c -r -a -n ~e"],
    ["~t -r -a -c -e", "-h -o ~t -l -y"],
])
def test_scores_match_reference(small_vocabulary, rows):
    running = Constraint.from_rows(rows, 5)
    expected = reference_scores(SMALL_WORDS, running)
    assert list(encoded_scores(small_vocabulary, running)) == expected


def test_single_guess_matches_batch(small_vocabulary):
    v = small_vocabulary
    running = Constraint.empty(5)
    encoded = v.encode(running)
    candidates = np.arange(len(v), dtype=np.int64)
    batch = encoded_scores(v, running)
    for i in range(len(v)):
        assert score_guess(i, v.chars, v.counts, candidates, *encoded) == batch[i]


def test_candidate_bonus_only_for_candidates():
    # A single candidate survives its own feedback whatever the guess
    v = Vocabulary(["abc", "bca", "cab", "bac"])
    running = parse_row("-b b c", 3)
    scores = encoded_scores(v, running)
    assert [w.text for w in v if running.allows(w)] == ["abc"]
    assert scores[0] == 1 - 1 + CANDIDATE_BONUS
    assert list(scores[1:]) == [0, 0, 0]


def test_scores_bounded(small_vocabulary):
    scores = encoded_scores(small_vocabulary, Constraint.empty(5))
    n = len(small_vocabulary)
    assert (scores >= 0).all()
    assert (scores <= n * n - n + CANDIDATE_BONUS).all()
