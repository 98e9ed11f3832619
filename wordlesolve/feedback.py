"""
Feedback Simulation
===================

What would Wordle reveal if `guess` were played against `answer`?
"""

from collections import Counter

from .constraint import Constraint, Mark


def wordle_guess(guess, answer) -> Constraint:
    """
    Compute the constraint revealed by guessing `guess` when the answer is `answer`.

    Args:
        guess: WordRecord (or anything with `text` and `letter_counts`)
        answer: WordRecord of the same length

    Returns:
        Single-row Constraint. For every guessed letter the minimum bound is
        the number of copies shared by guess and answer; when the guess holds
        more copies than the answer, the maximum bound is the answer's count.
    """
    constraint = Constraint.empty(len(guess.text))
    for i, (g, a) in enumerate(zip(guess.text, answer.text)):
        if g == a:
            constraint.characters[i].exact = g
        else:
            constraint.characters[i].excluded.add(g)

    for letter, guess_count in guess.letter_counts.items():
        answer_count = answer.letter_counts.get(letter, 0)
        min_count = min(guess_count, answer_count)
        if min_count > 0:
            constraint.min_occurrence[letter] = min_count
        if guess_count > answer_count:
            constraint.max_occurrence[letter] = answer_count

    return constraint


def feedback_marks(guess: str, answer: str):
    """Per-position Wordle colours of `guess` against `answer`."""
    marks = [Mark.GRAY] * len(guess)
    remaining = Counter(answer)

    # Greens first so they claim their letters before any yellow does
    for i, (g, a) in enumerate(zip(guess, answer)):
        if g == a:
            marks[i] = Mark.GREEN
            remaining[g] -= 1

    for i, g in enumerate(guess):
        if marks[i] is Mark.GRAY and remaining[g] > 0:
            marks[i] = Mark.YELLOW
            remaining[g] -= 1

    return marks


def feedback_row(guess: str, answer: str) -> str:
    """
    Render the feedback of `guess` against `answer` as a row string.

    >>> feedback_row("raise", "hotly")
    '-r -a -i -s -e'
    """
    return " ".join(mark.value + letter
                    for mark, letter in zip(feedback_marks(guess, answer), guess))
