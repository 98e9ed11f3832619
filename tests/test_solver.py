import numpy as np
import pytest

import wordlesolve.solver as solver_module
from wordlesolve import (Constraint, NoCandidatesError, Vocabulary, WordleSolver, WordRecord,
                         benchmark, parse_row, print_results, wordle_guess)
from wordlesolve.solver import MAX_GUESSES

from conftest import SCENARIO_WORDS, SMALL_WORDS


@pytest.fixture
def no_scoring(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("scorer should not run")
    monkeypatch.setattr(solver_module, "score_guesses", fail)


def test_candidates_empty_constraint(scenario_vocabulary):
    solver = WordleSolver(scenario_vocabulary)
    assert list(solver.candidates(solver.empty_constraint())) == [0, 1, 2, 3]


def test_candidates_after_row():
    vocabulary = Vocabulary(SCENARIO_WORDS + ["steel"])
    solver = WordleSolver(vocabulary)
    remaining = vocabulary.texts(solver.candidates(parse_row("-c -r -a -n ~e", 5)))
    assert "crane" not in remaining
    assert "trace" not in remaining
    # Gray a also caps the number of a's at zero
    assert remaining == ["steel"]


def test_unique_candidate_skips_scoring(solver, no_scoring):
    constraint = Constraint.empty(5)
    constraint.update(wordle_guess(WordRecord("tacit"), WordRecord("tacit")))
    assert solver.best_guess(constraint).text == "tacit"


def test_no_candidates(solver):
    with pytest.raises(NoCandidatesError):
        solver.best_guess(parse_row("-s -t -e -a -c", 5))


def test_two_candidates_returns_first(solver, no_scoring, capsys):
    constraint = Constraint.empty(5)
    constraint.min_occurrence["e"] = 2
    constraint.characters[0].exact = "s"
    constraint.characters[1].excluded.add("h")
    assert solver.best_guess(constraint, verbose=True).text == "steel"

    out = capsys.readouterr().out
    assert f"2/{len(SMALL_WORDS)} words remaining" in out
    assert "  sleet" in out


def test_cached_first_guess_skips_scoring(small_vocabulary, no_scoring):
    solver = WordleSolver(small_vocabulary, first_guess=3)
    assert solver.best_guess(solver.empty_constraint()).text == SMALL_WORDS[3]
    assert not solver.first_guess_computed


def test_cached_first_guess_ignored_after_feedback(small_vocabulary):
    solver = WordleSolver(small_vocabulary, first_guess=3)
    constraint = Constraint.empty(5)
    constraint.update(wordle_guess(WordRecord("hotly"), WordRecord("hotly")))
    assert solver.best_guess(constraint).text == "hotly"


def test_out_of_range_cached_guess_ignored(small_vocabulary):
    solver = WordleSolver(small_vocabulary, first_guess=len(SMALL_WORDS))
    assert solver.first_guess is None


def test_opening_guess_is_stored(solver, monkeypatch):
    first = solver.best_guess(solver.empty_constraint())
    assert solver.first_guess_computed
    assert solver.vocabulary[solver.first_guess] == first

    def fail(*args, **kwargs):
        raise AssertionError("scorer should not run")
    monkeypatch.setattr(solver_module, "score_guesses", fail)
    assert solver.best_guess(solver.empty_constraint()) == first


def test_later_guess_not_stored(small_vocabulary):
    solver = WordleSolver(small_vocabulary)
    constraint = parse_row("-a ~e -x -z -q", 5)
    assert len(solver.candidates(constraint)) == 4
    solver.best_guess(constraint)
    assert solver.first_guess is None
    assert not solver.first_guess_computed


def test_ties_break_by_vocabulary_order():
    solver = WordleSolver(Vocabulary(["abc", "bca", "cab"]))
    assert solver.best_guess(solver.empty_constraint()).text == "abc"

    solver = WordleSolver(Vocabulary(["cab", "bca", "abc"]))
    assert solver.best_guess(solver.empty_constraint()).text == "cab"


def test_best_guess_has_highest_score(solver):
    from test_scoring import reference_scores

    constraint = parse_row("-a ~e -x -z -q", 5)
    assert len(solver.candidates(constraint)) == 4
    scores = reference_scores(SMALL_WORDS, constraint)
    assert solver.best_guess(constraint).text == SMALL_WORDS[int(np.argmax(scores))]


@pytest.mark.parametrize("answer", SMALL_WORDS)
def test_solve_terminates(solver, answer):
    guesses = solver.solve(answer)
    assert guesses[-1].text == answer
    assert len(guesses) < MAX_GUESSES
    assert len({g.text for g in guesses}) == len(guesses)


def test_solve_verbose(solver, capsys):
    guesses = solver.solve("sheet", verbose=True)
    out = capsys.readouterr().out
    assert out.count("Guess: ") == len(guesses)
    assert "Guess: sheet  s h e e t" in out


def test_solve_rejects_wrong_length(solver):
    with pytest.raises(ValueError):
        solver.solve("tea")


def test_benchmark(solver, capsys):
    results = benchmark(solver, verbose=True)
    assert results["total"] == len(SMALL_WORDS)
    assert results["failures"] == 0
    assert sum(results["distribution"].values()) == len(SMALL_WORDS)
    assert 1 <= results["average"] < MAX_GUESSES

    out = capsys.readouterr().out
    assert out.count("Guessed ") == len(SMALL_WORDS)

    print_results(results)
    report = capsys.readouterr().out
    assert "Guesses needed:" in report
    assert "Unsolved within" in report
    assert "words/sec" not in report


def test_benchmark_subset(solver):
    results = benchmark(solver, ["sheet", "hotly"], verbose=False)
    assert results["total"] == 2
    assert results["failures"] == 0
