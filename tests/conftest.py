import pytest

from wordlesolve import Vocabulary, WordleSolver

SCENARIO_WORDS = ["crane", "trace", "slate", "least"]

SMALL_WORDS = [
    "crane", "trace", "slate", "least", "steel", "those",
    "hotly", "raise", "sheet", "eerie", "tacit", "sleet",
]


@pytest.fixture
def scenario_vocabulary():
    return Vocabulary(SCENARIO_WORDS)


@pytest.fixture
def small_vocabulary():
    return Vocabulary(SMALL_WORDS)


@pytest.fixture
def solver(small_vocabulary):
    return WordleSolver(small_vocabulary)


@pytest.fixture
def word_file(tmp_path):
    path = tmp_path / "words"
    path.write_text("\n".join(SMALL_WORDS) + "\n")
    return path
