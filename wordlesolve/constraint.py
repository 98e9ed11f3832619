"""
Constraint Model
================

Accumulated knowledge about the hidden answer:

- per position: the exact letter (green) and letters known not to be there
- per letter: minimum and maximum number of occurrences

A feedback row uses one space-separated group per position. A ``-`` marks
the following letter gray, a ``~`` marks it yellow, and a bare letter is
green. Example for guessing "raise" against "hotly"::

    -r -a ~i -s -e
"""

import enum
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Set

from .errors import ConstraintParseError


class Mark(enum.Enum):
    """Feedback colour of a single guessed letter."""
    GREEN = ""
    YELLOW = "~"
    GRAY = "-"


MARK_PREFIXES = {mark.value: mark for mark in Mark if mark.value}


@dataclass
class CharacterConstraint:
    exact: Optional[str] = None
    excluded: Set[str] = field(default_factory=set)


@dataclass
class Constraint:
    characters: List[CharacterConstraint]
    min_occurrence: Dict[str, int] = field(default_factory=dict)
    max_occurrence: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def empty(cls, size: int) -> "Constraint":
        """Constraint carrying no information about a word of `size` letters."""
        return cls([CharacterConstraint() for _ in range(size)])

    @classmethod
    def from_rows(cls, rows, size: int) -> "Constraint":
        """Fold several feedback rows into one constraint, in order."""
        constraint = cls.empty(size)
        for row in rows:
            constraint.update(parse_row(row, size))
        return constraint

    def __len__(self) -> int:
        return len(self.characters)

    def is_empty(self) -> bool:
        return (not self.min_occurrence and not self.max_occurrence and
                all(cc.exact is None and not cc.excluded for cc in self.characters))

    def increment_min_occurrence(self, letter: str):
        self.min_occurrence[letter] = self.min_occurrence.get(letter, 0) + 1

    def update(self, other: "Constraint"):
        """
        Merge `other` into this constraint in place.

        Minimum bounds only grow and maximum bounds only shrink. A position
        takes `other`'s exact letter when it has one, and `other`'s excluded
        letters are always added, which keeps the merge associative.
        """
        if len(other) != len(self):
            raise ValueError(
                f"Cannot merge a {len(other)}-letter constraint into a "
                f"{len(self)}-letter one")

        for letter, count in other.min_occurrence.items():
            self.min_occurrence[letter] = max(self.min_occurrence.get(letter, 0), count)
        for letter, count in other.max_occurrence.items():
            if letter in self.max_occurrence:
                self.max_occurrence[letter] = min(self.max_occurrence[letter], count)
            else:
                self.max_occurrence[letter] = count

        for mine, theirs in zip(self.characters, other.characters):
            # Excluded letters accumulate whether or not theirs.exact is set
            mine.excluded.update(theirs.excluded)
            if theirs.exact is not None:
                mine.exact = theirs.exact

    def allows(self, word) -> bool:
        """
        Check whether `word` is consistent with this constraint.

        `word` is anything with `text` and `letter_counts` attributes,
        normally a WordRecord.
        """
        counts: Mapping[str, int] = word.letter_counts
        if any(counts.get(c, 0) < n for c, n in self.min_occurrence.items()):
            return False
        if any(counts.get(c, 0) > n for c, n in self.max_occurrence.items()):
            return False
        for cc, letter in zip(self.characters, word.text):
            if cc.exact is not None and cc.exact != letter:
                return False
            if letter in cc.excluded:
                return False
        return True

    def copy(self) -> "Constraint":
        return Constraint(
            [CharacterConstraint(cc.exact, set(cc.excluded)) for cc in self.characters],
            dict(self.min_occurrence),
            dict(self.max_occurrence),
        )


def parse_row(row: str, size: int) -> Constraint:
    """
    Parse one feedback row into a single-row constraint.

    Every letter that was marked gray at least once gets a maximum bound
    equal to the number of green and yellow marks of that letter in the
    same row, so "-e" alone means no e at all and "e -e" means exactly one.
    """
    constraint = Constraint.empty(size)
    position = 0
    mark = Mark.GREEN
    found = Counter()
    grayed = set()

    for char in row:
        if char == " ":
            position += 1
            mark = Mark.GREEN
            continue
        if char in MARK_PREFIXES:
            mark = MARK_PREFIXES[char]
            continue
        if position >= size:
            raise ConstraintParseError(
                f"Row {row!r} has more than {size} positions")

        cc = constraint.characters[position]
        if mark is Mark.GREEN:
            cc.exact = char
            constraint.increment_min_occurrence(char)
            found[char] += 1
        elif mark is Mark.YELLOW:
            cc.excluded.add(char)
            constraint.increment_min_occurrence(char)
            found[char] += 1
        else:
            cc.excluded.add(char)
            grayed.add(char)

    for char in grayed:
        constraint.max_occurrence[char] = found[char]
    return constraint
