"""
Command Line
============

Print out the next best guess when solving a Wordle puzzle.

Each row describes one Wordle result row. Put a - in front of each gray
letter, a ~ in front of each yellow letter, and leave the green ones as is:

    wordle-solve -- "-r -a ~i -s -e" "-h -o ~t -l y"
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .cache import FirstGuessCache
from .constraint import Constraint
from .errors import ConstraintParseError, NoCandidatesError, VocabularyError
from .solver import WordleSolver, benchmark, print_results
from .words import load_words


DEFAULT_WORDS = "words"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordle-solve",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("constraint", nargs="*", metavar="ROW",
                        help="one or more Wordle result rows")
    parser.add_argument("-w", "--words", metavar="FILE", default=DEFAULT_WORDS,
                        help="word list, one word per line (default: %(default)s)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-t", "--test", metavar="WORD",
                      help="see how the algorithm performs against WORD")
    mode.add_argument("--full-test", action="store_true",
                      help="see how the algorithm performs against every word")
    parser.add_argument("--cache", metavar="FILE",
                        help="first-guess cache file (default: user cache directory)")
    parser.add_argument("--no-cache", action="store_true",
                        help="neither read nor write the first-guess cache")
    parser.add_argument("--no-progress", action="store_true",
                        help="hide the scoring progress bar")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        vocabulary = load_words(args.words)
    except VocabularyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    cache = None if args.no_cache else FirstGuessCache.load(args.cache)
    solver = WordleSolver(
        vocabulary,
        first_guess=cache.get(vocabulary.fingerprint) if cache else None,
        progress=not args.no_progress,
    )

    status = 0
    try:
        if args.test:
            guesses = solver.solve(args.test, verbose=True)
            if guesses[-1].text == args.test:
                print(f"Solved {args.test} in {len(guesses)} guesses")
            else:
                print(f"Gave up on {args.test} after {len(guesses)} guesses")
                status = 1
        elif args.full_test:
            print_results(benchmark(solver, verbose=True))
        else:
            constraint = Constraint.from_rows(args.constraint, vocabulary.word_length)
            guess = solver.best_guess(constraint, verbose=True)
            print(f"Best guess: {guess.text}")
    except NoCandidatesError as e:
        print(f"Error: {e}", file=sys.stderr)
        status = 1
    except (ConstraintParseError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        status = 2

    if cache is not None and solver.first_guess_computed:
        cache.put(vocabulary.fingerprint, solver.first_guess)
        cache.save()
    return status


if __name__ == "__main__":
    sys.exit(main())
