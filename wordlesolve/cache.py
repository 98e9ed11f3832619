"""
First-Guess Cache
=================

The opening guess depends only on the vocabulary, and computing it scores
every word against every pair of words. It is persisted between runs as a
small JSON object mapping the vocabulary fingerprint to the index of the
best opening word.
"""

import json
import logging
import os
from typing import Dict, Optional

import platformdirs

from .errors import CacheCorrupt

logger = logging.getLogger(__name__)

CACHE_FILENAME = "wordle-solve.cache"
CACHE_ENV = "WORDLE_SOLVE_CACHE"


def default_cache_path() -> str:
    """Cache file location: $WORDLE_SOLVE_CACHE, else the user cache directory."""
    if os.environ.get(CACHE_ENV):
        return os.environ[CACHE_ENV]
    return os.path.join(platformdirs.user_cache_dir(), CACHE_FILENAME)


def parse_cache(data: str) -> Dict[str, int]:
    """
    Parse the cache file contents.

    Raises:
        CacheCorrupt: not a JSON object of fingerprint -> non-negative index
    """
    if not data.strip():
        return {}
    try:
        entries = json.loads(data)
    except ValueError as e:
        raise CacheCorrupt(f"Cache is not valid JSON: {e}") from e
    if not isinstance(entries, dict):
        raise CacheCorrupt("Cache is not a JSON object")
    for key, value in entries.items():
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise CacheCorrupt(f"Cache entry {key!r} has invalid index {value!r}")
    return entries


class FirstGuessCache:
    """Persisted mapping of vocabulary fingerprint to opening guess index."""

    def __init__(self, path: str = None):
        self.path = path or default_cache_path()
        self.entries: Dict[str, int] = {}
        self.dirty = False

    @classmethod
    def load(cls, path: str = None) -> "FirstGuessCache":
        """
        Read the cache file. A missing, unreadable or corrupt file yields an
        empty cache.
        """
        cache = cls(path)
        try:
            with open(cache.path, "r", encoding="utf-8") as f:
                data = f.read()
        except FileNotFoundError:
            return cache
        except OSError as e:
            logger.warning("Could not read cache %s: %s", cache.path, e)
            return cache

        try:
            cache.entries = parse_cache(data)
        except CacheCorrupt as e:
            logger.warning("Ignoring corrupt cache %s: %s", cache.path, e)
        return cache

    def get(self, fingerprint: str) -> Optional[int]:
        return self.entries.get(fingerprint)

    def put(self, fingerprint: str, index: int):
        if self.entries.get(fingerprint) != index:
            self.entries[fingerprint] = index
            self.dirty = True

    def save(self) -> bool:
        """Write the cache if it changed. Returns whether it was written."""
        if not self.dirty:
            return False
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self.entries, f)
        except OSError as e:
            logger.warning("Could not write cache %s: %s", self.path, e)
            return False
        self.dirty = False
        return True
