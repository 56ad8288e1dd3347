"""
Word lists used to seed computer moves.

The bundled vocabulary is grouped by starting character and difficulty tier.
The hard tier is the normal tier plus words that are awkward to answer.
"""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from shiritori.logic.enums import Difficulty
from shiritori.logic.kana import DATA_DIR
from shiritori.logic.normalizer import first_chain_character
from shiritori.logic.rules import DEFAULT_RULE_ENGINE

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = structlog.get_logger()

WORDS_FILE = DATA_DIR / "words.json"

WordTable = dict[str, tuple[str, ...]]


def _merge(base: Mapping[str, Iterable[str]], additions: Mapping[str, Iterable[str]]) -> WordTable:
    merged = {key: tuple(words) for key, words in base.items()}
    for key, words in additions.items():
        merged[key] = (*merged.get(key, ()), *words)
    return merged


class WordDictionary:
    """
    Read-only vocabulary keyed by starting character, one table per difficulty.

    Lookups normalize the key the same way chain matching does, so asking for
    words starting with ゃ or ャ finds the や entries.
    """

    def __init__(self, tables: Mapping[Difficulty, Mapping[str, Iterable[str]]]) -> None:
        self._tables: dict[Difficulty, WordTable] = {
            difficulty: {first_chain_character(key): tuple(words) for key, words in table.items()}
            for difficulty, table in tables.items()
        }
        logger.debug(
            "word dictionary loaded",
            counts={difficulty: sum(map(len, table.values())) for difficulty, table in self._tables.items()},
        )

    @classmethod
    def from_file(cls, path: Path | str = WORDS_FILE) -> WordDictionary:
        """Load a dictionary file with "easy", "normal" and "hard_additions" sections."""
        with Path(path).open(encoding="utf-8") as f:
            data = json.load(f)
        normal = data["normal"]
        return cls(
            {
                Difficulty.EASY: data["easy"],
                Difficulty.NORMAL: normal,
                Difficulty.HARD: _merge(normal, data.get("hard_additions", {})),
            },
        )

    def get_words(self, starting_with: str, difficulty: Difficulty) -> list[str]:
        """Words starting with the given character for a tier. May be empty."""
        key = first_chain_character(starting_with)
        return list(self._tables.get(difficulty, {}).get(key, ()))

    def get_random_word(
        self,
        starting_with: str,
        difficulty: Difficulty,
        rng: random.Random | None = None,
    ) -> str | None:
        words = self.get_words(starting_with, difficulty)
        if not words:
            logger.warning("no dictionary word for character", character=starting_with, difficulty=difficulty)
            return None
        return (rng or random).choice(words)

    def contains(self, word: str, difficulty: Difficulty) -> bool:
        """Check a word against a tier. Empty words and words ending on ん are never listed."""
        if not word or DEFAULT_RULE_ENGINE.ends_with_terminal_sound(word):
            return False
        return word in self.get_words(word[0], difficulty)

    def all_words(self, difficulty: Difficulty) -> list[str]:
        return [word for words in self._tables.get(difficulty, {}).values() for word in words]
