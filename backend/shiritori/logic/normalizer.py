"""
Phonetic normalization of words for chain matching.

Two passes turn a word into the form used to compare word ends and starts:
small kana become their plain forms, then each long vowel mark becomes the
vowel of the character before it (るびー → るびい, ばしょー → ばしよう).
Every function here is pure and total.
"""

import structlog

from shiritori.logic.kana import (
    DEFAULT_VOWEL,
    LONG_VOWEL_MARK,
    ROW_OF,
    ROW_VOWEL,
    SMALL_KANA,
    SMALL_TO_PLAIN,
    fold_katakana,
)

logger = structlog.get_logger()


def vowel_for(char: str | None) -> str:
    """
    Return the vowel a long vowel mark stands for after ``char``.

    Small kana are read as their plain form first, so a palatalized pair like
    しょ resolves through よ to う. Characters outside the kana rows, and a
    missing predecessor, give the default vowel.
    """
    if not char:
        return DEFAULT_VOWEL
    plain = SMALL_TO_PLAIN.get(char, char)
    row = ROW_OF.get(plain)
    if row is None:
        logger.debug("no vowel row for character, using default", char=char)
        return DEFAULT_VOWEL
    return ROW_VOWEL[row]


def _resolve_small_kana(text: str) -> str:
    return "".join(SMALL_TO_PLAIN.get(char, char) for char in text)


def _resolve_long_vowel_marks(text: str) -> str:
    result: list[str] = []
    for char in text:
        if char == LONG_VOWEL_MARK:
            result.append(vowel_for(result[-1] if result else None))
        else:
            result.append(char)
    return "".join(result)


def normalize_for_chaining(word: str) -> str:
    """Rewrite a whole word into its chain-matching form."""
    if not word:
        return word
    result = _resolve_long_vowel_marks(_resolve_small_kana(fold_katakana(word)))
    if result != word:
        logger.debug("word normalized", word=word, normalized=result)
    return result


def normalize_last_character_only(word: str) -> str:
    """
    Resolve only a trailing small kana or trailing run of long vowel marks.

    The interior of the word keeps its written form, which is what gets stored
    and displayed; only the end that the next word has to match is rewritten.
    """
    if not word:
        return word
    last = fold_katakana(word[-1])
    if last in SMALL_KANA:
        return word[:-1] + SMALL_TO_PLAIN[last]
    if last != LONG_VOWEL_MARK:
        return word[:-1] + last

    base = word.rstrip(LONG_VOWEL_MARK)
    run_length = len(word) - len(base)
    vowel = vowel_for(fold_katakana(base[-1]) if base else None)
    # every mark in the run repeats the vowel: a resolved vowel maps to itself
    return base + vowel * run_length


def needs_normalization(word: str) -> bool:
    """Check whether normalization would change the word."""
    return any(char == LONG_VOWEL_MARK or char in SMALL_KANA for char in fold_katakana(word))


def first_chain_character(word: str) -> str:
    """Character a word starts with for chain matching ("" for an empty word)."""
    return normalize_for_chaining(word[:1])


def last_chain_character(word: str) -> str:
    """Character the next word must start with ("" for an empty word)."""
    return normalize_last_character_only(word)[-1:]
