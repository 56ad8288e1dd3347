"""
Structural well-formedness of a single word.

These checks know nothing about the game in progress: they only decide whether
a string is a plausible hiragana word. Both functions are total and report
invalid input through their return value.
"""

import structlog

from shiritori.logic.kana import LONG_VOWEL_MARK

logger = structlog.get_logger()

MIN_WORD_LENGTH = 2
MAX_REPEAT_RUN = 2  # three identical characters in a row is rejected

_HIRAGANA_FIRST = 0x3042  # あ
_HIRAGANA_LAST = 0x3093  # ん
_EXTRA_CHARACTERS = frozenset("ゃゅょっぁぃぅぇぉ" + LONG_VOWEL_MARK)

# repeated particles and morae that are never real words
DENYLISTED_PATTERNS: tuple[str, ...] = (
    "をををを",
    "ははは",
    "にににに",
    "でででで",
    "がががが",
)


def is_permitted_character(char: str) -> bool:
    """Check membership in hiragana あ..ん plus small forms and the long vowel mark."""
    return _HIRAGANA_FIRST <= ord(char) <= _HIRAGANA_LAST or char in _EXTRA_CHARACTERS


def _has_invalid_repetition(word: str) -> bool:
    if len(set(word)) == 1:
        return True
    if len(word) == MIN_WORD_LENGTH and word[0] == word[1]:
        return True
    return any(word[i] == word[i + 1] == word[i + 2] for i in range(len(word) - MAX_REPEAT_RUN))


def is_valid_word(word: str) -> bool:
    """Check that a word is well-formed hiragana, independent of any game history."""
    if not word:
        logger.debug("word rejected: empty")
        return False

    if not all(is_permitted_character(char) for char in word):
        logger.debug("word rejected: invalid characters", word=word)
        return False

    if len(word) < MIN_WORD_LENGTH:
        logger.debug("word rejected: too short", word=word)
        return False

    if _has_invalid_repetition(word):
        logger.debug("word rejected: repeated characters", word=word)
        return False

    pattern = next((p for p in DENYLISTED_PATTERNS if p in word), None)
    if pattern is not None:
        logger.debug("word rejected: denylisted pattern", word=word, pattern=pattern)
        return False

    return True


def sanitize_input(text: str) -> str:
    """Drop every character that is not permitted in a word, keeping order."""
    sanitized = "".join(char for char in text if is_permitted_character(char))
    if sanitized != text:
        logger.debug("input sanitized", text=text, sanitized=sanitized)
    return sanitized
