"""
Chain rules: whether a word may follow another, terminal-sound detection and
whole-chain validation.

RuleEngine holds no state of its own. It combines the validator and the
normalizer with the history a caller passes in.
"""

from collections.abc import Sequence

import structlog

from shiritori.logic.enums import ChainErrorType
from shiritori.logic.kana import TERMINAL_SOUND
from shiritori.logic.normalizer import first_chain_character, last_chain_character
from shiritori.logic.types import ChainValidationResult
from shiritori.logic.validator import is_valid_word

logger = structlog.get_logger()


class RuleEngine:
    """Context-aware legality checks for shiritori words."""

    def ends_with_terminal_sound(self, word: str) -> bool:
        """Check whether the word ends on ん once its final character is normalized."""
        return last_chain_character(word) == TERMINAL_SOUND

    def is_word_valid_for_shiritori(self, word: str) -> bool:
        """A word is playable when it is well-formed and does not end on ん."""
        if not is_valid_word(word):
            return False
        return not self.ends_with_terminal_sound(word)

    def can_word_follow(self, previous: str, next_word: str) -> bool:
        """Check that ``next_word`` starts with the sound ``previous`` ends on."""
        if not previous or not next_word:
            logger.debug("connection check on empty word", previous=previous, next_word=next_word)
            return False
        tail = last_chain_character(previous)
        head = first_chain_character(next_word)
        can_follow = tail == head
        logger.debug("connection check", previous=previous, next_word=next_word, tail=tail, head=head, ok=can_follow)
        return can_follow

    def find_used_words(self, word: str, history: Sequence[str]) -> list[str]:
        """Return every exact occurrence of ``word`` in ``history``."""
        return [used for used in history if used == word]

    def validate_chain(self, words: Sequence[str]) -> ChainValidationResult:
        """
        Validate an ordered list of words as a single chain.

        Errors are reported by priority, first match wins: a repeated word
        anywhere, then the first broken link, then a word ending on ん, then a
        structurally invalid word. Empty and one-word chains are valid.
        """
        if len(words) <= 1:
            return ChainValidationResult(is_valid=True)

        if len(set(words)) != len(words):
            logger.debug("chain invalid: duplicate word", words=list(words))
            return ChainValidationResult(
                is_valid=False,
                error_type=ChainErrorType.DUPLICATE_WORD,
                error_message="同じ単語を複数回使用することはできません",
            )

        for previous, current in zip(words, words[1:], strict=False):
            if not self.can_word_follow(previous, current):
                logger.debug("chain invalid: broken connection", previous=previous, current=current)
                return ChainValidationResult(
                    is_valid=False,
                    error_type=ChainErrorType.INVALID_CONNECTION,
                    error_message=f"「{previous}」の次に「{current}」は続けません",
                )

        for word in words:
            if self.ends_with_terminal_sound(word):
                logger.debug("chain invalid: ends with terminal sound", word=word)
                return ChainValidationResult(
                    is_valid=False,
                    error_type=ChainErrorType.ENDS_WITH_N,
                    error_message=f"「{word}」は「ん」で終わるため使用できません",
                )

        for word in words:
            if not is_valid_word(word):
                logger.debug("chain invalid: malformed word", word=word)
                return ChainValidationResult(
                    is_valid=False,
                    error_type=ChainErrorType.INVALID_WORD,
                    error_message=f"「{word}」は意味のない言葉のため使用できません",
                )

        return ChainValidationResult(is_valid=True)


DEFAULT_RULE_ENGINE = RuleEngine()
