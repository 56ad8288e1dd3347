"""
Kana character tables and script canonicalization.

Hiragana is the canonical script. Katakana folds onto hiragana by a fixed
code point offset, and kanji words are resolved through a bundled reading
table. Words containing Latin letters or digits are never converted.
"""

from __future__ import annotations

import json
import re
import unicodedata
from enum import Enum
from functools import cache
from itertools import groupby
from pathlib import Path

import structlog

logger = structlog.get_logger()

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
READINGS_FILE = DATA_DIR / "readings.json"

LONG_VOWEL_MARK = "ー"
TERMINAL_SOUND = "ん"
DEFAULT_VOWEL = "あ"  # used when a long vowel mark has nothing before it

_KATAKANA_START = 0x30A1  # ァ
_KATAKANA_END = 0x30F6  # ヶ
_KATAKANA_OFFSET = 0x60  # ァ (U+30A1) - ぁ (U+3041)

_LATIN_OR_DIGIT = re.compile(r"[A-Za-z0-9]")


class VowelRow(Enum):
    """The five vowel rows (段) of the kana table."""

    A = "a"
    I = "i"  # noqa: E741
    U = "u"
    E = "e"
    O = "o"


_ROW_MEMBERS: dict[VowelRow, str] = {
    VowelRow.A: "あかがさざただなはばぱまやらわん",
    VowelRow.I: "いきぎしじちぢにひびぴみりゐ",
    VowelRow.U: "うくぐすずつづぬふぶぷむゆるゔ",
    VowelRow.E: "えけげせぜてでねへべぺめれゑ",
    VowelRow.O: "おこごそぞとどのほぼぽもよろを",
}

ROW_OF: dict[str, VowelRow] = {char: row for row, members in _ROW_MEMBERS.items() for char in members}

# vowel written for a long vowel mark after a character of each row;
# the o row lengthens to う (しょー → しょう, こー → こう)
ROW_VOWEL: dict[VowelRow, str] = {
    VowelRow.A: "あ",
    VowelRow.I: "い",
    VowelRow.U: "う",
    VowelRow.E: "え",
    VowelRow.O: "う",
}

SMALL_TO_PLAIN: dict[str, str] = {
    "ぁ": "あ",
    "ぃ": "い",
    "ぅ": "う",
    "ぇ": "え",
    "ぉ": "お",
    "っ": "つ",
    "ゃ": "や",
    "ゅ": "ゆ",
    "ょ": "よ",
    "ゎ": "わ",
    "ゕ": "か",
    "ゖ": "け",
}

SMALL_KANA = frozenset(SMALL_TO_PLAIN)


def fold_katakana(text: str) -> str:
    """Map every katakana letter to its hiragana counterpart, leaving other characters alone."""
    return "".join(
        chr(ord(char) - _KATAKANA_OFFSET) if _KATAKANA_START <= ord(char) <= _KATAKANA_END else char
        for char in text
    )


def is_kanji(char: str) -> bool:
    code = ord(char)
    return 0x4E00 <= code <= 0x9FFF or 0x3400 <= code <= 0x4DBF or char == "々"


@cache
def load_readings() -> dict[str, str]:
    """Load the kanji reading table bundled with the package."""
    with READINGS_FILE.open(encoding="utf-8") as f:
        return json.load(f)


def _convert_run(run: str, *, kanji: bool) -> str:
    if not kanji:
        return fold_katakana(run)
    readings = load_readings()
    whole = readings.get(run)
    if whole is not None:
        return whole
    return "".join(readings.get(char, char) for char in run)


def to_canonical_script(text: str) -> str:
    """
    Convert mixed-script text to hiragana where the reading is known.

    Text containing Latin letters or digits is returned unchanged. Known kanji
    words resolve through the reading table, katakana folds to hiragana, and
    anything unknown is kept as-is. Never raises.
    """
    if not text:
        return text

    folded = unicodedata.normalize("NFKC", text)
    if _LATIN_OR_DIGIT.search(folded):
        logger.debug("script conversion skipped: latin or digits", text=text)
        return text

    reading = load_readings().get(folded)
    if reading is not None:
        logger.debug("script conversion: exact reading", text=text, result=reading)
        return reading

    result = "".join(_convert_run("".join(chars), kanji=kanji) for kanji, chars in groupby(folded, key=is_kanji))
    if any(is_kanji(char) for char in result):
        logger.debug("script conversion: unresolved kanji kept", text=text, result=result)
    return result
