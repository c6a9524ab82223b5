"""
Normalized source records.

Every input parser produces these, and the entry builder consumes them.
They carry no knowledge of where they were parsed from.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Tuple, Union

from ja_dictgen.constants import ConjugationClass, PartOfSpeech, UNKNOWN_PRIORITY


@dataclass(frozen=True)
class WordRecord:
    """
    A grammar lexicon (JMdict) entry.

    Attributes:
        writings: Non-kana writings, most common first
        readings: Kana readings, the first one is primary
        conj: Conjugation class
        pos: Broad part of speech
        usually_kana: True if the word is usually written in kana alone
        priority: Commonness rank, lower is more common
        tags: "element:entity" strings, e.g. "pos:vt" or "misc:uk"
        definitions: English glosses, one string per sense
    """
    writings: Tuple[str, ...]
    readings: Tuple[str, ...]
    conj: ConjugationClass = ConjugationClass.OTHER
    pos: PartOfSpeech = PartOfSpeech.UNKNOWN
    usually_kana: bool = False
    priority: int = UNKNOWN_PRIORITY
    tags: FrozenSet[str] = frozenset()
    definitions: Tuple[str, ...] = ()

    @property
    def primary_writing(self) -> str:
        """First writing, or the primary reading for kana-only words."""
        if self.writings:
            return self.writings[0]
        return self.readings[0].strip()


# ============================================================================
# Definitions
# ============================================================================

@dataclass
class DefinitionList:
    """A list of sub-definitions with an optional header line."""
    header: str = ""
    items: List["Definition"] = field(default_factory=list)


Definition = Union[DefinitionList, str]


def definition_depth(definition: Definition) -> int:
    """Nesting depth; a plain text definition has depth 0."""
    if isinstance(definition, str):
        return 0
    return 1 + max((definition_depth(d) for d in definition.items), default=0)


def definition_is_empty(definition: Definition) -> bool:
    if isinstance(definition, str):
        return not definition.strip()
    return not definition.header.strip() and not definition.items


# ============================================================================
# Yomichan Records
# ============================================================================

class InflectionType(Enum):
    VERB_ICHIDAN = "v1"
    VERB_GODAN = "v5"
    VERB_SURU = "vs"
    VERB_KURU = "vk"
    I_ADJECTIVE = "adj-i"
    NONE = ""

    @classmethod
    def from_rule(cls, rule: str) -> "InflectionType":
        rule = rule.strip()
        for member in cls:
            if member.value == rule:
                return member
        return cls.NONE


@dataclass
class TermRecord:
    """A word or name from a term dictionary."""
    dict_name: str
    writing: str
    reading: str
    definitions: Definition
    inflection: InflectionType = InflectionType.NONE
    tags: List[str] = field(default_factory=list)
    commonness: int = 0  # Higher is more common.


@dataclass
class KanjiRecord:
    """A single kanji character from a kanji dictionary."""
    dict_name: str
    kanji: str
    onyomi: List[str] = field(default_factory=list)
    kunyomi: List[str] = field(default_factory=list)
    meanings: List[str] = field(default_factory=list)
