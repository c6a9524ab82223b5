"""
Look-up key generation for dictionary words.

Each word is reachable through all of its writings, its readings (in both
hiragana and katakana) and a handful of basic conjugations. Conjugated keys
are produced by replacing the dictionary-form ending with a fixed list of
endings, so that tapping e.g. 食べた on the e-reader finds 食べる.
"""

from typing import Dict, List, Tuple

from ja_dictgen.characters import hiragana_to_katakana, is_all_kana
from ja_dictgen.constants import (
    ConjugationClass,
    USUALLY_KANA_BOOST,
    WORD_PRIORITY_OFFSET,
)
from ja_dictgen.raw_types import WordRecord


# ============================================================================
# Ending Tables
# ============================================================================
# conjugation class -> [(dictionary-form suffix, replacement endings)]
#
# The endings are chosen to cover the stems that the most common
# inflections start with, not every inflection. Ichidan verbs include
# the bare stem ("") and i-adjectives the bare stem as well.

ENDING_TABLE: Dict[ConjugationClass, List[Tuple[str, Tuple[str, ...]]]] = {
    # ～ない is listed even though ～ is too, because some dictionaries have
    # separate entries for exactly the ～ない form which would otherwise hide
    # the verb.
    ConjugationClass.ICHIDAN_VERB: [
        ("る", ("", "ない", "られ", "させ", "ろ", "て", "た")),
    ],
    ConjugationClass.GODAN_VERB_U: [
        ("う", ("わない", "わ", "い", "え", "お", "って", "った")),
    ],
    ConjugationClass.GODAN_VERB_TSU: [
        ("つ", ("たない", "た", "ち", "て", "と", "って", "った")),
    ],
    ConjugationClass.GODAN_VERB_RU: [
        ("る", ("らない", "ら", "り", "れ", "ろ", "って", "った")),
    ],
    ConjugationClass.GODAN_VERB_KU: [
        ("く", ("かない", "か", "き", "け", "こ", "いて", "いた")),
    ],
    ConjugationClass.GODAN_VERB_GU: [
        ("ぐ", ("がない", "が", "ぎ", "げ", "ご", "いで", "いだ")),
    ],
    ConjugationClass.GODAN_VERB_NU: [
        ("ぬ", ("なない", "な", "に", "ね", "の", "んで", "んだ")),
    ],
    ConjugationClass.GODAN_VERB_BU: [
        ("ぶ", ("ばない", "ば", "び", "べ", "ぼ", "んで", "んだ")),
    ],
    ConjugationClass.GODAN_VERB_MU: [
        ("む", ("まない", "ま", "み", "め", "も", "んで", "んだ")),
    ],
    ConjugationClass.GODAN_VERB_SU: [
        ("す", ("さない", "さ", "し", "せ", "そ", "して", "した")),
    ],
    # 行く: like godan-ku, except for the って/った forms.
    ConjugationClass.IKU_VERB: [
        ("く", ("かない", "か", "き", "け", "こ", "って", "った")),
    ],
    # 来る changes its reading, so the whole くる / 来る is replaced.
    ConjugationClass.KURU_VERB: [
        ("くる", (
            "こない", "こなかった", "こなくて", "きて", "きた", "こられ",
            "こさせ", "こい", "きます", "きません", "きました",
        )),
        ("来る", (
            "来ない", "来なかった", "来なくて", "来て", "来た", "来られ",
            "来させ", "来い", "来ます", "来ません", "来ました",
        )),
    ],
    ConjugationClass.SURU_VERB: [
        ("する", (
            "しな", "しろ", "させ", "され", "でき", "した", "して", "しない",
            "します", "しません",
        )),
    ],
    ConjugationClass.I_ADJECTIVE: [
        ("い", ("", "く", "け", "かった", "かって")),
    ],
}

# Verbs and i-adjectives get a priority boost so that they show up earlier
# in search results than e.g. nouns sharing a conjugated form.
CLASS_BOOST: Dict[ConjugationClass, int] = {
    ConjugationClass.ICHIDAN_VERB: 4,
    ConjugationClass.GODAN_VERB_U: 4,
    ConjugationClass.GODAN_VERB_TSU: 4,
    ConjugationClass.GODAN_VERB_RU: 4,
    ConjugationClass.GODAN_VERB_KU: 4,
    ConjugationClass.GODAN_VERB_GU: 4,
    ConjugationClass.GODAN_VERB_NU: 4,
    ConjugationClass.GODAN_VERB_BU: 4,
    ConjugationClass.GODAN_VERB_MU: 4,
    ConjugationClass.GODAN_VERB_SU: 4,
    ConjugationClass.IKU_VERB: 4,
    ConjugationClass.KURU_VERB: 4,
    ConjugationClass.SURU_VERB: 4,
    ConjugationClass.I_ADJECTIVE: 2,
}


def class_boost(conj: ConjugationClass) -> int:
    """Priority divisor for a conjugation class."""
    return CLASS_BOOST.get(conj, 1)


def key_priority(record: WordRecord, form: str) -> int:
    """
    Priority of one key of a word.

    The usually-kana boost is applied before the class boost, both as
    integer division.
    """
    priority = record.priority + WORD_PRIORITY_OFFSET
    if record.usually_kana and is_all_kana(form):
        priority //= USUALLY_KANA_BOOST
    return priority // class_boost(record.conj)


def candidate_forms(record: WordRecord) -> List[str]:
    """
    Writings and readings that get their own keys.

    All readings are used for usually-kana words, otherwise only the
    primary reading.
    """
    readings = record.readings if record.usually_kana else record.readings[:1]
    return sorted(set(record.writings) | set(readings))


# ============================================================================
# Key Generation
# ============================================================================

def _push(keys: List[Tuple[str, int]], text: str, priority: int):
    # Kobo looks hiragana words up by their katakana spelling, so all-kana
    # keys always get both.
    if is_all_kana(text):
        keys.append((hiragana_to_katakana(text), priority))
    keys.append((text, priority))


def inflect(form: str, suffix: str, endings: Tuple[str, ...]) -> List[str]:
    """
    Replace a dictionary-form suffix with each ending.

    Returns an empty list if the form doesn't end with the suffix.
    """
    if not suffix or len(form) < len(suffix) or not form.endswith(suffix):
        return []
    stem = form[:-len(suffix)]
    return [stem + ending for ending in endings]


def generate_lookup_keys(
    record: WordRecord,
    generate_inflections: bool = True,
) -> List[Tuple[str, int]]:
    """
    Generate look-up keys for a word.

    Args:
        record: The word
        generate_inflections: Also add keys for basic conjugations

    Returns:
        De-duplicated (key, priority) pairs sorted by priority, then UTF-8
        byte length of the key, then key.

    Example:
        >>> record = WordRecord(writings=("食べる",), readings=("たべる",),
        ...                     conj=ConjugationClass.ICHIDAN_VERB, priority=10)
        >>> ("食べた", 66) in generate_lookup_keys(record)
        True
    """
    rules = ENDING_TABLE.get(record.conj, []) if generate_inflections else []

    keys: List[Tuple[str, int]] = []
    for form in candidate_forms(record):
        priority = key_priority(record, form)
        _push(keys, form, priority)
        for suffix, endings in rules:
            for variant in inflect(form, suffix, endings):
                _push(keys, variant, priority)

    return sorted(set(keys), key=lambda k: (k[1], len(k[0].encode("utf-8")), k[0]))
