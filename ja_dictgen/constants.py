"""
Shared constants for ja-dictgen.

Grammatical classifications of dictionary words and the priority values
that rank lookup keys. A lower priority value means a more relevant result.
"""

from enum import Enum
from typing import Dict


# ============================================================================
# Priorities
# ============================================================================

# Reserved for single-character kanji entries. Nothing else may use it.
KANJI_PRIORITY = 0

# Added to every word priority so that words never reach KANJI_PRIORITY.
WORD_PRIORITY_OFFSET = 256

# Names always rank after words and kanji.
NAME_PRIORITY = 2**32 - 1

# Priority of words with no frequency information.
UNKNOWN_PRIORITY = 100000

# Divisor applied to all-kana keys of words usually written in kana.
USUALLY_KANA_BOOST = 8


# ============================================================================
# Conjugation Classes
# ============================================================================

class ConjugationClass(Enum):
    """
    The conjugation rules that a word follows.

    OTHER covers words that don't conjugate (nouns, na-adjectives, ...) as
    well as words whose conjugation is unclear, e.g. archaic ones.
    """
    OTHER = "other"

    # だ and words that end with it.
    COPULA = "cop"

    # Regular verbs.
    ICHIDAN_VERB = "v1"
    GODAN_VERB_U = "v5u"
    GODAN_VERB_TSU = "v5t"
    GODAN_VERB_RU = "v5r"
    GODAN_VERB_KU = "v5k"
    GODAN_VERB_GU = "v5g"
    GODAN_VERB_NU = "v5n"
    GODAN_VERB_HU = "v4h"  # Classical Japanese only.
    GODAN_VERB_BU = "v5b"
    GODAN_VERB_MU = "v5m"
    GODAN_VERB_SU = "v5s"

    # Irregular verbs.
    SURU_VERB = "vs-i"
    SURU_VERB_SC = "vs-s"
    KURU_VERB = "vk"
    IKU_VERB = "v5k-s"
    KURERU_VERB = "v1-s"
    ARU_VERB = "v5r-i"
    SHARU_VERB = "v5aru"
    IRREGULAR_VERB = "irregular"

    # Adjectives.
    I_ADJECTIVE = "adj-i"
    IRREGULAR_I_ADJECTIVE = "adj-ix"


GODAN_VERBS = frozenset({
    ConjugationClass.GODAN_VERB_U,
    ConjugationClass.GODAN_VERB_TSU,
    ConjugationClass.GODAN_VERB_RU,
    ConjugationClass.GODAN_VERB_KU,
    ConjugationClass.GODAN_VERB_GU,
    ConjugationClass.GODAN_VERB_NU,
    ConjugationClass.GODAN_VERB_BU,
    ConjugationClass.GODAN_VERB_MU,
    ConjugationClass.GODAN_VERB_SU,
})

IRREGULAR_VERBS = frozenset({
    ConjugationClass.SURU_VERB,
    ConjugationClass.SURU_VERB_SC,
    ConjugationClass.KURU_VERB,
    ConjugationClass.IKU_VERB,
    ConjugationClass.KURERU_VERB,
    ConjugationClass.ARU_VERB,
    ConjugationClass.SHARU_VERB,
    ConjugationClass.GODAN_VERB_HU,
    ConjugationClass.IRREGULAR_VERB,
})

# When an entry lists several conjugating parts of speech, the one with the
# highest rank wins. Distinct classes never share a rank within a group that
# can legitimately co-occur.
CONJ_RANK: Dict[ConjugationClass, int] = {
    ConjugationClass.COPULA: 8,
    ConjugationClass.SURU_VERB_SC: 7,
    ConjugationClass.SURU_VERB: 6,
    ConjugationClass.KURU_VERB: 6,
    ConjugationClass.IKU_VERB: 6,
    ConjugationClass.KURERU_VERB: 6,
    ConjugationClass.ARU_VERB: 6,
    ConjugationClass.SHARU_VERB: 6,
    ConjugationClass.IRREGULAR_VERB: 5,
    **{conj: 4 for conj in GODAN_VERBS},
    ConjugationClass.GODAN_VERB_HU: 4,
    ConjugationClass.ICHIDAN_VERB: 3,
    ConjugationClass.IRREGULAR_I_ADJECTIVE: 2,
    ConjugationClass.I_ADJECTIVE: 1,
    ConjugationClass.OTHER: 0,
}


def combine_conj(current: ConjugationClass, new: ConjugationClass) -> ConjugationClass:
    """Pick the dominant of two conjugation classes; ties keep the newer one."""
    if CONJ_RANK[current] > CONJ_RANK[new]:
        return current
    return new


# ============================================================================
# Parts of Speech
# ============================================================================

class PartOfSpeech(Enum):
    """
    A word's broad grammatical role.

    Finer distinctions are kept in the word's tags.
    """
    UNKNOWN = "unknown"
    COPULA = "copula"
    # Includes na-adjectives, nouns taking する, etc.
    NOUN = "noun"
    PARTICLE = "particle"
    CONJUNCTION = "conjunction"
    VERB = "verb"
    ADVERB = "adverb"
    # i-adjectives and pre-noun adjectivals only.
    ADJECTIVE = "adjective"
    EXPRESSION = "expression"


POS_RANK: Dict[PartOfSpeech, int] = {
    PartOfSpeech.COPULA: 9,
    PartOfSpeech.PARTICLE: 8,
    PartOfSpeech.CONJUNCTION: 7,
    PartOfSpeech.VERB: 6,
    PartOfSpeech.ADJECTIVE: 5,
    PartOfSpeech.ADVERB: 4,
    PartOfSpeech.NOUN: 3,
    PartOfSpeech.EXPRESSION: 2,
    PartOfSpeech.UNKNOWN: 0,
}


def combine_pos(current: PartOfSpeech, new: PartOfSpeech) -> PartOfSpeech:
    """Pick the dominant of two parts of speech; ties keep the current one."""
    if POS_RANK[current] >= POS_RANK[new]:
        return current
    return new


# ============================================================================
# JMdict Entity Mapping
# ============================================================================

# pos entity -> (part of speech, conjugation class)
POS_ENTITIES: Dict[str, tuple] = {
    'exp': (PartOfSpeech.EXPRESSION, None),
    'cop': (PartOfSpeech.COPULA, ConjugationClass.COPULA),
    'cop-da': (PartOfSpeech.COPULA, ConjugationClass.COPULA),
    'adj-i': (PartOfSpeech.ADJECTIVE, ConjugationClass.I_ADJECTIVE),
    'adj-ix': (PartOfSpeech.ADJECTIVE, ConjugationClass.IRREGULAR_I_ADJECTIVE),
    'adj-pn': (PartOfSpeech.ADJECTIVE, None),
    'v1': (PartOfSpeech.VERB, ConjugationClass.ICHIDAN_VERB),
    'vn': (PartOfSpeech.VERB, ConjugationClass.GODAN_VERB_NU),
    'vs-i': (PartOfSpeech.VERB, ConjugationClass.SURU_VERB),
    'vs-s': (PartOfSpeech.VERB, ConjugationClass.SURU_VERB_SC),
    'vk': (PartOfSpeech.VERB, ConjugationClass.KURU_VERB),
    'v5k-s': (PartOfSpeech.VERB, ConjugationClass.IKU_VERB),
    'v5aru': (PartOfSpeech.VERB, ConjugationClass.SHARU_VERB),
    'v5r-i': (PartOfSpeech.VERB, ConjugationClass.ARU_VERB),
    'v1-s': (PartOfSpeech.VERB, ConjugationClass.KURERU_VERB),
    'vz': (PartOfSpeech.VERB, ConjugationClass.IRREGULAR_VERB),
    'v5u-s': (PartOfSpeech.VERB, ConjugationClass.IRREGULAR_VERB),
    'vs': (PartOfSpeech.NOUN, None),
    'adj-na': (PartOfSpeech.NOUN, None),
    'adj-no': (PartOfSpeech.NOUN, None),
    'adj-t': (PartOfSpeech.NOUN, None),
    'n-adv': (PartOfSpeech.NOUN, None),
    'n-pref': (PartOfSpeech.NOUN, None),
    'n-suf': (PartOfSpeech.NOUN, None),
    'n-t': (PartOfSpeech.NOUN, None),
    'n': (PartOfSpeech.NOUN, None),
    'pn': (PartOfSpeech.NOUN, None),
    'num': (PartOfSpeech.NOUN, None),
    'adv': (PartOfSpeech.ADVERB, None),
    'adv-to': (PartOfSpeech.ADVERB, None),
    'prt': (PartOfSpeech.PARTICLE, None),
    'conj': (PartOfSpeech.CONJUNCTION, None),
}

# Regular godan (and yodan) verbs: the letter after "v5"/"v4" picks the class.
GODAN_LETTERS: Dict[str, ConjugationClass] = {
    'u': ConjugationClass.GODAN_VERB_U,
    't': ConjugationClass.GODAN_VERB_TSU,
    'r': ConjugationClass.GODAN_VERB_RU,
    'k': ConjugationClass.GODAN_VERB_KU,
    'g': ConjugationClass.GODAN_VERB_GU,
    'n': ConjugationClass.GODAN_VERB_NU,
    'h': ConjugationClass.GODAN_VERB_HU,
    'b': ConjugationClass.GODAN_VERB_BU,
    'm': ConjugationClass.GODAN_VERB_MU,
    's': ConjugationClass.GODAN_VERB_SU,
}

GODAN_ENTITIES = frozenset({
    'v5u', 'v5n', 'v4b', 'v5b', 'v4g', 'v5g', 'v4h', 'v4k', 'v5k', 'v4m',
    'v5m', 'v4r', 'v5r', 'v4s', 'v5s', 'v4t', 'v5t',
})
