"""
Dictionary entry generation.

Joins the grammar lexicon, pitch accents and term/name/kanji dictionaries
on (writing, reading) and renders one HTML definition per output entry.
The result is independent of the output format.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ja_dictgen import Entry
from ja_dictgen.characters import (
    hiragana_to_katakana,
    katakana_to_hiragana,
    normalize_reading,
)
from ja_dictgen.constants import (
    GODAN_VERBS,
    IRREGULAR_VERBS,
    KANJI_PRIORITY,
    NAME_PRIORITY,
    ConjugationClass,
    PartOfSpeech,
)
from ja_dictgen.lookup_keys import generate_lookup_keys
from ja_dictgen.raw_types import (
    Definition,
    KanjiRecord,
    TermRecord,
    WordRecord,
    definition_depth,
    definition_is_empty,
)

logger = logging.getLogger(__name__)

TableKey = Tuple[str, str]  # (writing, katakana reading)
WordTable = Dict[TableKey, List[WordRecord]]
TermTable = Dict[TableKey, List[TermRecord]]
KanjiTable = Dict[str, List[KanjiRecord]]
PitchAccentTable = Dict[TableKey, List[int]]


# ============================================================================
# Settings
# ============================================================================

class LangMode(Enum):
    ENGLISH = 0
    # "self-move" / "other-move" instead of "intransitive" / "transitive".
    ENGLISH_ALT = 1
    JAPANESE = 2


@dataclass(frozen=True)
class EntrySettings:
    """
    Options for entry generation.

    Attributes:
        lang_mode: Language of the part-of-speech labels in headers
        use_katakana_pronunciation: Show readings in katakana
        generate_inflection_keys: Add look-up keys for conjugated forms
    """
    lang_mode: LangMode = LangMode.ENGLISH
    use_katakana_pronunciation: bool = False
    generate_inflection_keys: bool = True


# term -> label per LangMode value. Missing labels are "".
HEADER_TERMS: Dict[str, Tuple[str, str, str]] = {
    "verb": ("verb", "verb", "動詞"),
    "i-adjective": ("i-adjective", "i-adjective", "形容詞"),
    "adjective": ("adjective", "adjective", "形容"),
    "name": ("name", "name", "名"),
    ", transitive": (", transitive", ", other-move", "、他動"),
    ", intransitive": (", intransitive", ", self-move", "、自動"),
    ", irregular": (", irregular", ", irregular", ""),
    ", ichidan": (", ichidan", ", ichidan", "、一段"),
    ", godan": (", godan", ", godan", "、五段"),
}

WORD_TYPE_START = (
    ' <span style="font-size: 0.8em; font-style: italic; '
    'margin-left: 0; white-space: nowrap;">'
)
WORD_TYPE_END = "</span>"


def _term(name: str, settings: EntrySettings) -> str:
    return HEADER_TERMS[name][settings.lang_mode.value]


def _pronunciation(reading: str, settings: EntrySettings) -> str:
    if settings.use_katakana_pronunciation:
        return hiragana_to_katakana(reading)
    return katakana_to_hiragana(reading)


# ============================================================================
# HTML Rendering
# ============================================================================

# total depth -> list styles from the outermost level inwards
_LIST_STYLES = {
    1: ("decimal",),
    2: ("upper-roman", "decimal"),
}
_DEEP_LIST_STYLES = ("upper-roman", "upper-alpha", "decimal")


def definition_to_html(definition: Definition, total_depth: int, ordered_list: bool) -> str:
    """
    Render a (possibly nested) definition as HTML lists.

    Args:
        definition: The definition tree
        total_depth: Depth of the whole tree, used to pick list styles
        ordered_list: Use numbered lists instead of bullets
    """
    if isinstance(definition, str):
        if total_depth == 0:
            if ordered_list:
                return f"<ol><li>{definition}</li></ol>"
            return f"<ul><li>{definition}</li></ul>"
        return definition

    header = definition.header.strip()
    if not header and len(definition.items) == 1:
        return definition_to_html(definition.items[0], max(total_depth - 1, 0), ordered_list)

    html = []
    if header:
        html.append(f"<p>{header}</p>")
    if ordered_list:
        styles = _LIST_STYLES.get(total_depth, _DEEP_LIST_STYLES)
        level = max(total_depth - definition_depth(definition), 0)
        style = styles[min(level, len(styles) - 1)]
        html.append(f'<ol style="list-style-type: {style}">')
    else:
        html.append("<ul>")
    for item in definition.items:
        html.append(f"<li>{definition_to_html(item, total_depth, ordered_list)}</li>")
    html.append("</ol>" if ordered_list else "</ul>")
    return "".join(html)


def generate_header_text(
    settings: EntrySettings,
    kana: str,
    pitch_accent: Optional[List[int]],
    word: WordRecord,
) -> str:
    """Reading, pitch accents, writings and word type of a word."""
    text = _pronunciation(kana, settings)

    if pitch_accent:
        text += " " + "".join(f"[{a}]" for a in pitch_accent)

    writings = list(word.writings)
    if word.usually_kana or not writings:
        writings.insert(0, word.readings[0])
    text += " &nbsp;&nbsp;&mdash; 【" + "／".join(writings) + "】"

    if word.pos == PartOfSpeech.VERB:
        if word.conj == ConjugationClass.ICHIDAN_VERB:
            conj_text = _term(", ichidan", settings)
        elif word.conj in GODAN_VERBS:
            conj_text = _term(", godan", settings)
        elif word.conj in IRREGULAR_VERBS:
            conj_text = _term(", irregular", settings)
        else:
            conj_text = ""

        transitive = "pos:vt" in word.tags
        intransitive = "pos:vi" in word.tags
        if transitive and not intransitive:
            transitive_text = _term(", transitive", settings)
        elif intransitive and not transitive:
            transitive_text = _term(", intransitive", settings)
        else:
            transitive_text = ""

        text += (
            WORD_TYPE_START + _term("verb", settings) + transitive_text
            + conj_text + WORD_TYPE_END
        )

    elif word.pos == PartOfSpeech.ADJECTIVE:
        if word.conj in (ConjugationClass.I_ADJECTIVE, ConjugationClass.IRREGULAR_I_ADJECTIVE):
            adjective_text = _term("i-adjective", settings)
        else:
            adjective_text = _term("adjective", settings)
        irregular_text = ""
        if word.conj == ConjugationClass.IRREGULAR_I_ADJECTIVE:
            irregular_text = _term(", irregular", settings)
        text += WORD_TYPE_START + adjective_text + irregular_text + WORD_TYPE_END

    return text


def generate_definition_text(terms: Sequence[TermRecord]) -> str:
    """Definitions from every matching term dictionary."""
    html = ['<div style="margin-top: 0.7em">']
    for term in terms:
        html.append("<p>")
        if len(terms) > 1:
            html.append(f"{term.dict_name}:<br/>")
        html.append(definition_to_html(term.definitions, definition_depth(term.definitions), True))
        html.append("</p>")
    html.append("</div>")
    return "".join(html)


def generate_name_entry_text(settings: EntrySettings, name: TermRecord) -> str:
    text = ""
    if name.reading.strip():
        text += _pronunciation(name.reading, settings) + " &nbsp;&nbsp;&mdash; "
    text += f"【{name.writing}】"

    text += WORD_TYPE_START + _term("name", settings)
    if name.tags:
        text += ": " + ", ".join(name.tags)
    text += WORD_TYPE_END

    if not definition_is_empty(name.definitions):
        text += definition_to_html(name.definitions, definition_depth(name.definitions), False)
    return text


def generate_kanji_entry_text(kanji: KanjiRecord) -> str:
    text = (
        '<p style="margin-left: 2.5em; margin-bottom: 1.0em; text-indent: -2.5em;">'
        '<span style="font-size: 2.0em;">'
    )
    text += kanji.kanji + "</span>"
    if kanji.meanings:
        text += "　" + ", ".join(kanji.meanings)
    text += "</p>"

    if kanji.onyomi:
        text += '<p style="margin-left: 2.5em; text-indent: -2.5em;">音:　'
        text += "／".join(kanji.onyomi) + "</p>"
    if kanji.kunyomi:
        text += '<p style="margin-left: 2.5em; text-indent: -2.5em;">訓:　'
        text += "／".join(kanji.kunyomi) + "</p>"
    return text


# ============================================================================
# Entry Generation
# ============================================================================

def word_table_key(word: WordRecord) -> TableKey:
    """(primary writing, katakana primary reading) of a word."""
    return (word.primary_writing, normalize_reading(word.readings[0]))


def build_word_table(words: Iterable[WordRecord]) -> WordTable:
    """Group words by their (writing, reading) key."""
    table: WordTable = {}
    for word in words:
        if not word.readings:
            logger.debug(f"Skipping word without readings: {word.writings}")
            continue
        table.setdefault(word_table_key(word), []).append(word)
    logger.info(f"Word table: {len(table)} keys")
    return table


def generate_entries(
    term_table: TermTable,
    name_table: TermTable,
    kanji_table: KanjiTable,
    word_table: WordTable,
    pitch_accent_table: PitchAccentTable,
    settings: EntrySettings = EntrySettings(),
) -> List[Entry]:
    """
    Build the output entries from all sources.

    Words without any pitch accent or term definition are dropped, since
    they would have nothing to show.

    Returns:
        Entries stably sorted by the UTF-8 byte length of their first key
    """
    entries: List[Entry] = []

    # Kanji entries. Only the first record of each character is used.
    for kanji, records in kanji_table.items():
        if not records:
            continue
        entries.append(Entry(
            keys=[(kanji, KANJI_PRIORITY)],
            definition="<hr/>" + generate_kanji_entry_text(records[0]),
        ))
    kanji_count = len(entries)

    # Word entries.
    dropped = 0
    for (writing, kana), words in word_table.items():
        pitch_accent = pitch_accent_table.get((writing, kana))
        terms = term_table.get((writing, kana), [])
        for word in words:
            if pitch_accent is None and not terms:
                dropped += 1
                continue
            definition = (
                "<hr/>"
                + generate_header_text(settings, kana, pitch_accent, word)
                + generate_definition_text(terms)
            )
            entries.append(Entry(
                keys=generate_lookup_keys(word, settings.generate_inflection_keys),
                definition=definition,
            ))
    word_count = len(entries) - kanji_count

    # Name entries. Homographs are kept as separate entries.
    for (writing, _reading), names in name_table.items():
        for name in names:
            entries.append(Entry(
                keys=[(writing, NAME_PRIORITY)],
                definition="<hr/>" + generate_name_entry_text(settings, name),
            ))
    name_count = len(entries) - kanji_count - word_count

    logger.info(
        f"Generated {len(entries)} entries "
        f"({kanji_count} kanji, {word_count} words, {name_count} names; "
        f"{dropped} words without definitions dropped)"
    )

    entries.sort(key=lambda e: len(e.keys[0][0].encode("utf-8")))
    return entries
