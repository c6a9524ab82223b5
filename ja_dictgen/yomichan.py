"""
Yomichan dictionary parsing.

Reads zipped Yomichan dictionaries (format version 3): index.json for the
title, term_bank_*.json for words (or names, for JMnedict) and
kanji_bank_*.json for kanji.

Definitions from native Japanese dictionaries are split into nested lists
on their numbering markers, and the entry header that most of them repeat
at the top of the definition is dropped.
"""

import json
import logging
import re
import zipfile
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from ja_dictgen import MalformedInputError
from ja_dictgen.characters import hiragana_to_katakana, is_all_kana, normalize_reading
from ja_dictgen.raw_types import (
    Definition,
    DefinitionList,
    InflectionType,
    KanjiRecord,
    TermRecord,
)

logger = logging.getLogger(__name__)

SUPPORTED_FORMAT = 3

# Dictionary titles that hold names rather than words.
NAME_DICTIONARIES = {"jmnedict"}

# Sub-definition markers, outermost first. These match the 三省堂 スーパー大辞林
# layout and probably a few other native Japanese dictionaries.
DIVIDERS = [
    re.compile(r"^■[一二三四五六七八九十]+■", re.M),
    re.compile(r"^[❶❷❸❹❺❻❼❽❾❿]+", re.M),
    re.compile(r"^（[０１２３４５６７８９]+）", re.M),
]

TermTable = Dict[Tuple[str, str], List[TermRecord]]
KanjiTable = Dict[str, List[KanjiRecord]]


# ============================================================================
# Definition Processing
# ============================================================================

def split_definition_text(text: str, dividers: Sequence[re.Pattern] = DIVIDERS) -> Definition:
    """
    Split definition text into nested lists on the divider markers.

    The first divider that matches splits the top level, the remaining
    dividers are tried on each part. Text before the first marker becomes
    the list header.
    """
    for divider in dividers:
        match_count = len(divider.findall(text))
        if match_count == 0:
            continue

        parts = [
            split_definition_text(part, dividers)
            for part in divider.split(text)
            if part.strip()
        ]
        if not parts:
            break
        if len(parts) == 1:
            return parts[0]

        header = ""
        if len(parts) > match_count and isinstance(parts[0], str):
            header = parts.pop(0)
        return DefinitionList(header, parts)

    return text.strip().replace("\n", "<br>")


def process_definition(writing: str, reading: str, definition: Definition) -> Optional[Definition]:
    """
    Clean up a raw definition.

    Returns None if nothing is left of it.
    """
    if isinstance(definition, DefinitionList):
        items = [
            processed for processed in (
                process_definition(writing, reading, d) for d in definition.items
            )
            if processed is not None
        ]
        if not items:
            return None
        if not definition.header.strip() and len(items) == 1:
            return items[0]
        return DefinitionList(definition.header, items)

    text = definition

    # English-Japanese definitions from native Japanese dictionaries.
    if "英和" in text and "英和" not in writing:
        return None

    # If the first of several lines contains the word itself, it is most
    # likely a repeated entry header.
    header_index = text.find(writing)
    if header_index < 0:
        header_index = text.find(reading)
    line_break = text.find("\n")
    if 0 <= header_index < line_break and line_break + 1 < len(text):
        text = text[line_break + 1:]

    return split_definition_text(text)


# ============================================================================
# Archive Parsing
# ============================================================================

def _read_json(zip_in: zipfile.ZipFile, name: str):
    try:
        return json.loads(zip_in.read(name).decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedInputError(f"Invalid JSON in {name}: {e}") from e


def _read_bank(zip_in: zipfile.ZipFile, name: str) -> List[list]:
    """
    Read a term or kanji bank: a JSON array of arrays.

    Raises:
        MalformedInputError: If the bank or one of its items isn't an array
    """
    bank = _read_json(zip_in, name)
    if not isinstance(bank, list):
        raise MalformedInputError(f"Expected a JSON array in {name}")
    for item in bank:
        if not isinstance(item, list):
            raise MalformedInputError(f"Expected an array entry in {name}, got {item!r}")
    return bank


def _split_words(text: str) -> List[str]:
    return [s.strip() for s in text.split(" ") if s.strip()]


def dictionary_title(index: dict) -> str:
    """Lowercase title without any parenthesised suffix."""
    return index["title"].lower().split("(")[0].strip()


def parse_term(item: list, dict_name: str) -> TermRecord:
    tags = sorted(set(_split_words(item[2]) + _split_words(item[7])))
    # Structured-content glossary items aren't supported yet and are skipped.
    glossary = "; ".join(d.strip() for d in item[5] if isinstance(d, str))
    return TermRecord(
        dict_name=dict_name,
        writing=item[0].strip(),
        reading=item[1].strip(),
        definitions=DefinitionList("", [glossary]),
        inflection=InflectionType.from_rule(item[3]),
        tags=tags,
        commonness=int(item[4]),
    )


def parse_kanji(item: list, dict_name: str) -> KanjiRecord:
    return KanjiRecord(
        dict_name=dict_name,
        kanji=item[0].strip(),
        onyomi=_split_words(item[1]),
        kunyomi=_split_words(item[2]),
        meanings=[m.strip() for m in item[4] if m.strip()],
    )


def parse(path: Path) -> Tuple[List[TermRecord], List[TermRecord], List[KanjiRecord]]:
    """
    Parse a zipped Yomichan dictionary.

    Term entries with the same writing and reading are merged into one.

    Returns:
        Tuple of (words, names, kanji)

    Raises:
        MalformedInputError: If the archive isn't a supported Yomichan
            dictionary
    """
    path = Path(path)
    try:
        zip_in = zipfile.ZipFile(path)
    except zipfile.BadZipFile as e:
        raise MalformedInputError(f"Not a zip archive: {path}") from e

    with zip_in:
        try:
            index = _read_json(zip_in, "index.json")
        except KeyError:
            raise MalformedInputError(f"Yomichan dictionary has no index.json: {path}")

        if not isinstance(index, dict):
            raise MalformedInputError(f"Yomichan index.json is not an object: {path}")

        version = index.get("format", index.get("version"))
        if version != SUPPORTED_FORMAT:
            raise MalformedInputError(
                f"Unsupported Yomichan format version {version!r} in {path}"
            )

        try:
            title = dictionary_title(index)
        except (KeyError, AttributeError) as e:
            raise MalformedInputError(f"Yomichan index has no valid title: {path}") from e
        is_name_dict = title in NAME_DICTIONARIES

        terms: Dict[Tuple[str, str], TermRecord] = {}
        names: List[TermRecord] = []
        kanji: List[KanjiRecord] = []

        for filename in sorted(zip_in.namelist()):
            if not filename.endswith(".json"):
                continue
            try:
                if filename.startswith("term_bank_"):
                    for item in _read_bank(zip_in, filename):
                        term = parse_term(item, title)
                        if is_name_dict:
                            names.append(term)
                        else:
                            _merge_term(terms, term)
                elif filename.startswith("kanji_bank_"):
                    for item in _read_bank(zip_in, filename):
                        kanji.append(parse_kanji(item, title))
            except (IndexError, KeyError, TypeError, AttributeError, ValueError) as e:
                raise MalformedInputError(f"Unexpected entry layout in {filename}: {e}") from e

    words = sorted(terms.values(), key=lambda t: (t.writing, t.reading))
    return words, names, kanji


def _merge_term(terms: Dict[Tuple[str, str], TermRecord], term: TermRecord):
    key = (term.writing, term.reading)
    merged = terms.get(key)
    if merged is None:
        merged = TermRecord(
            dict_name=term.dict_name,
            writing=term.writing,
            reading=term.reading,
            definitions=DefinitionList("", []),
            inflection=term.inflection,
            commonness=term.commonness,
        )
        terms[key] = merged

    for definition in term.definitions.items:
        processed = process_definition(term.writing, term.reading, definition)
        if processed is not None:
            merged.definitions.items.append(processed)
    merged.tags = sorted(set(merged.tags) | set(term.tags))


# ============================================================================
# Look-up Tables
# ============================================================================

def load_tables(paths: Sequence[Path]) -> Tuple[TermTable, TermTable, KanjiTable]:
    """
    Parse Yomichan dictionaries into look-up tables.

    Words and names are keyed by (writing, katakana reading), kanji by the
    character. Entries without a writing use their reading as the writing.

    Returns:
        Tuple of (term table, name table, kanji table)
    """
    term_table: TermTable = {}
    name_table: TermTable = {}
    kanji_table: KanjiTable = {}

    for path in paths:
        words, names, kanji = parse(path)

        for term in words:
            reading = normalize_reading(term.reading)
            writing = term.writing.strip()
            if not writing:
                key = (term.reading.strip(), reading)
            elif not reading and is_all_kana(writing):
                key = (writing, hiragana_to_katakana(writing))
            else:
                key = (writing, reading)
            term_table.setdefault(key, []).append(term)

        for name in names:
            reading = normalize_reading(name.reading)
            writing = name.writing.strip() or name.reading.strip()
            name_table.setdefault((writing, reading), []).append(name)

        for record in kanji:
            kanji_table.setdefault(record.kanji, []).append(record)

        logger.info(f"{path} entries: {len(words) + len(names) + len(kanji)}")

    return term_table, name_table, kanji_table
