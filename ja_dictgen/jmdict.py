"""
JMdict XML parsing.

Streams JMdict (or JMnedict) XML with lxml and yields one WordRecord per
<entry>, with its writings, readings, conjugation class, part of speech,
priority and tags.
"""

import gzip
import logging
import re
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from lxml import etree

from ja_dictgen import MalformedInputError
from ja_dictgen.constants import (
    GODAN_ENTITIES,
    GODAN_LETTERS,
    POS_ENTITIES,
    UNKNOWN_PRIORITY,
    ConjugationClass,
    PartOfSpeech,
    combine_conj,
    combine_pos,
)
from ja_dictgen.raw_types import WordRecord

logger = logging.getLogger(__name__)

XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"

# Elements whose entity values are kept as "element:entity" tags.
TAG_ELEMENTS = ("pos", "misc", "dial", "field")


# ============================================================================
# Helpers
# ============================================================================

def _open(path: Path):
    if path.suffix == ".gz":
        return gzip.open(path, "rb")
    return open(path, "rb")


def parse_entity_definitions(path: Path) -> Dict[str, str]:
    """
    Map expanded entity values back to their names.

    lxml expands "&v1;" into its description, so the DTD at the top of the
    file is read to turn e.g. "Ichidan verb" back into "v1".
    """
    content = b""
    with _open(path) as f:
        for line in f:
            content += line
            if b"]>" in line:
                break

    replacements = {}
    pattern = rb'<!ENTITY\s+([\w-]+)\s+"([^"]*)"\s*>'
    for match in re.finditer(pattern, content):
        try:
            name = match.group(1).decode("utf-8")
            value = match.group(2).decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedInputError(f"Invalid UTF-8 in DTD of {path}: {e}") from e
        if name not in ("lt", "gt", "amp", "apos", "quot"):
            replacements[value] = name
    return replacements


def node_text(elem) -> str:
    """Get all text from element."""
    return "".join(elem.itertext())


def tag_priority(tag: str) -> int:
    """
    Commonness score of one ke_pri / re_pri tag.

    nfXX tags give the word-frequency rank in 500-word bands; the other
    tags only say which list the word appears in.
    """
    if tag.startswith("nf"):
        try:
            return max(int(tag[2:]) - 1, 0) * 500
        except ValueError:
            raise MalformedInputError(f"Invalid frequency tag: {tag!r}")
    if tag in ("news1", "ichi1", "gai1"):
        return 6000
    if tag in ("news2", "ichi2", "gai2"):
        return 18000
    return 24000


def calculate_priority(tags: List[str]) -> int:
    """
    Average the scores of a word's priority tags.

    Each score is clamped to UNKNOWN_PRIORITY. Words without tags get
    UNKNOWN_PRIORITY.
    """
    if not tags:
        return UNKNOWN_PRIORITY
    scores = [min(tag_priority(tag), UNKNOWN_PRIORITY) for tag in tags]
    return sum(scores) // len(scores)


def classify_pos(entity: str):
    """
    Part of speech and conjugation class for a pos entity.

    Either may be None when the entity says nothing about it.
    """
    if entity in POS_ENTITIES:
        return POS_ENTITIES[entity]
    if entity in GODAN_ENTITIES:
        return PartOfSpeech.VERB, GODAN_LETTERS[entity[2]]
    return None, None


# ============================================================================
# Entry Parsing
# ============================================================================

def parse_entry(elem, entities: Dict[str, str]) -> Optional[WordRecord]:
    """
    Build a WordRecord from one <entry> element.

    Returns None for entries without any reading.
    """
    def entity(text: str) -> str:
        text = text.strip()
        if text.startswith("&") and text.endswith(";"):
            return text[1:-1]
        return entities.get(text, text)

    writings = [node_text(keb) for keb in elem.iterfind("k_ele/keb")]
    readings = [node_text(reb) for reb in elem.iterfind("r_ele/reb")]
    if not readings:
        return None

    kanji_priorities = [node_text(p).strip() for p in elem.iterfind("k_ele/ke_pri")]
    kana_priorities = [node_text(p).strip() for p in elem.iterfind("r_ele/re_pri")]

    conj = ConjugationClass.OTHER
    pos = PartOfSpeech.UNKNOWN
    usually_kana = False
    tags = set()
    definitions = []

    for sense in elem.iterfind("sense"):
        for child in sense:
            if child.tag in TAG_ELEMENTS:
                name = entity(node_text(child))
                tags.add(f"{child.tag}:{name}")
                if child.tag == "misc" and name == "uk":
                    usually_kana = True
                elif child.tag == "pos":
                    new_pos, new_conj = classify_pos(name)
                    if new_pos is not None:
                        pos = combine_pos(pos, new_pos)
                    if new_conj is not None:
                        conj = combine_conj(conj, new_conj)

        # Only English glosses.
        glosses = [
            node_text(g).strip() for g in sense.iterfind("gloss")
            if g.get(XML_LANG, "eng") == "eng"
        ]
        glosses = [g for g in glosses if g]
        if glosses:
            definitions.append("; ".join(glosses))

    # JMnedict entries.
    if elem.find("trans/name_type") is not None:
        pos = combine_pos(pos, PartOfSpeech.NOUN)

    # JMdict doesn't always mark kana-only words as usually kana.
    if not writings:
        usually_kana = True

    priority = calculate_priority(kana_priorities if usually_kana else kanji_priorities)

    return WordRecord(
        writings=tuple(writings),
        readings=tuple(readings),
        conj=conj,
        pos=pos,
        usually_kana=usually_kana,
        priority=priority,
        tags=frozenset(tags),
        definitions=tuple(definitions),
    )


def parse_jmdict(path: Path) -> Iterator[WordRecord]:
    """
    Stream WordRecords from a JMdict XML file.

    Args:
        path: JMdict XML, optionally gzip-compressed (.gz)

    Raises:
        FileNotFoundError: If the file doesn't exist
        MalformedInputError: If the XML is not well-formed or not UTF-8
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"JMdict file not found: {path}")

    logger.info("Parsing entity definitions...")
    entities = parse_entity_definitions(path)

    logger.info(f"Parsing JMdict entries from {path}...")
    count = 0
    with _open(path) as f:
        context = etree.iterparse(
            f,
            events=("end",),
            tag="entry",
            load_dtd=True,
            no_network=True,
            huge_tree=True,
        )
        try:
            for _, elem in context:
                record = parse_entry(elem, entities)
                if record is not None:
                    count += 1
                    if count % 50000 == 0:
                        logger.info(f"  Parsed {count} entries...")
                    yield record
                else:
                    logger.debug("Skipping entry without readings")

                elem.clear()
                while elem.getprevious() is not None:
                    del elem.getparent()[0]
        except etree.XMLSyntaxError as e:
            raise MalformedInputError(f"Invalid JMdict XML in {path}: {e}") from e

    logger.info(f"Parsed {count} JMdict entries")
