"""
Pitch accent table loading.

The table is a TSV file with one word per line:

    writing<TAB>reading<TAB>accents

where accents is a list of mora positions such as "0" or "1,3". The reading
column is empty for words written in kana.
"""

import gzip
import logging
import re
from pathlib import Path
from typing import Dict, List, Tuple

from ja_dictgen import MalformedInputError
from ja_dictgen.characters import hiragana_to_katakana, is_all_kana

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"\d+")


def parse_pitch_accent_line(line: str) -> Tuple[Tuple[str, str], List[int]]:
    """
    Parse one TSV line into ((writing, katakana reading), accents).

    Raises:
        MalformedInputError: If the line doesn't have three columns
    """
    parts = [part.strip() for part in line.split("\t")]
    if len(parts) != 3:
        raise MalformedInputError(f"Expected 3 columns in pitch accent line: {line!r}")

    writing, reading, accent_text = parts
    accents = [int(a) for a in _DIGITS.findall(accent_text)]

    if is_all_kana(writing) and not reading:
        return (writing, hiragana_to_katakana(writing)), accents
    return (writing, hiragana_to_katakana(reading)), accents


def load_pitch_accents(path: Path) -> Dict[Tuple[str, str], List[int]]:
    """
    Load a pitch accent TSV file, optionally gzip-compressed.

    Raises:
        FileNotFoundError: If the file doesn't exist
        MalformedInputError: If the file isn't UTF-8 or a line is malformed
    """
    path = Path(path)
    opener = gzip.open if path.suffix == ".gz" else open

    table: Dict[Tuple[str, str], List[int]] = {}
    try:
        with opener(path, "rt", encoding="utf-8") as f:
            for line in f:
                line = line.rstrip("\r\n")
                if not line.strip():
                    continue
                key, accents = parse_pitch_accent_line(line)
                table[key] = accents
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"Invalid UTF-8 in {path}: {e}") from e

    logger.info(f"Pitch accent entries: {len(table)}")
    return table
