"""
StarDict dictionary output.

Writes a zip containing a <name>/ directory with the three StarDict files:
- <name>.dict: every definition, concatenated
- <name>.idx: sorted (key, offset, length) records pointing into .dict
- <name>.ifo: metadata
"""

import functools
import logging
import struct
from pathlib import Path
from typing import List, Tuple

from ja_dictgen import Entry
from ja_dictgen.archive import open_archive

logger = logging.getLogger(__name__)

# Longest key, in bytes, that the .idx format allows.
MAX_KEY_BYTES = 255

# Big-endian u32 offset + u32 length after each zero-terminated key.
IDX_RECORD_FORMAT = ">II"


def stardict_strcmp(a: str, b: str) -> int:
    """
    StarDict's key comparison.

    ASCII case-insensitive first, case-sensitive when that is equal.
    Returns a negative, zero or positive number like C's strcmp.
    """
    a_lower = _ascii_lower(a)
    b_lower = _ascii_lower(b)
    if a_lower != b_lower:
        return -1 if a_lower < b_lower else 1
    if a != b:
        return -1 if a < b else 1
    return 0


def _ascii_lower(text: str) -> str:
    return ''.join(c.lower() if c.isascii() else c for c in text)


def sorted_keys(entries: List[Entry]) -> List[Tuple[str, int, int]]:
    """
    Every key of every entry as (key, weight, entry index), in .idx order.

    Ties between equal keys are broken by weight (inverted priority) and
    then by entry order.
    """
    top = max((p for e in entries for _, p in e.keys), default=0)
    keys = [
        (key, top - priority, index)
        for index, entry in enumerate(entries)
        for key, priority in entry.keys
    ]

    def compare(a, b):
        result = stardict_strcmp(a[0], b[0])
        if result != 0:
            return result
        return (a[1:] > b[1:]) - (a[1:] < b[1:])

    keys.sort(key=functools.cmp_to_key(compare))
    return keys


def build_dict_data(entries: List[Entry]) -> Tuple[bytes, List[Tuple[int, int]]]:
    """Concatenated definitions and the (offset, length) of each."""
    data = bytearray()
    offsets = []
    for entry in entries:
        start = len(data)
        data.extend(entry.definition.encode("utf-8"))
        offsets.append((start, len(data) - start))
    return bytes(data), offsets


def build_idx_data(
    keys: List[Tuple[str, int, int]],
    offsets: List[Tuple[int, int]],
) -> Tuple[bytes, int]:
    """
    The .idx file contents and its record count.

    Keys longer than MAX_KEY_BYTES are left out. Their entries stay
    reachable through their other keys.
    """
    data = bytearray()
    count = 0
    for key, _, entry_index in keys:
        key_bytes = key.encode("utf-8")
        if len(key_bytes) > MAX_KEY_BYTES:
            logger.debug(f"Skipping over-long key: {key[:20]}...")
            continue
        offset, length = offsets[entry_index]
        data.extend(key_bytes)
        data.append(0)
        data.extend(struct.pack(IDX_RECORD_FORMAT, offset, length))
        count += 1
    return bytes(data), count


def build_ifo_text(dict_name: str, word_count: int, idx_size: int) -> str:
    return (
        "StarDict's dict ifo file\n"
        "version=3.0.0\n"
        f"bookname={dict_name}\n"
        f"wordcount={word_count}\n"
        f"idxfilesize={idx_size}\n"
        "sametypesequence=h\n"
        "lang=ja-en\n"
    )


def write_dictionary(entries: List[Entry], output_path: Path) -> Path:
    """Write a zipped StarDict dictionary named after the output file."""
    dict_name = Path(output_path).stem

    keys = sorted_keys(entries)
    dict_data, offsets = build_dict_data(entries)
    idx_data, idx_count = build_idx_data(keys, offsets)
    ifo_text = build_ifo_text(dict_name, idx_count, len(idx_data))

    logger.info(f"StarDict index: {idx_count} of {len(keys)} keys")

    base_path = f"{dict_name}/{dict_name}"
    with open_archive(output_path) as zip_out:
        zip_out.writestr(f"{base_path}.dict", dict_data)
        zip_out.writestr(f"{base_path}.idx", idx_data)
        zip_out.writestr(f"{base_path}.ifo", ifo_text.encode("utf-8"))

    return output_path
