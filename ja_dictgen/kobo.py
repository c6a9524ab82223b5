"""
Kobo dictionary output.

A Kobo dictionary is a zip file containing:
- words: a marisa trie of every look-up key, used for prefix search
- words.original: the same keys as "key<TAB>weight" lines
- <prefix>.html: gzip-compressed HTML with the definitions of every key
  starting with that prefix

See https://pgaskin.net/dictutil/dicthtml/ for details of the format.
"""

import gzip
import html
import logging
from pathlib import Path
from typing import Dict, List, Tuple

import marisa_trie

from ja_dictgen import Entry, TrieBuildError
from ja_dictgen.archive import open_archive

logger = logging.getLogger(__name__)

# Prefix file used for anything that doesn't get its own.
FALLBACK_PREFIX = "11"

# (key, definition, priority)
ShardItem = Tuple[str, str, int]


# ============================================================================
# Words List
# ============================================================================

def max_priority(entries: List[Entry]) -> int:
    """Largest key priority over all entries."""
    return max((priority for e in entries for _, priority in e.keys), default=0)


def word_weights(entries: List[Entry]) -> List[Tuple[str, int]]:
    """
    Every distinct key with its trie weight, sorted.

    The weight is inverted from the priority, so the most relevant entries
    have the highest weight. A key used by several entries takes the best
    one.
    """
    top = max_priority(entries)
    weights: Dict[str, int] = {}
    for entry in entries:
        for key, priority in entry.keys:
            weights[key] = max(weights.get(key, 0), top - priority)
    return sorted(weights.items())


def words_original_text(words: List[Tuple[str, int]]) -> str:
    return "".join(f"{key}\t{weight}\n" for key, weight in words)


def build_words_trie(words: List[Tuple[str, int]]) -> bytes:
    """
    Build the marisa trie stored as the "words" file.

    Raises:
        TrieBuildError: If marisa fails to build the trie
    """
    keys = [key for key, _ in words]
    weights = [float(weight) for _, weight in words]
    try:
        trie = marisa_trie.Trie(keys, weights=weights)
        return trie.tobytes()
    except Exception as e:
        raise TrieBuildError(f"Failed to build the words trie: {e}") from e


# ============================================================================
# Prefix Shards
# ============================================================================

def _is_cyrillic_or_kana(code: int) -> bool:
    return (
        0x0400 <= code <= 0x052F
        or 0x2DE0 <= code <= 0x2DFF
        or 0xA640 <= code <= 0xA69F
        or 0x3040 <= code <= 0x30FF
    )


def _is_cjk(code: int) -> bool:
    return 0x3400 <= code <= 0x4DBF or 0x4E00 <= code <= 0x9FFF


def dictionary_prefix(key: str) -> str:
    """
    Name of the html file that holds a key's definitions.

    Kana and Cyrillic keys use their first two characters, kanji their first
    character, letters their first two letters (padded with "a" for
    one-letter keys). Everything else goes to the fallback file.

    Combining characters aren't handled, which is fine for Japanese.
    """
    prefix = key.lower().strip()[:2]
    if not prefix:
        return FALLBACK_PREFIX

    code = ord(prefix[0])
    if _is_cyrillic_or_kana(code):
        return prefix
    if _is_cjk(code):
        return prefix[0]
    if prefix[0].isalpha():
        if len(prefix) == 1:
            return prefix + "a"
        if prefix[1].isalpha():
            return prefix
    return FALLBACK_PREFIX


def merge_shard_items(items: List[ShardItem]) -> List[ShardItem]:
    """
    Merge items with the same key and order them for display.

    Kobo often shows only one of several exact matches, so definitions of
    identical keys are concatenated and the best priority kept. The result
    is sorted by priority, then longest definition first.
    """
    merged: List[ShardItem] = []
    for key, definition, priority in sorted(items, key=lambda i: (i[0], i[2])):
        if merged and merged[-1][0] == key:
            prev_key, prev_definition, prev_priority = merged[-1]
            merged[-1] = (prev_key, prev_definition + definition, min(prev_priority, priority))
        else:
            merged.append((key, definition, priority))

    merged.sort(key=lambda i: (i[2], -len(i[1])))
    return merged


def shard_entries(entries: List[Entry]) -> Dict[str, List[ShardItem]]:
    """Distribute every (key, definition) pair into its prefix file."""
    shards: Dict[str, List[ShardItem]] = {}
    for entry in entries:
        for key, priority in entry.keys:
            shards.setdefault(dictionary_prefix(key), []).append(
                (key, entry.definition, priority)
            )
    return {prefix: merge_shard_items(items) for prefix, items in shards.items()}


def shard_html(items: List[ShardItem]) -> bytes:
    """Gzip-compressed html for one prefix file."""
    parts = ['<?xml version="1.0" encoding="utf-8"?><html>']
    for key, definition, _ in items:
        parts.append(f'<w><p><a name="{html.escape(key)}" />{definition}</p></w>')
    parts.append("</html>")
    return gzip.compress("".join(parts).encode("utf-8"), compresslevel=1, mtime=0)


# ============================================================================
# Writing
# ============================================================================

def write_dictionary(entries: List[Entry], output_path: Path) -> Path:
    """
    Write a Kobo dictionary zip.

    Every entry must already be in the list: the trie weights and the
    prefix files depend on all of them.

    Raises:
        TrieBuildError: If the words trie can't be built. Nothing is written.
    """
    words = word_weights(entries)
    logger.info(f"Kobo words list: {len(words)} unique keys")

    words_original = words_original_text(words)
    words_trie = build_words_trie(words)

    shards = shard_entries(entries)
    logger.info(f"Kobo prefix files: {len(shards)}")

    with open_archive(output_path) as zip_out:
        zip_out.writestr("words", words_trie)
        zip_out.writestr("words.original", words_original.encode("utf-8"))
        for prefix in sorted(shards):
            zip_out.writestr(f"{prefix}.html", shard_html(shards[prefix]))

    return output_path
