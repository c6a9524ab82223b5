"""
ja-dictgen: Japanese dictionary builder for e-readers.

Merges JMdict, pitch accent data and Yomichan dictionaries into offline
dictionaries for Kobo e-readers or StarDict-compatible viewers. Every word
gets look-up keys for its writings, readings and basic conjugations, so
tapping an inflected word still finds the dictionary form.

Basic Usage:
    import ja_dictgen

    entries = ja_dictgen.build_entries(
        jmdict_path="JMdict_e.xml.gz",
        yomichan_paths=["jmdict_english.zip"],
    )
    ja_dictgen.write_dictionary(entries, "dicthtml-ja-en.zip", fmt="kobo")
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

__version__ = "0.1.0"


# =============================================================================
# Entry Data Structure
# =============================================================================

@dataclass(slots=True)
class Entry:
    """
    One output dictionary record.

    Attributes:
        keys: (look-up string, priority) pairs. Lower priority values rank
            first; priority 0 is only used by kanji entries.
        definition: Pre-rendered HTML definition
    """
    keys: List[Tuple[str, int]] = field(default_factory=list)
    definition: str = ""

    def __repr__(self) -> str:
        first = self.keys[0][0] if self.keys else None
        return f"Entry({first!r}, keys={len(self.keys)})"


# =============================================================================
# Exceptions
# =============================================================================

class DictGenError(Exception):
    """Base class for fatal dictionary building errors."""
    pass


class MalformedInputError(DictGenError):
    """Raised when a source file has invalid encoding or structure."""
    pass


class TrieBuildError(DictGenError):
    """Raised when the Kobo word trie can't be built."""
    pass


# =============================================================================
# Main API
# =============================================================================

PathLike = Union[str, Path]


def build_entries(
    jmdict_path: PathLike,
    pitch_accent_path: Optional[PathLike] = None,
    yomichan_paths: Sequence[PathLike] = (),
    settings=None,
) -> List[Entry]:
    """
    Load every source and build the sorted entry list.

    Args:
        jmdict_path: JMdict XML file (optionally gzip-compressed)
        pitch_accent_path: Pitch accent TSV file, or None to skip
        yomichan_paths: Zipped Yomichan dictionaries
        settings: EntrySettings, defaults used if None

    Returns:
        Entries sorted by the UTF-8 byte length of their first key

    Raises:
        MalformedInputError: If any source is malformed
    """
    from ja_dictgen.entries import EntrySettings, build_word_table, generate_entries
    from ja_dictgen.jmdict import parse_jmdict
    from ja_dictgen.pitch_accent import load_pitch_accents
    from ja_dictgen.yomichan import load_tables

    if settings is None:
        settings = EntrySettings()

    word_table = build_word_table(parse_jmdict(Path(jmdict_path)))
    pitch_table = load_pitch_accents(Path(pitch_accent_path)) if pitch_accent_path else {}
    term_table, name_table, kanji_table = load_tables([Path(p) for p in yomichan_paths])

    return generate_entries(
        term_table, name_table, kanji_table, word_table, pitch_table, settings,
    )


def write_dictionary(entries: List[Entry], output_path: PathLike, fmt: str = "kobo") -> Path:
    """
    Write entries to a dictionary archive.

    Args:
        entries: Entries from build_entries()
        output_path: Archive path to create
        fmt: "kobo" or "stardict"

    Returns:
        The written path
    """
    from ja_dictgen.output import write_dictionary as _write
    return _write(entries, Path(output_path), fmt)


def get_version() -> str:
    """Get the library version."""
    return __version__


# =============================================================================
# Module-level exports
# =============================================================================

__all__ = [
    # Data classes
    "Entry",
    # API
    "build_entries",
    "write_dictionary",
    "get_version",
    # Exceptions
    "DictGenError",
    "MalformedInputError",
    "TrieBuildError",
    # Version
    "__version__",
]
