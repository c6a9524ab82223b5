"""
Output format selection.
"""

from pathlib import Path
from typing import Callable, Dict, List

from ja_dictgen import Entry
from ja_dictgen import kobo, stardict

# format name -> writer(entries, output_path)
OUTPUT_FORMATS: Dict[str, Callable[[List[Entry], Path], Path]] = {
    "kobo": kobo.write_dictionary,
    "stardict": stardict.write_dictionary,
}


def write_dictionary(entries: List[Entry], output_path: Path, fmt: str) -> Path:
    """
    Write entries with the writer for the given format.

    Raises:
        ValueError: If the format is unknown
    """
    try:
        writer = OUTPUT_FORMATS[fmt]
    except KeyError:
        raise ValueError(
            f"Unknown output format {fmt!r}, expected one of {sorted(OUTPUT_FORMATS)}"
        )
    return writer(entries, output_path)
