"""
Zip archive output shared by the dictionary writers.
"""

import logging
import os
import tempfile
import zipfile
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


@contextmanager
def open_archive(output_path: Path):
    """
    Open a zip archive for writing, all or nothing.

    The archive is written to a temporary file in the target directory and
    only moved into place when the block finishes without an exception.

    Example:
        >>> with open_archive(Path("out.zip")) as zip_out:
        ...     zip_out.writestr("words", b"...")
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=output_path.name + ".", suffix=".tmp", dir=output_path.parent,
    )
    os.close(fd)
    tmp_path = Path(tmp_name)

    try:
        with zipfile.ZipFile(tmp_path, "w", compression=zipfile.ZIP_DEFLATED) as zip_out:
            yield zip_out
        os.replace(tmp_path, output_path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()

    file_size = output_path.stat().st_size / (1024 * 1024)
    logger.info(f"Saved dictionary to {output_path} ({file_size:.1f} MB)")
