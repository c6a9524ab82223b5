"""
CLI interface for ja-dictgen.

Usage:
    ja-dictgen dicthtml-ja-en.zip --jmdict JMdict_e.xml.gz -y jmdict_english.zip
    ja-dictgen ja-en.zip --format stardict --jmdict JMdict_e.xml.gz -p accents.tsv
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from ja_dictgen import DictGenError, __version__, build_entries, write_dictionary
from ja_dictgen.entries import EntrySettings, LangMode
from ja_dictgen.output import OUTPUT_FORMATS

logger = logging.getLogger("ja_dictgen")

DEFAULT_JMDICT = Path("dictionaries") / "JMdict_e.xml.gz"
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ja-dictgen",
        description="Build Japanese dictionaries for Kobo e-readers and StarDict",
    )
    parser.add_argument(
        "output",
        type=Path,
        help="The output filepath to write the new dictionary to",
    )
    parser.add_argument(
        "--jmdict",
        type=Path,
        default=DEFAULT_JMDICT,
        help=f"Path to the JMdict XML file, optionally gzipped (default: {DEFAULT_JMDICT})",
    )
    parser.add_argument(
        "--pitch-accent", "-p",
        type=Path,
        help="Path to a pitch accent file in .tsv format",
    )
    parser.add_argument(
        "--yomichan", "-y",
        type=Path,
        action="append",
        default=[],
        help="Path to a zipped Yomichan dictionary. Can be given several times",
    )
    parser.add_argument(
        "--format", "-f",
        choices=sorted(OUTPUT_FORMATS),
        default="kobo",
        help="Output dictionary format (default: kobo)",
    )
    parser.add_argument(
        "--katakana", "-k",
        action="store_true",
        help="Use katakana instead of hiragana for word pronunciation",
    )
    parser.add_argument(
        "--use-move-terms", "-m",
        action="store_true",
        help='Use "other-move" and "self-move" instead of "transitive" and "intransitive"',
    )
    parser.add_argument(
        "--use-japanese-terms", "-j",
        action="store_true",
        help='Use the Japanese terms for "verb", "transitive", etc. in entry headers',
    )
    parser.add_argument(
        "--no-inflections",
        action="store_true",
        help="Don't add look-up keys for conjugated forms",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug output",
    )
    verbosity.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only show warnings and errors",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"ja-dictgen {__version__}",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> EntrySettings:
    if args.use_japanese_terms:
        lang_mode = LangMode.JAPANESE
    elif args.use_move_terms:
        lang_mode = LangMode.ENGLISH_ALT
    else:
        lang_mode = LangMode.ENGLISH

    return EntrySettings(
        lang_mode=lang_mode,
        use_katakana_pronunciation=args.katakana,
        generate_inflection_keys=not args.no_inflections,
    )


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)

    start_time = time.time()

    try:
        entries = build_entries(
            jmdict_path=args.jmdict,
            pitch_accent_path=args.pitch_accent,
            yomichan_paths=args.yomichan,
            settings=settings_from_args(args),
        )
        logger.info(f"Writing {args.format} dictionary to {args.output}...")
        write_dictionary(entries, args.output, fmt=args.format)
    except FileNotFoundError as e:
        logger.error(f"File not found: {e.filename or e}")
        sys.exit(1)
    except DictGenError as e:
        logger.error(str(e))
        sys.exit(1)

    elapsed = time.time() - start_time
    logger.info(f"Build completed in {elapsed:.1f} seconds")


if __name__ == "__main__":
    main()
