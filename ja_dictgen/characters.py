"""
Kana classification and conversion.

All checks work on fixed Unicode codepoint ranges. Characters outside the
kana ranges pass through the converters unchanged.
"""

# ============================================================================
# Codepoint Ranges
# ============================================================================

HIRAGANA_START = 0x3041
HIRAGANA_END = 0x3096
COMBINING_MARKS = (0x3099, 0x309C)
HIRAGANA_ITERATION_MARKS = (0x309D, 0x309E)
KATAKANA_START = 0x30A1
KATAKANA_END = 0x30F6
PROLONGED_SOUND_MARK = 0x30FC
KATAKANA_ITERATION_MARKS = (0x30FD, 0x30FE)

# Hiragana is lower than katakana.
KANA_DIFF = KATAKANA_START - HIRAGANA_START


def _in(code: int, bounds) -> bool:
    return bounds[0] <= code <= bounds[1]


# ============================================================================
# Classification
# ============================================================================

def is_hiragana(char: str) -> bool:
    """Check if a single character is hiragana (marks included)."""
    code = ord(char)
    return (
        HIRAGANA_START <= code <= HIRAGANA_END
        or _in(code, COMBINING_MARKS)
        or _in(code, HIRAGANA_ITERATION_MARKS)
        or code == PROLONGED_SOUND_MARK
        or _in(code, KATAKANA_ITERATION_MARKS)
    )


def is_kana(char: str) -> bool:
    """Check if a single character is hiragana or katakana."""
    code = ord(char)
    return (
        HIRAGANA_START <= code <= HIRAGANA_END
        or _in(code, COMBINING_MARKS)
        or _in(code, HIRAGANA_ITERATION_MARKS)
        or KATAKANA_START <= code <= KATAKANA_END
        or code == PROLONGED_SOUND_MARK
        or _in(code, KATAKANA_ITERATION_MARKS)
    )


def is_all_kana(text: str) -> bool:
    """
    Check if text is entirely kana.

    The empty string counts as all-kana.
    """
    return all(is_kana(char) for char in text)


def is_all_hiragana(text: str) -> bool:
    """Check if text is entirely hiragana."""
    return all(is_hiragana(char) for char in text)


# ============================================================================
# Conversion
# ============================================================================

def hiragana_to_katakana(text: str) -> str:
    """
    Convert hiragana to katakana.

    Example:
        >>> hiragana_to_katakana("たべる")
        'タベル'
    """
    result = []
    for char in text:
        code = ord(char)
        if HIRAGANA_START <= code <= HIRAGANA_END or _in(code, HIRAGANA_ITERATION_MARKS):
            result.append(chr(code + KANA_DIFF))
        else:
            result.append(char)
    return ''.join(result)


def katakana_to_hiragana(text: str) -> str:
    """Convert katakana to hiragana."""
    result = []
    for char in text:
        code = ord(char)
        if KATAKANA_START <= code <= KATAKANA_END or _in(code, KATAKANA_ITERATION_MARKS):
            result.append(chr(code - KANA_DIFF))
        else:
            result.append(char)
    return ''.join(result)


def strip_non_kana(text: str) -> str:
    """Remove every character that isn't kana."""
    return ''.join(char for char in text if is_kana(char))


def normalize_reading(reading: str) -> str:
    """
    Reading in the form used to match records across sources.

    Katakana only, with punctuation and other non-kana dropped.
    """
    return strip_non_kana(hiragana_to_katakana(reading.strip()))
