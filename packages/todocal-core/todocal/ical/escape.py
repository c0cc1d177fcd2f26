"""
TEXT value escaping for iCalendar.

Backslash, semicolon, comma and newline are escaped on the way out;
the same sequences are expanded on the way in.
"""

import unicodedata

_KEEP_CONTROL = {"\t"}


def escape_text(text: str) -> str:
    """
    Escape text for use as an iCalendar TEXT value.

    Backslashes are escaped first so the sequences added by the later
    replacements are not escaped twice. Carriage returns, NULs and any
    other control character except tab are dropped.

    Args:
        text: Raw text

    Returns:
        Escaped text, safe to place after a property name
    """
    escaped = (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
        .replace("\r", "")
        .replace("\0", "")
    )
    return "".join(
        c for c in escaped
        if c in _KEEP_CONTROL or unicodedata.category(c) != "Cc"
    )


def unescape_text(text: str) -> str:
    """
    Expand escape sequences in an iCalendar TEXT value.

    Doubled backslashes are collapsed until none remain, so values that
    another producer escaped more than once still come back readable.

    Args:
        text: Escaped text

    Returns:
        Unescaped text
    """
    value = text
    while True:
        collapsed = value.replace("\\\\", "\\")
        if collapsed == value:
            break
        value = collapsed

    return (
        value.replace("\\n", "\n")
        .replace("\\N", "\n")
        .replace("\\;", ";")
        .replace("\\,", ",")
    )
