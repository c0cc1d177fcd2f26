"""
VTODO block scanner.

Splits calendar text into the property lines of each VTODO record.
"""

from typing import Iterator, List, Optional

from todocal.ical.events import BLOCK_UNTERMINATED, CodecObserver, notify

BEGIN_MARKER = "BEGIN:VTODO"
END_MARKER = "END:VTODO"


def split_lines(text: str) -> List[str]:
    """Split on LF, dropping the CR of CRLF endings."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def iter_blocks(text: str, observer: Optional[CodecObserver] = None) -> Iterator[List[str]]:
    """
    Yield the lines of each complete VTODO block.

    A block is every line strictly between a BEGIN:VTODO line and the next
    END:VTODO line. Markers are compared after stripping whitespace.
    A BEGIN:VTODO that is never closed is not yielded; the observer is told
    about it instead.

    Args:
        text: Raw calendar text
        observer: Optional event observer

    Yields:
        Lists of raw property lines, in input order
    """
    current: Optional[List[str]] = None
    opened_at = 0

    for number, line in enumerate(split_lines(text), start=1):
        marker = line.strip()
        if current is None:
            if marker == BEGIN_MARKER:
                current = []
                opened_at = number
            continue

        if marker == END_MARKER:
            yield current
            current = None
        else:
            current.append(line)

    if current is not None:
        notify(
            observer,
            BLOCK_UNTERMINATED,
            f"VTODO opened at line {opened_at} is never closed, dropping {len(current)} lines",
            line=opened_at,
            lines=len(current),
        )


def count_blocks(text: str) -> int:
    """
    Count VTODO blocks without building them.

    After each BEGIN:VTODO the scan skips to the next END:VTODO, so a begin
    marker inside an open block is not counted. A trailing block that is
    never closed still counts, so the result can be higher than the number
    of blocks iter_blocks() yields.
    """
    count = 0
    in_block = False
    for line in split_lines(text):
        marker = line.strip()
        if not in_block and marker == BEGIN_MARKER:
            count += 1
            in_block = True
        elif in_block and marker == END_MARKER:
            in_block = False
    return count
