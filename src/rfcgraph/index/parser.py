from __future__ import annotations

import logging
from typing import Iterator

from .record import Record, parse_record


logger = logging.getLogger(__name__)

# Appears once in the table of contents and once above the real listing.
HEADER_MARKER = "RFC INDEX"
HEADER_MARKER_COUNT = 2


def iter_blocks(raw: str) -> Iterator[list[str]]:
    """Yield the raw lines of each entry, one list per blank-line separated run."""
    lines = iter(raw.splitlines())

    markers = 0
    for line in lines:
        if HEADER_MARKER in line:
            markers += 1
            next(lines, None)  # underline
            if markers == HEADER_MARKER_COUNT:
                break
    if markers < HEADER_MARKER_COUNT:
        logger.warning("Index header not found (saw %d of %d markers)", markers, HEADER_MARKER_COUNT)
        return

    block: list[str] = []
    for line in lines:
        if line.strip():
            block.append(line)
            continue
        if block:
            yield block
            block = []

    if block:
        yield block


def parse_index(raw: str) -> dict[int, Record]:
    """Parse the full index text into {number: Record}.

    "Not Issued" entries are dropped. RecordParseError from a malformed entry
    propagates; no partial directory is returned.
    """
    directory: dict[int, Record] = {}
    blocks = 0
    not_issued = 0

    for block in iter_blocks(raw):
        blocks += 1
        rec = parse_record(block)
        if rec is None:
            not_issued += 1
            continue
        directory[rec.number] = rec

    logger.debug("Parsed %d blocks: %d records, %d not issued", blocks, len(directory), not_issued)
    return directory
