from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Sequence


logger = logging.getLogger(__name__)

RFC_URL = "https://www.rfc-editor.org/rfc/rfc{number}"

NOT_ISSUED = "Not Issued"

MONTHS = {
    "January": 1,
    "February": 2,
    "March": 3,
    "April": 4,
    "May": 5,
    "June": 6,
    "July": 7,
    "August": 8,
    "September": 9,
    "October": 10,
    "November": 11,
    "December": 12,
}

_WS_RE = re.compile(r"\s+")
_HEADER_RE = re.compile(r"\s*(\d+) (.*)")
# Annotation clauses are never nested in the index.
_CLAUSE_RE = re.compile(r"\((.*?)\)")

# Clause prefix -> Record field. "Obsoletes " must not shadow "Obsoleted by ".
_RELATION_PREFIXES = (
    ("Obsoletes ", "obsoletes"),
    ("Obsoleted by ", "obsoleted_by"),
    ("Updates ", "updates"),
    ("Updated by ", "updated_by"),
)


class RecordParseError(ValueError):
    """A record block does not start with '<number> <title>'."""

    def __init__(self, block: str):
        super().__init__(f"invalid record: {block!r}")
        self.block = block


@dataclass(frozen=True)
class Record:
    number: int
    title: str
    published: int  # year * 100 + month, 0 when unknown
    updates: tuple[int, ...] = ()
    updated_by: tuple[int, ...] = ()
    obsoletes: tuple[int, ...] = ()
    obsoleted_by: tuple[int, ...] = ()

    @property
    def year(self) -> str:
        return str(self.published)[:4]

    @property
    def url(self) -> str:
        return RFC_URL.format(number=self.number)


def parse_record(lines: Sequence[str]) -> Record | None:
    """Parse one index entry (its raw, possibly wrapped lines).

    Returns None for "Not Issued" placeholders. Raises RecordParseError when the
    first fragment has no leading number.
    """
    # Entries end with "<period><space>"; editors often strip the trailing space.
    joined = _WS_RE.sub(" ", " ".join(lines) + " ")
    fragments = joined.split(". ")

    m = _HEADER_RE.fullmatch(fragments[0])
    if not m:
        raise RecordParseError("".join(lines))

    number = int(m.group(1))
    title = m.group(2)
    if title == NOT_ISSUED:
        return None

    published = _parse_published(fragments[-2] if len(fragments) >= 2 else "")
    if not published:
        logger.debug("RFC%d: no publication date in %r", number, joined)

    relations: dict[str, tuple[int, ...]] = {name: () for _, name in _RELATION_PREFIXES}
    for clause in _CLAUSE_RE.findall(fragments[-1]):
        for prefix, name in _RELATION_PREFIXES:
            if clause.startswith(prefix):
                # Last clause of a kind wins.
                relations[name] = _parse_refs(clause[len(prefix):])
                break

    return Record(
        number=number,
        title=title,
        published=published,
        updates=relations["updates"],
        updated_by=relations["updated_by"],
        obsoletes=relations["obsoletes"],
        obsoleted_by=relations["obsoleted_by"],
    )


def _parse_published(fragment: str) -> int:
    # "June 2022"; April 1st entries read "1 April 2020".
    toks = fragment.split(" ")
    if len(toks) < 2:
        return 0
    month = MONTHS.get(toks[-2])
    year = toks[-1]
    if month is None or not year.isdigit():
        return 0
    return int(year) * 100 + month


def _parse_refs(text: str) -> tuple[int, ...]:
    out: list[int] = []
    for tok in text.split(", "):
        digits = tok[3:]  # "RFC2818" -> "2818"
        if not digits.isdigit():
            continue
        out.append(int(digits))
    return tuple(out)
