from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from ..index.record import Record


Edge = tuple[int, int]

_TERM_SPLIT_RE = re.compile(r",\s*")

_FLAG_STRINGS = {"true": True, "1": True, "false": False, "0": False}


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in _FLAG_STRINGS:
        return _FLAG_STRINGS[value.lower()]
    raise ValueError(f"expected a boolean, got {value!r}")


@dataclass(frozen=True)
class FilterOptions:
    from_: int | None = None
    to: int | None = None
    includes: str = ""
    excludes: str = ""
    search_ancestors: bool = False
    search_descendants: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FilterOptions:
        """Accept both the camelCase keys of the web form and snake_case keys."""

        def pick(*keys: str, default: Any = None) -> Any:
            for k in keys:
                if data.get(k) is not None:
                    return data[k]
            return default

        lo = pick("from", "from_")
        hi = pick("to")
        return cls(
            from_=(int(lo) if lo is not None else None),
            to=(int(hi) if hi is not None else None),
            includes=str(pick("includes", default="")),
            excludes=str(pick("excludes", default="")),
            search_ancestors=_flag(pick("searchAncestors", "search_ancestors", default=False)),
            search_descendants=_flag(pick("searchDescendants", "search_descendants", default=False)),
        )


@dataclass
class SearchResult:
    rfcs: list[int] = field(default_factory=list)
    updates: list[Edge] = field(default_factory=list)
    obsoletes: list[Edge] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rfcs": list(self.rfcs),
            "updates": [list(e) for e in self.updates],
            "obsoletes": [list(e) for e in self.obsoletes],
        }


def split_terms(text: str) -> list[str]:
    # "" means no constraint, not one empty term.
    if text == "":
        return []
    return [t.lower() for t in _TERM_SPLIT_RE.split(text)]


def matches(rec: Record, includes: list[str], excludes: list[str]) -> bool:
    num = str(rec.number)
    if num in includes and num not in excludes:
        return True
    title = rec.title.lower()
    return any(i in title for i in includes) and not any(e in title for e in excludes)


class _EdgeList:
    def __init__(self, edges: list[Edge]):
        self.edges = edges
        self._seen: set[Edge] = set()

    def add(self, a: int, b: int) -> None:
        if (a, b) in self._seen:
            return
        self._seen.add((a, b))
        self.edges.append((a, b))


def search(directory: Mapping[int, Record], options: FilterOptions) -> SearchResult:
    """Select seed records by number/title filters, then walk update/obsolete links.

    Ancestors follow `updates`/`obsoletes` (edge parent -> record), descendants
    follow `updated_by`/`obsoleted_by` (edge record -> child). Numbers missing
    from the directory are reported but not expanded.
    """
    result = SearchResult()
    updates = _EdgeList(result.updates)
    obsoletes = _EdgeList(result.obsoletes)

    includes = split_terms(options.includes)
    excludes = split_terms(options.excludes)

    seen: set[int] = set()
    queue: list[int] = []

    def visit(num: int) -> None:
        if num in seen:
            return
        seen.add(num)
        result.rfcs.append(num)
        if num in directory:
            queue.append(num)

    for num, rec in directory.items():
        if options.from_ is not None and num < options.from_:
            continue
        if options.to is not None and num > options.to:
            continue
        if matches(rec, includes, excludes):
            visit(num)

    while queue:
        batch = [directory[num] for num in queue]
        queue.clear()

        if options.search_ancestors:
            for rec in batch:
                for parent in rec.updates:
                    updates.add(parent, rec.number)
                    visit(parent)
                for parent in rec.obsoletes:
                    obsoletes.add(parent, rec.number)
                    visit(parent)

        if options.search_descendants:
            for rec in batch:
                for child in rec.updated_by:
                    updates.add(rec.number, child)
                    visit(child)
                for child in rec.obsoleted_by:
                    obsoletes.add(rec.number, child)
                    visit(child)

    result.rfcs.sort()
    return result
