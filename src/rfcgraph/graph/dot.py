from __future__ import annotations

from typing import Mapping

from ..index.record import RFC_URL, Record
from .search import SearchResult


DIRECTIONS = ("TB", "LR", "BT", "RL")

# Label text for numbers that were reached but are not in the directory.
MISSING = "undefined"


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def node_line(num: int, rec: Record | None) -> str:
    title = _escape(rec.title) if rec is not None else MISSING
    year = rec.year if rec is not None else MISSING
    url = RFC_URL.format(number=num)
    return f'    RFC{num} [label="RFC-{num}\\n{title}\\n({year})" URL="{url}"];'


def render(result: SearchResult, directory: Mapping[int, Record], direction: str | None = None) -> str:
    """Render a search result as Graphviz DOT.

    Nodes and edges keep the order of `result`. `direction` adds a rankdir
    line (TB, LR, BT or RL); None leaves the Graphviz default.
    """
    if direction is not None and direction not in DIRECTIONS:
        raise ValueError(f"direction must be one of {', '.join(DIRECTIONS)}, got {direction!r}")

    nodes = [node_line(num, directory.get(num)) for num in result.rfcs]
    updates = [f'    RFC{a} -> RFC{b} [label="update"];' for a, b in result.updates]
    obsoletes = [f'    RFC{a} -> RFC{b} [label="obsolete"];' for a, b in result.obsoletes]

    head = ["digraph G {"]
    if direction is not None:
        head.append(f'    rankdir="{direction}"')
    head.append("    node [shape=box];")

    parts = [
        "\n".join(head),
        "\n".join(nodes),
        "",
        "    // Updates",
        '    edge [style="dotted"];',
        "\n".join(updates),
        "",
        "    // Obsoletes",
        '    edge [color=gray, style="solid"];',
        "\n".join(obsoletes),
        "}",
    ]
    return "\n".join(parts) + "\n"
