from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Settings:
    # Local copy of rfc-index.txt used by the CLI and web API.
    index_path: str = os.getenv("RFCGRAPH_INDEX_PATH", "./data/rfc-index.txt")

    # Source for `rfcgraph fetch`.
    index_url: str = os.getenv("RFCGRAPH_INDEX_URL", "https://www.rfc-editor.org/rfc-index.txt")
    fetch_timeout_s: float = float(os.getenv("RFCGRAPH_FETCH_TIMEOUT", "60"))

    # Default Graphviz rankdir (TB, LR, BT, RL); empty means none.
    direction: str = os.getenv("RFCGRAPH_DIRECTION", "")
