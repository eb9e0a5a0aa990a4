from __future__ import annotations

import logging
from pathlib import Path

import httpx

from .parser import parse_index
from .record import Record


logger = logging.getLogger(__name__)


class IndexFetchError(RuntimeError):
    pass


def fetch_index(url: str, dest: str | Path, *, timeout_s: float = 60.0) -> Path:
    """Download the index text to `dest` and return the path."""
    p = Path(dest)
    try:
        with httpx.Client(timeout=float(timeout_s), follow_redirects=True) as client:
            r = client.get(url)
    except httpx.HTTPError as e:
        raise IndexFetchError(f"Failed to download {url} ({e})") from e

    if r.status_code != 200:
        raise IndexFetchError(f"Download of {url} failed: HTTP {r.status_code}")

    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(r.text, encoding="utf-8")
    logger.info("Saved %d bytes from %s to %s", len(r.content), url, p)
    return p


def read_index(path: str | Path) -> str:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Index not found: {p}. Run `rfcgraph fetch --out {p}` first.")
    return p.read_text(encoding="utf-8", errors="replace")


def load_directory(path: str | Path) -> dict[int, Record]:
    return parse_index(read_index(path))
