import dataclasses
from pathlib import Path
from typing import Any


def create_app(*, default_index_path: str | None = None):
    # Lazy import so core CLI works without web deps.
    from fastapi import FastAPI
    from fastapi.responses import JSONResponse

    from ..config import Settings
    from ..graph.dot import DIRECTIONS, render
    from ..graph.search import FilterOptions, search
    from ..index.record import Record, RecordParseError
    from ..index.source import load_directory

    settings = Settings()
    # Requests cannot pick another file; only this index is served.
    index_default = default_index_path or settings.index_path

    app = FastAPI(title="rfcgraph", version="0.1.0")

    # (path, mtime) -> directory; the index only changes when re-fetched.
    cache: dict[tuple[str, float], dict[int, Record]] = {}

    def _directory(index_path: str) -> dict[int, Record]:
        p = Path(index_path)
        if not p.exists():
            raise FileNotFoundError(f"Index not found: {p}")
        key = (str(p.resolve()), p.stat().st_mtime)
        directory = cache.get(key)
        if directory is None:
            directory = load_directory(p)
            cache.clear()
            cache[key] = directory
        return directory

    def _error(msg: str, status_code: int = 400, **extra: Any) -> JSONResponse:
        return JSONResponse({"ok": False, "error": msg, **extra}, status_code=status_code)

    @app.get("/api/health")
    def health():
        path = index_default
        out: dict[str, Any] = {"ok": True, "index_path": path, "index_exists": Path(path).exists(), "records": 0}
        if out["index_exists"]:
            try:
                out["records"] = len(_directory(path))
            except RecordParseError as e:
                out["ok"] = False
                out["error"] = str(e)
        return out

    @app.get("/api/rfc/{number}")
    def rfc(number: int):
        try:
            directory = _directory(index_default)
        except FileNotFoundError as e:
            return _error(str(e), hint="Run `rfcgraph fetch` first.")
        except RecordParseError as e:
            return _error(f"Malformed index: {e}", status_code=500)

        rec = directory.get(int(number))
        if rec is None:
            return _error(f"RFC{number} not found", status_code=404)
        return {"ok": True, "rfc": {**dataclasses.asdict(rec), "url": rec.url}}

    def _run(payload: dict[str, Any]):
        directory = _directory(index_default)
        opts = FilterOptions.from_dict(payload)
        return directory, search(directory, opts)

    @app.post("/api/search")
    def search_endpoint(payload: dict[str, Any]):
        try:
            _, res = _run(payload)
        except FileNotFoundError as e:
            return _error(str(e), hint="Run `rfcgraph fetch` first.")
        except RecordParseError as e:
            return _error(f"Malformed index: {e}", status_code=500)
        except (TypeError, ValueError) as e:
            return _error(f"Invalid filter options: {e}")
        return {"ok": True, "result": res.to_dict()}

    @app.post("/api/dot")
    def dot_endpoint(payload: dict[str, Any]):
        direction = payload.get("direction") or settings.direction or None
        if direction is not None and direction not in DIRECTIONS:
            return _error(f"direction must be one of {', '.join(DIRECTIONS)}")

        try:
            directory, res = _run(payload)
        except FileNotFoundError as e:
            return _error(str(e), hint="Run `rfcgraph fetch` first.")
        except RecordParseError as e:
            return _error(f"Malformed index: {e}", status_code=500)
        except (TypeError, ValueError) as e:
            return _error(f"Invalid filter options: {e}")
        return {"ok": True, "dot": render(res, directory, direction=direction), "result": res.to_dict()}

    return app
