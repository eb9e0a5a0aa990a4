from .graph.dot import render
from .graph.search import FilterOptions, SearchResult, search
from .index.parser import parse_index
from .index.record import Record, RecordParseError, parse_record

__version__ = "0.1.0"

__all__ = [
    "FilterOptions",
    "Record",
    "RecordParseError",
    "SearchResult",
    "parse_index",
    "parse_record",
    "render",
    "search",
]
