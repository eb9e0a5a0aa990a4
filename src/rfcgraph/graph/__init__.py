"""Relationship graph over parsed RFC records.

`search` selects RFCs by number/title and expands along update and obsolete
links; `render` turns the result into Graphviz DOT text. Both are pure
functions over an already parsed directory, so callers decide what to cache.
"""
