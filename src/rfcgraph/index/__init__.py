"""Parsing of the RFC Editor's plain-text index (rfc-index.txt).

Each entry is a run of non-blank lines: a leading number and title, authors, a
"<Month> <Year>" date and a tail of parenthesised annotations such as
"(Obsoletes RFC2616)" or "(Updated by RFC8615)".
"""
