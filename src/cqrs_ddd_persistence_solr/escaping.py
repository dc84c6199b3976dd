"""Escaping of values embedded in Lucene/Solr query strings."""

from __future__ import annotations

import re

_TERM_SPECIAL = re.compile(r'(&&|\|\||[+\-!(){}\[\]^"~*?:\\/ ])')
_PHRASE_SPECIAL = re.compile(r'(["\\])')


def escape_term(value: str) -> str:
    """Backslash-escape every Lucene special character in a single term."""
    return _TERM_SPECIAL.sub(lambda m: "".join("\\" + c for c in m.group(1)), value)


def escape_phrase(value: str) -> str:
    """Quote *value* as a phrase, escaping quotes and backslashes."""
    return '"' + _PHRASE_SPECIAL.sub(r"\\\1", value) + '"'
