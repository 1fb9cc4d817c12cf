"""Single-line CSV splitting for bank statement rows.

Bank exports are parsed one physical line at a time: a comma inside a
double-quoted span is part of the field, every other comma is a separator.
Quote state simply toggles on each ``"``, so unbalanced quoting never raises;
the rest of the line is read in whatever state the scan ends up in.
"""

from __future__ import annotations


def _unquote(field: str) -> str:
    s = field.strip()
    if len(s) >= 2 and s.startswith('"') and s.endswith('"'):
        return s[1:-1].strip()
    return s


def split_csv_line(line: str) -> list[str]:
    """Split ``line`` into trimmed fields, honoring double-quoted commas.

    >>> split_csv_line('a,"b,c",d')
    ['a', 'b,c', 'd']

    Callers filter blank lines first; an empty string yields ``[""]``.
    """

    fields: list[str] = []
    start = 0
    in_quotes = False
    for i, ch in enumerate(line):
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            fields.append(line[start:i])
            start = i + 1
    fields.append(line[start:])
    return [_unquote(f) for f in fields]


__all__ = ["split_csv_line"]
