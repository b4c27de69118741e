from __future__ import annotations

import re

from ..errors import InvalidIdentifier

# letters/digits/underscore (unicode aware), plus `$`, `-` and inner spaces
_IDENT_RE = re.compile(r"^[\w$][\w $-]*$")


def validate_ident(name: str) -> str:
    if not isinstance(name, str) or not _IDENT_RE.match(name) or name != name.rstrip():
        raise InvalidIdentifier(f"invalid_identifier: {name!r}")
    return name


def quote_ident(name: str) -> str:
    """Double-quote a table/column name after checking it against the allow-list."""
    return f'"{validate_ident(name)}"'


def placeholders(n: int) -> str:
    return ",".join(["?"] * n)
