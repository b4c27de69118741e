from __future__ import annotations

# sqlbrowser/services/utils.py
import re

_MUTATION_RE = re.compile(r"^(insert|update|delete)\b", re.IGNORECASE)


def to_int_safe(x, default=None):
    try: return int(x)
    except (TypeError, ValueError): return default


def is_mutation(sql: str) -> bool:
    """INSERT/UPDATE/DELETE at the start of the statement, leading whitespace ignored."""
    return bool(_MUTATION_RE.match((sql or "").strip()))
