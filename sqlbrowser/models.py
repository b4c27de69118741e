"""Result model: generic rows produced by SQLiteHandle.query."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

CellValue = Union[None, int, float, str]

ROWID_COLUMN = "rowid"


def _synthetic_id() -> str:
    # display-only, never written back to storage
    return f"tmp-{uuid.uuid4().hex}"


@dataclass(frozen=True)
class Row:
    """
    One result row: column name -> cell value.

    `rowid` is the natural identifier when the query selected a `rowid` column,
    otherwise `id` falls back to a synthetic token that only keeps list
    rendering stable within one result set.
    """
    values: Mapping[str, CellValue]
    rowid: Optional[int] = None
    synthetic_id: str = field(default_factory=_synthetic_id, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    @property
    def id(self) -> str:
        if self.rowid is not None:
            return str(self.rowid)
        return self.synthetic_id

    @property
    def has_natural_id(self) -> bool:
        return self.rowid is not None

    def get(self, column: str, default: Any = None) -> CellValue:
        return self.values.get(column, default)

    def __getitem__(self, column: str) -> CellValue:
        return self.values[column]

    def keys(self):
        return self.values.keys()

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "rowid": self.rowid, "values": dict(self.values)}

    @classmethod
    def from_values(cls, values: Mapping[str, CellValue]) -> "Row":
        rid = values.get(ROWID_COLUMN)
        if isinstance(rid, bool) or not isinstance(rid, int):
            rid = None
        return cls(values=values, rowid=rid)
