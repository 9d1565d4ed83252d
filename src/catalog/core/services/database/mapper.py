"""Generic per-table data mapper.

Mappers are the only objects that issue statements against a table. They
flush but never commit: the transaction belongs to whoever owns the
session (see ``DbSessionService.session_scope``).
"""

from collections.abc import Sequence
from typing import ClassVar, Generic, TypeVar

from sqlmodel import Session, SQLModel

RowT = TypeVar("RowT", bound=SQLModel)


class TableMapper(Generic[RowT]):
    """Primary-key level operations shared by every table."""

    row_type: ClassVar[type[SQLModel]]

    def __init__(self, session: Session) -> None:
        self._session = session

    def select_by_primary_key(self, row_id: int | None) -> RowT | None:
        if row_id is None:
            return None
        return self._session.get(self.row_type, row_id)  # type: ignore[return-value]

    def insert(self, row: RowT) -> RowT:
        """Insert a row; its generated id is populated before this returns."""
        self._session.add(row)
        self._session.flush()
        return row

    def update_by_primary_key(self, row: RowT) -> RowT:
        merged = self._session.merge(row)
        self._session.flush()
        return merged

    def batch_insert(self, rows: Sequence[RowT]) -> list[RowT]:
        if not rows:
            return []
        self._session.add_all(rows)
        self._session.flush()
        return list(rows)
