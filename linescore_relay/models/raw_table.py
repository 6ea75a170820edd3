from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .cells import Cell

Row = Tuple[Cell, ...]


class ResultSet(BaseModel):
    """One named table of the upstream document, as sent on the wire."""

    name: str
    headers: List[str] = []
    # Cells vary in type, so rows are kept as raw JSON arrays here
    row_set: List[List[Any]] = Field(default_factory=list, alias="rowSet")

    @field_validator("headers", "row_set", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        # The stats API sends null for result-sets without data
        return [] if value is None else value


class BoxScoreSummary(BaseModel):
    """Top level of the upstream box score summary document."""

    result_sets: List[ResultSet] = Field(..., alias="resultSets")

    def to_raw_table(self) -> "RawTable":
        return RawTable.from_result_sets(self.result_sets)


class RowSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    headers: Tuple[str, ...] = ()
    rows: Tuple[Row, ...] = ()


class RawTable(BaseModel):
    """Result-sets of one upstream fetch, keyed by name. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    row_sets: Dict[str, RowSet] = {}

    @classmethod
    def from_result_sets(cls, result_sets: List[ResultSet]) -> "RawTable":
        """Builds a table; result-sets sharing a name are concatenated in order."""
        merged: Dict[str, RowSet] = {}
        for result_set in result_sets:
            rows = tuple(
                tuple(Cell.from_json(value) for value in raw_row)
                for raw_row in result_set.row_set
            )
            existing = merged.get(result_set.name)
            if existing is None:
                merged[result_set.name] = RowSet(
                    headers=tuple(result_set.headers), rows=rows
                )
            else:
                merged[result_set.name] = RowSet(
                    headers=existing.headers, rows=existing.rows + rows
                )
        return cls(row_sets=merged)

    @classmethod
    def from_rows(cls, rows_by_name: Dict[str, List[List[Any]]]) -> "RawTable":
        """Builds a header-less table straight from raw JSON rows."""
        return cls.from_result_sets(
            [ResultSet(name=name, rowSet=rows) for name, rows in rows_by_name.items()]
        )

    def rows(self, name: str) -> Tuple[Row, ...]:
        """Returns the rows of the named result-set, or an empty tuple if absent."""
        row_set = self.row_sets.get(name)
        return row_set.rows if row_set is not None else ()

    def headers(self, name: str) -> Tuple[str, ...]:
        row_set = self.row_sets.get(name)
        return row_set.headers if row_set is not None else ()

    def names(self) -> List[str]:
        return list(self.row_sets)
