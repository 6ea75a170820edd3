import math
from typing import Any, ClassVar, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict

from .enums import CellKind


class Decoded(NamedTuple):
    """Outcome of a typed cell access: the value, plus a problem when it fell back."""

    value: Any
    problem: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.problem is None


class Cell(BaseModel):
    """One loosely typed value of an upstream row.

    Accessors never raise: a cell of the wrong kind yields the zero value of
    the requested type together with a description of the mismatch.
    """

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[CellKind]

    @classmethod
    def from_json(cls, value: Any) -> "Cell":
        """Wraps a value produced by the JSON decoder."""
        if value is None:
            return NullCell()
        if isinstance(value, str):
            return TextCell(value=value)
        # bool is an int subclass, but JSON true/false is not a number
        if isinstance(value, bool):
            return OtherCell(raw_type="boolean")
        if isinstance(value, (int, float)):
            return NumberCell(value=value)
        if isinstance(value, list):
            return OtherCell(raw_type="array")
        if isinstance(value, dict):
            return OtherCell(raw_type="object")
        return OtherCell(raw_type=type(value).__name__)

    def describe(self) -> str:
        return self.kind.value

    def as_text(self) -> Decoded:
        return Decoded("", f"expected text, got {self.describe()}")

    def as_int(self) -> Decoded:
        return Decoded(0, f"expected number, got {self.describe()}")


class TextCell(Cell):
    kind: ClassVar[CellKind] = CellKind.TEXT
    value: str

    def as_text(self) -> Decoded:
        return Decoded(self.value)


class NumberCell(Cell):
    kind: ClassVar[CellKind] = CellKind.NUMBER
    value: Union[int, float]

    def as_int(self) -> Decoded:
        if isinstance(self.value, float) and not math.isfinite(self.value):
            return Decoded(0, f"expected finite number, got {self.value}")
        # int() truncates toward zero: 27.9 -> 27, -3.7 -> -3
        return Decoded(int(self.value))


class NullCell(Cell):
    kind: ClassVar[CellKind] = CellKind.NULL


class OtherCell(Cell):
    kind: ClassVar[CellKind] = CellKind.OTHER
    raw_type: str

    def describe(self) -> str:
        return self.raw_type
