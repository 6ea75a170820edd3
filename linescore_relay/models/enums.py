from enum import Enum


class CellKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    NULL = "null"
    OTHER = "other"  # booleans, arrays and objects


class FieldKind(str, Enum):
    """Target type of a decoded line-score column."""

    TEXT = "text"
    INTEGER = "integer"
    DATE = "date"


class ResultSetName(str, Enum):
    LINE_SCORE = "LineScore"
    # Other result-sets of the box score summary are not consumed
