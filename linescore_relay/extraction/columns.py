"""Positional layout of the upstream ``LineScore`` result-set.

The offsets are a contract with the upstream schema. They are constants,
checked once at startup by :func:`validate_columns`; they are never inferred
from the headers sent with a response.
"""

import re
from typing import Dict, List, NamedTuple

from linescore_relay.errors import ConfigurationError
from linescore_relay.models.enums import FieldKind
from linescore_relay.models.line_score import LineScore


class Column(NamedTuple):
    index: int
    header: str  # upstream header name expected at this index
    kind: FieldKind


DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
# strptime also accepts unpadded fields; the upstream format is fixed-width
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")
EXPECTED_ROW_WIDTH = 23

DATE_COLUMN = Column(0, "GAME_DATE_EST", FieldKind.DATE)

# LineScore field name -> column
LINE_SCORE_COLUMNS: Dict[str, Column] = {
    "team_abbr": Column(4, "TEAM_ABBREVIATION", FieldKind.TEXT),
    "team_city": Column(5, "TEAM_CITY_NAME", FieldKind.TEXT),
    "team_nickname": Column(6, "TEAM_NICKNAME", FieldKind.TEXT),
    "pts_qtr1": Column(8, "PTS_QTR1", FieldKind.INTEGER),
    "pts_qtr2": Column(9, "PTS_QTR2", FieldKind.INTEGER),
    "pts_qtr3": Column(10, "PTS_QTR3", FieldKind.INTEGER),
    "pts_qtr4": Column(11, "PTS_QTR4", FieldKind.INTEGER),
    "pts_ot1": Column(12, "PTS_OT1", FieldKind.INTEGER),
    "pts_ot2": Column(13, "PTS_OT2", FieldKind.INTEGER),
    "pts_ot3": Column(14, "PTS_OT3", FieldKind.INTEGER),
    "pts_ot4": Column(15, "PTS_OT4", FieldKind.INTEGER),
    "pts_ot5": Column(16, "PTS_OT5", FieldKind.INTEGER),
    "pts_ot6": Column(17, "PTS_OT6", FieldKind.INTEGER),
    "pts_ot7": Column(18, "PTS_OT7", FieldKind.INTEGER),
    "pts_ot8": Column(19, "PTS_OT8", FieldKind.INTEGER),
    "pts_ot9": Column(20, "PTS_OT9", FieldKind.INTEGER),
    "pts_ot10": Column(21, "PTS_OT10", FieldKind.INTEGER),
    "pts": Column(22, "PTS", FieldKind.INTEGER),
}

_KIND_BY_TYPE = {str: FieldKind.TEXT, int: FieldKind.INTEGER}


def validate_columns(
    columns: Dict[str, Column] = LINE_SCORE_COLUMNS,
    date_column: Column = DATE_COLUMN,
    row_width: int = EXPECTED_ROW_WIDTH,
) -> None:
    """Checks a column table against the LineScore model and the row width.

    Raises:
        ConfigurationError: listing every inconsistency found.
    """
    problems: List[str] = []
    model_fields = LineScore.model_fields

    missing = sorted(set(model_fields) - set(columns))
    if missing:
        problems.append(f"no column configured for fields: {', '.join(missing)}")

    if date_column.kind is not FieldKind.DATE:
        problems.append(f"date column must be of kind {FieldKind.DATE.value}")

    seen: Dict[int, str] = {date_column.index: "date"}
    if not 0 <= date_column.index < row_width:
        problems.append(
            f"date column index {date_column.index} outside row width {row_width}"
        )

    for name, column in columns.items():
        field = model_fields.get(name)
        if field is None:
            problems.append(f"column '{name}' does not match any LineScore field")
            continue
        expected_kind = _KIND_BY_TYPE.get(field.annotation)
        if column.kind is not expected_kind:
            problems.append(
                f"column '{name}' has kind {column.kind.value}, field expects "
                f"{expected_kind.value if expected_kind else field.annotation}"
            )
        if not 0 <= column.index < row_width:
            problems.append(
                f"column '{name}' index {column.index} outside row width {row_width}"
            )
        if column.index in seen:
            problems.append(
                f"column '{name}' index {column.index} already used by '{seen[column.index]}'"
            )
        else:
            seen[column.index] = name

    if problems:
        raise ConfigurationError("Invalid line score column table: " + "; ".join(problems))


def expected_headers(
    columns: Dict[str, Column] = LINE_SCORE_COLUMNS, date_column: Column = DATE_COLUMN
) -> Dict[int, str]:
    """Header name expected at each configured index."""
    headers = {date_column.index: date_column.header}
    headers.update({column.index: column.header for column in columns.values()})
    return headers
